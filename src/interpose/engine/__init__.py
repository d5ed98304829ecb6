"""Interception engine exports."""

from interpose.engine.chain import ChainContext
from interpose.engine.context import AccessContext, InvocationContext
from interpose.engine.decorators import access, after, around, before, getter, proxy, setter
from interpose.engine.facade import InstanceState, is_facade_type, unwrap, wrap_class
from interpose.engine.registry import (
    AccessInterceptor,
    InterceptorTable,
    MethodInterceptor,
    Override,
    OverrideRegistry,
    registry,
)

__all__ = [
    # Chains
    "AccessContext",
    "ChainContext",
    "InvocationContext",
    # Registry
    "AccessInterceptor",
    "InterceptorTable",
    "MethodInterceptor",
    "Override",
    "OverrideRegistry",
    "registry",
    # Wrapping
    "InstanceState",
    "is_facade_type",
    "unwrap",
    "wrap_class",
    # Declarative layer
    "access",
    "after",
    "around",
    "before",
    "getter",
    "proxy",
    "setter",
]
