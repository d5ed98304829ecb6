"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py (EngineConfig, LoggingConfig).
"""

from pathlib import Path

# =============================================================================
# Config file locations
# =============================================================================

PROJECT_CONFIG_FILENAME = "interpose.yaml"
"""Config file looked up in the project root (current directory by default)."""

GLOBAL_CONFIG_PATH = Path("~/.config/interpose/config.yaml")
"""Per-user config file, expanded at load time."""

ENV_PREFIX = "INTERPOSE__"
"""Prefix of environment variable overrides."""

# =============================================================================
# Internal attribute names
# =============================================================================
# Names used to stash state on user objects. Dunder-style to stay out of the
# way of ordinary attributes.

PENDING_ATTR = "__interpose_pending__"
"""Attribute carrying not-yet-registered interceptors on functions and classes."""

STATE_SLOT = "__interpose_state__"
"""Slot on façade instances holding their InstanceState."""

ORIGINAL_ATTR = "__interpose_original__"
"""Attribute on façade types pointing at the wrapped class."""
