"""Project config template (``interpose.yaml``)."""

from pathlib import Path

from interpose.config.models import EngineConfig, LoggingConfig

TEMPLATE_HEADER = """\
# interpose configuration
# Every key can also be set through the environment, e.g.
#   INTERPOSE__ENGINE__TRACE_CHAINS=true

"""


def render_template() -> str:
    """Render the commented default configuration."""
    engine = EngineConfig()
    log_config = LoggingConfig()
    lines = [TEMPLATE_HEADER.rstrip("\n"), ""]

    lines.append("logging:")
    lines.append("  # DEBUG, INFO, WARNING, ERROR or CRITICAL")
    lines.append(f"  level: {log_config.level}")
    lines.append("  outputs:")
    lines.append("    - format: console  # console or json")
    lines.append("      destination: stderr  # stderr, stdout or an absolute file path")
    lines.append("")

    lines.append("engine:")
    for name, field in EngineConfig.model_fields.items():
        if field.description:
            lines.append(f"  # {field.description}")
        lines.append(f"  {name}: {str(getattr(engine, name)).lower()}")
    lines.append("")

    return "\n".join(lines)


def write_template(path: Path) -> None:
    """Write the commented default configuration to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_template())
