import logging
import uuid

from .models import ComposedVersion

logger = logging.getLogger(__name__)


def output_entries(version: ComposedVersion, tag_prefix: str = "") -> list[tuple[str, str]]:
    """Named outputs, prefixed first, then the ``_NO_PREFIX`` variants."""
    nxt = version.next_version
    base = [
        ("NEXT_VERSION", str(nxt)),
        ("NEXT_MINOR_VERSION", f"{nxt.major}.{nxt.minor}"),
        ("NEXT_MAJOR_VERSION", str(nxt.major)),
        ("PRIOR_VERSION", str(version.prior_version)),
    ]
    return [(name, f"{tag_prefix}{value}") for name, value in base] + [
        (f"{name}_NO_PREFIX", value) for name, value in base
    ]


def _format_line(name: str, value: str) -> str:
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def append_file_command(path: str | None, name: str, value: str) -> bool:
    """Append one key/value to a runner command file (GITHUB_OUTPUT, GITHUB_ENV)."""
    if not path:
        return False
    with open(path, "a", encoding="utf-8") as f:
        f.write(_format_line(name, value))
    return True


def emit_outputs(
    entries: list[tuple[str, str]], output_path: str | None = None, env_path: str | None = None
) -> None:
    if not output_path:
        logger.debug("GITHUB_OUTPUT is not set; step outputs are skipped")
    if not env_path:
        logger.debug("GITHUB_ENV is not set; environment exports are skipped")
    logger.info("\nFinished examining the git history.  The following outputs will be set:")
    for name, value in entries:
        append_file_command(output_path, name, value)
        append_file_command(env_path, name, value)
        logger.info("%s %s", name, value)


def annotate(level: str, message: str) -> str:
    """Workflow command line for an ``error`` or ``warning`` annotation."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    return f"::{level}::{escaped}"
