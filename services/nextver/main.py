import json
import logging
import os
import sys

from dotenv import load_dotenv

from nextver.config import Settings, settings_from_env
from nextver.errors import ConfigurationError
from nextver.git import Git
from nextver.models import VersionResult
from nextver.outputs import annotate, emit_outputs, output_entries
from nextver.pipeline import run

logger = logging.getLogger("nextver")
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


def _log_result(settings: Settings, result: VersionResult) -> None:
    if not settings.structured_logging:
        return
    logger.info(
        json.dumps(
            {
                "event": "version_result",
                "prior_version": str(result.version.prior_version),
                "next_version": str(result.version.next_version),
                "release_type": str(result.version.release_type),
                "prerelease_label": result.version.prerelease_label,
                "base_tag": result.base.tag.name if result.base else None,
                "tag_prefix": result.tag_prefix,
                "refs": [r.model_dump() for r in result.refs],
            }
        )
    )


def calculate(settings: Settings, git: Git | None = None) -> int:
    """Run the pipeline and emit outputs; returns the process exit status.

    Outputs are emitted whenever a version was computed, also when creating
    a ref on GitHub failed afterwards. That failure still exits with 1.
    """
    git = git or Git(os.getenv("GITHUB_WORKSPACE") or None)
    version_txt = "pre-release" if settings.calculate_prerelease_version else "release"
    try:
        result = run(git, settings)
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        print(annotate("error", f"An error occurred calculating the next {version_txt} version: {message}"))
        return 1

    emit_outputs(
        output_entries(result.version, settings.tag_prefix),
        output_path=settings.output_path,
        env_path=settings.env_path,
    )
    _log_result(settings, result)

    failed = [r for r in result.refs if not r.ok]
    for r in failed:
        print(annotate("error", f"An error occurred creating the ref {r.ref} on GitHub: {r.error}"))
    return 1 if failed else 0


def main() -> int:
    # Convenience CLI entrypoint: `nextver`
    load_dotenv()
    try:
        settings = settings_from_env()
    except ConfigurationError as e:
        print(annotate("error", e.message))
        return 1
    return calculate(settings)


if __name__ == "__main__":
    sys.exit(main())
