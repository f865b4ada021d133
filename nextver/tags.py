import logging

from semver import Version

from .errors import VcsInvocationError
from .models import Tag

logger = logging.getLogger(__name__)

NO_TAGS_MSG = (
    "There do not appear to be any tags on the repository.  If that is not accurate, "
    "ensure fetch-depth: 0 is set on the checkout action."
)


def parse_tag(name: str, prefix: str = "") -> Tag:
    """Parse a tag name into a Tag; ``version`` is None when it is not SemVer."""
    raw = name[len(prefix):] if prefix and name.startswith(prefix) else name
    raw = raw.strip()
    # same leniency as `semver clean`: a single leading "=" or "v"
    if raw[:1] in ("=", "v", "V"):
        raw = raw[1:]
    try:
        version = Version.parse(raw)
    except (ValueError, TypeError):
        return Tag(name=name)
    version = version.replace(build=None)
    return Tag(name=name, version=version, prerelease=version.prerelease is not None)


def list_tags(git, prefix: str = "", fallback_to_no_prefix_search: bool = False) -> list[str]:
    if prefix:
        logger.info("Searching for tags with prefix '%s'...", prefix)
    else:
        logger.info("Searching for tags...")
    try:
        tags = git.list_tags(prefix or None)
        if not tags and prefix and fallback_to_no_prefix_search:
            logger.info(
                "No tags were found with the prefix '%s'.  Falling back to searching with no prefix...",
                prefix,
            )
            tags = git.list_tags(None)
    except VcsInvocationError as e:
        logger.error("An error occurred listing the tags for the repository: %s", e.message)
        return []
    if not tags:
        logger.warning(NO_TAGS_MSG)
        return []
    logger.info("The following tags exist on the repository:\n%s\n", "\n".join(tags))
    return tags


def scan_release_tags(git, prefix: str = "", fallback_to_no_prefix_search: bool = False) -> list[Tag]:
    """Stable SemVer release tags, highest precedence first."""
    tags = [parse_tag(name, prefix) for name in list_tags(git, prefix, fallback_to_no_prefix_search)]
    stable = [t for t in tags if t.version is not None and not t.prerelease]
    return sorted(stable, key=lambda t: t.version, reverse=True)
