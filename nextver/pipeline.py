import asyncio
import logging

from . import github_client
from .ancestry import resolve_base
from .classify import determine_release_type
from .compose import DEFAULT_PRIOR_VERSION, compose_version, prerelease_label
from .config import Settings
from .errors import NextVersionError
from .models import RefResult, ResolvedBase, VersionResult
from .tags import scan_release_tags

logger = logging.getLogger(__name__)


def find_prior_release(git, settings: Settings, head: str = "HEAD") -> ResolvedBase | None:
    tags = scan_release_tags(git, settings.tag_prefix, settings.fallback_to_no_prefix_search)
    if not tags:
        return None
    return resolve_base(git, tags, head)


def resolve_next_version(git, settings: Settings, head: str = "HEAD") -> VersionResult:
    """Compute the next version for ``head``. No remote calls are made here."""
    label = None
    committer_date = None
    if settings.calculate_prerelease_version:
        logger.info("Calculating a pre-release version for %s...", settings.branch_name)
        label = prerelease_label(settings.branch_name)
        committer_date = git.commit_metadata(head).committer_date
    else:
        logger.info("Calculating a release version...")

    base = find_prior_release(git, settings, head)
    if base is None:
        prior = DEFAULT_PRIOR_VERSION
        release_type = settings.default_release_type
        logger.info("\nPrior release version default: %s", prior)
    else:
        prior = base.version
        release_type = determine_release_type(git, base.commit.abbreviated_hash, head)
        logger.info("\nPrior release version: %s", prior)
    logger.info("Release Type: %s", release_type)

    version = compose_version(prior, release_type, label=label, committer_date=committer_date)
    logger.info("Tag Prefix: '%s'", settings.tag_prefix)
    if label is not None:
        logger.info("Cleaned Branch Name: '%s'", label)
        logger.info("Next Pre-release Version: %s", version.next_tag(settings.tag_prefix))
    else:
        logger.info("Next Release Version: %s", version.next_tag(settings.tag_prefix))
    return VersionResult(version=version, base=base, tag_prefix=settings.tag_prefix)


async def publish_refs(settings: Settings, result: VersionResult) -> list[RefResult]:
    """Create the version tag (and optionally move the major tag) on GitHub.

    Each call's outcome is recorded on its RefResult; failures never undo the
    computed version. The major tag is only attempted after the version tag
    succeeded.
    """
    wanted = [(result.version.next_tag(settings.tag_prefix), False)]
    if settings.include_major_release:
        wanted.append((result.version.major_tag(settings.tag_prefix), True))

    refs = []
    for tag, upsert in wanted:
        ref = RefResult(ref=tag, upsert=upsert)
        refs.append(ref)
        if refs[0] is not ref and not refs[0].ok:
            ref.error = f"skipped because {refs[0].ref} was not created"
            continue
        try:
            ref.action = await github_client.create_ref_on_github(
                settings.github_token,
                settings.owner,
                settings.repo,
                tag,
                settings.sha,
                upsert=upsert,
                api_url=settings.api_url,
            )
            ref.ok = True
        except NextVersionError as e:
            logger.error("Creating the ref %s failed: %s", tag, e.message)
            ref.error = e.message
    return refs


def run(git, settings: Settings, head: str = "HEAD") -> VersionResult:
    """Compute the version, then create refs when enabled. The caller emits outputs."""
    result = resolve_next_version(git, settings, head)
    if settings.create_ref:
        if not settings.sha:
            tag = result.version.next_tag(settings.tag_prefix)
            logger.error("Cannot create the ref %s: GITHUB_SHA is not set", tag)
            result.refs = [RefResult(ref=tag, error="GITHUB_SHA is not set")]
        else:
            result.refs = asyncio.run(publish_refs(settings, result))
    return result
