import datetime
import re

from semver import Version

from .errors import ConfigurationError
from .models import ComposedVersion, ReleaseType

DEFAULT_PRIOR_VERSION = "0.0.0"

_LABEL_INVALID = re.compile(r"[^a-zA-Z0-9-]")


def coerce_release_type(value) -> ReleaseType:
    if isinstance(value, ReleaseType):
        return value
    try:
        return ReleaseType(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Invalid release type {value!r}: must be set to major|minor|patch"
        ) from None


def increment(version: Version | str, release_type: ReleaseType | str) -> Version:
    """Standard (non-prerelease) SemVer increment.

    A patch bump of a prerelease only drops the prerelease part, so
    1.2.3-rc.1 becomes 1.2.3. Build metadata never survives.
    """
    release_type = coerce_release_type(release_type)
    if isinstance(version, str):
        version = Version.parse(version)
    if release_type is ReleaseType.MAJOR:
        return version.bump_major()
    if release_type is ReleaseType.MINOR:
        return version.bump_minor()
    if version.prerelease:
        return version.finalize_version()
    return version.bump_patch()


def prerelease_label(branch_name: str) -> str:
    """Branch name reduced to characters valid in a prerelease identifier."""
    return _LABEL_INVALID.sub("-", branch_name.replace("refs/heads/", "", 1))


def timestamp_component(when: datetime.datetime) -> str:
    """``YYMMDDHHmmss`` in UTC; naive datetimes are taken as UTC."""
    if when.tzinfo is not None:
        when = when.astimezone(datetime.timezone.utc)
    return when.strftime("%y%m%d%H%M%S")


def compose_version(
    prior_version: Version | str,
    release_type: ReleaseType | str,
    label: str | None = None,
    committer_date: datetime.datetime | None = None,
) -> ComposedVersion:
    """Next version from the prior release.

    With ``label`` the stable increment is computed first and
    ``-{label}.{timestamp}`` appended, the timestamp coming from
    ``committer_date`` (the HEAD commit).
    """
    release_type = coerce_release_type(release_type)
    if isinstance(prior_version, str):
        prior_version = Version.parse(prior_version)
    next_version = increment(prior_version, release_type)
    if label is not None:
        if committer_date is None:
            raise ValueError("committer_date is required for a prerelease version")
        next_version = next_version.replace(prerelease=f"{label}.{timestamp_component(committer_date)}")
    return ComposedVersion(
        prior_version=prior_version,
        next_version=next_version,
        release_type=release_type,
        prerelease_label=label,
    )
