import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .models import Commit, ReleaseType

logger = logging.getLogger(__name__)

# GitVersion's +semver: markers plus Angular style headers, as imitated by
# semantic-release.
MAJOR_PATTERNS = (
    re.compile(r"\+semver:\s*(breaking|major)", re.IGNORECASE),  # +semver:breaking, +semver:major
    re.compile(r"BREAKING CHANGES?:?"),  # BREAKING CHANGE:, BREAKING CHANGES
)
MINOR_PATTERNS = (
    re.compile(r"\+semver:\s*(feature|minor)", re.IGNORECASE),  # +semver:feature, +semver:minor
    re.compile(r"feat\([^)]*\):\s"),  # feat(area): something, feat(): something
    re.compile(r"feature\([^)]*\):\s"),  # feature(area): something
    re.compile(r"^feat:\s.+", re.MULTILINE),  # feat: something, at the start of a line
    re.compile(r"^feature:\s.+", re.MULTILINE),  # feature: something, at the start of a line
)

PATTERNS = {ReleaseType.MAJOR: MAJOR_PATTERNS, ReleaseType.MINOR: MINOR_PATTERNS}


@dataclass(frozen=True)
class Match:
    release_type: ReleaseType
    pattern: str
    field: str  # body | notes


def escalate(current: ReleaseType, candidate: ReleaseType) -> ReleaseType:
    return max(current, candidate)


def is_terminal(state: ReleaseType) -> bool:
    """Scanning stops only once the state has escalated to major."""
    return state is ReleaseType.MAJOR


def match_commit(commit: Commit) -> Match | None:
    """Strongest pattern set matching the commit body or notes, if any."""
    for release_type in (ReleaseType.MAJOR, ReleaseType.MINOR):
        for pattern in PATTERNS[release_type]:
            for field, text in (("body", commit.raw_body), ("notes", commit.notes)):
                if text and pattern.search(text):
                    return Match(release_type, pattern.pattern, field)
    return None


def _log_match(commit: Commit, match: Match) -> None:
    logger.info(
        "Commit %s matches the %s pattern %r in its %s:",
        commit.abbreviated_hash,
        match.release_type,
        match.pattern,
        match.field,
    )
    if commit.raw_body:
        logger.info('\tBody:"%s"', commit.raw_body.strip())
    if commit.notes:
        logger.info('\tNotes:"%s"', commit.notes.strip())


def classify_commits(commits: Iterable[Commit]) -> ReleaseType:
    state = ReleaseType.PATCH
    for commit in commits:
        match = match_commit(commit)
        if match is None:
            continue
        _log_match(commit, match)
        state = escalate(state, match.release_type)
        if is_terminal(state):
            break
    return state


def determine_release_type(git, base: str, head: str = "HEAD") -> ReleaseType:
    """Release type implied by the commits in ``base..head``."""
    return classify_commits(git.log_between(base, head))
