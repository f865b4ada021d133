import logging
from collections.abc import Iterable

from .models import ResolvedBase, Tag

logger = logging.getLogger(__name__)


def resolve_base(git, tags: Iterable[Tag], head: str = "HEAD") -> ResolvedBase | None:
    """Return the first tag in ``tags`` that is an ancestor of ``head``.

    ``tags`` must already be sorted highest precedence first, so the first hit
    is the highest eligible release. Returns None when no stable release exists
    in the history of ``head``. Git failures propagate.
    """
    for tag in tags:
        if git.is_ancestor(tag.name, head):
            return ResolvedBase(tag=tag, commit=git.commit_metadata(tag.name), version=tag.version)
        logger.info("Skipping %s because it is not an ancestor of %s", tag.name, head)
    return None
