import datetime

import pytest

from nextver.errors import VcsInvocationError
from nextver.models import Commit, CommitMetadata

UTC = datetime.timezone.utc


class FakeGit:
    """In-memory stand-in for nextver.git.Git."""

    def __init__(self, tags=(), ancestors=(), commits=(), head_date=None, fail_on=()):
        self.tags = list(tags)
        self.ancestors = set(ancestors)
        self.commits = list(commits)
        self.head_date = head_date or datetime.datetime(2024, 3, 5, 8, 9, 10, tzinfo=UTC)
        self.fail_on = set(fail_on)
        self.calls = []

    def _maybe_fail(self, name, args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise VcsInvocationError([name, *args], 128, "fatal: boom")

    def list_tags(self, prefix=None):
        self._maybe_fail("list_tags", (prefix,))
        if prefix:
            return [t for t in self.tags if t.startswith(prefix)]
        return list(self.tags)

    def is_ancestor(self, ancestor, descendant):
        self._maybe_fail("is_ancestor", (ancestor, descendant))
        return ancestor in self.ancestors

    def commit_metadata(self, ref):
        self._maybe_fail("commit_metadata", (ref,))
        return CommitMetadata(
            abbreviated_hash=f"abc{len(ref)}",
            author_date=self.head_date,
            committer_date=self.head_date,
        )

    def log_between(self, base, final):
        self._maybe_fail("log_between", (base, final))
        return list(self.commits)


def make_commit(body="", notes="", n=0):
    when = datetime.datetime(2024, 1, 1, tzinfo=UTC) + datetime.timedelta(minutes=n)
    return Commit(
        hash=f"{n:040x}",
        abbreviated_hash=f"{n:07x}",
        author_name="Dev",
        author_email="dev@example.com",
        author_date=when,
        committer_name="Dev",
        committer_email="dev@example.com",
        committer_date=when,
        raw_body=body,
        notes=notes,
    )


@pytest.fixture
def fake_git():
    return FakeGit


@pytest.fixture
def commit():
    return make_commit
