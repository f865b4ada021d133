import datetime
import logging
import subprocess

from .errors import VcsInvocationError
from .models import Commit, CommitMetadata

logger = logging.getLogger(__name__)

# field and record separators used in --format strings
FS = "\x1d"
RS = "\x1e"

LOG_FORMAT = FS.join(["%H", "%h", "%an", "%ae", "%at", "%cn", "%ce", "%ct", "%B", "%N"]) + RS


def _from_unix(value: str) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(int(value), tz=datetime.timezone.utc)


class Git:
    """Thin wrapper over the git CLI for the queries the resolver needs.

    Every call is a blocking subprocess invocation in ``cwd``. Any unexpected
    exit status raises VcsInvocationError.
    """

    def __init__(self, cwd: str | None = None, executable: str = "git"):
        self.cwd = cwd
        self.executable = executable

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.executable, *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise VcsInvocationError(args, -1, str(e)) from e

    def run(self, args: list[str], strip: bool = True) -> str:
        proc = self._run(args)
        if proc.returncode != 0:
            raise VcsInvocationError(args, proc.returncode, proc.stderr)
        return proc.stdout.strip() if strip else proc.stdout

    def list_tags(self, prefix: str | None = None) -> list[str]:
        args = ["tag", "-l", f"{prefix}*"] if prefix else ["tag"]
        out = self.run(args)
        return [t.strip() for t in out.splitlines() if t.strip()]

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        args = ["merge-base", "--is-ancestor", ancestor, descendant]
        proc = self._run(args)
        if proc.returncode == 0:
            return True
        if proc.returncode == 1:
            return False
        raise VcsInvocationError(args, proc.returncode, proc.stderr)

    def commit_metadata(self, ref: str) -> CommitMetadata:
        # abbreviated hash, author date and committer date as unix timestamps
        lines = self.run(["log", "-1", "--format=%h%n%at%n%ct", ref]).splitlines()
        return CommitMetadata(
            abbreviated_hash=lines[0],
            author_date=_from_unix(lines[1]),
            committer_date=_from_unix(lines[2]),
        )

    def log_between(self, base: str, final: str) -> list[Commit]:
        """Commits reachable from ``final`` but not ``base``, newest first."""
        # raw output: str.strip() would also eat the separator characters
        out = self.run(["log", f"{base}..{final}", f"--format={LOG_FORMAT}"], strip=False)
        commits = []
        for record in out.split(RS):
            record = record.strip("\n")
            if not record:
                continue
            props = record.split(FS)
            if len(props) < 10:
                logger.debug("Ignoring malformed log record: %r", record)
                continue
            commits.append(
                Commit(
                    hash=props[0],
                    abbreviated_hash=props[1],
                    author_name=props[2],
                    author_email=props[3],
                    author_date=_from_unix(props[4]),
                    committer_name=props[5],
                    committer_email=props[6],
                    committer_date=_from_unix(props[7]),
                    raw_body=props[8],
                    notes=props[9],
                )
            )
        return commits
