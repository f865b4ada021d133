import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from semver import Version


class ReleaseType(str, Enum):
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other):
        if not isinstance(other, ReleaseType):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, ReleaseType):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other):
        if not isinstance(other, ReleaseType):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other):
        if not isinstance(other, ReleaseType):
            return NotImplemented
        return self.severity >= other.severity

    def __str__(self) -> str:
        return self.value


_SEVERITY = {ReleaseType.PATCH: 0, ReleaseType.MINOR: 1, ReleaseType.MAJOR: 2}


class Tag(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    version: Version | None = None
    prerelease: bool = False


class CommitMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    abbreviated_hash: str
    author_date: datetime.datetime
    committer_date: datetime.datetime


class Commit(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    abbreviated_hash: str
    author_name: str = ""
    author_email: str = ""
    author_date: datetime.datetime
    committer_name: str = ""
    committer_email: str = ""
    committer_date: datetime.datetime
    raw_body: str = ""
    notes: str = ""


class ResolvedBase(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag: Tag
    commit: CommitMetadata
    version: Version


class ComposedVersion(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    prior_version: Version
    next_version: Version
    release_type: ReleaseType
    prerelease_label: str | None = None

    def next_tag(self, prefix: str = "") -> str:
        return f"{prefix}{self.next_version}"

    def major_tag(self, prefix: str = "") -> str:
        return f"{prefix}{self.next_version.major}"


class RefResult(BaseModel):
    ref: str
    upsert: bool = False
    ok: bool = False
    action: str | None = None  # created | updated
    error: str | None = None


class VersionResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    version: ComposedVersion
    base: ResolvedBase | None = None
    tag_prefix: str = ""
    refs: list[RefResult] = []

    @property
    def refs_ok(self) -> bool:
        return all(r.ok for r in self.refs)
