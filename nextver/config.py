import json
import os
from collections.abc import Mapping

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .models import ReleaseType

_TRUE = ("true", "True", "TRUE")
_FALSE = ("false", "False", "FALSE")


class Settings(BaseModel):
    # version calculation
    default_release_type: ReleaseType
    calculate_prerelease_version: bool = False
    branch_name: str | None = None
    tag_prefix: str = "v"
    fallback_to_no_prefix_search: bool = True

    # ref creation
    create_ref: bool = False
    include_major_release: bool = False
    github_token: str | None = None

    # runner context
    repository: str | None = None  # GITHUB_REPOSITORY (owner/repo)
    sha: str | None = None  # GITHUB_SHA or pull request head
    api_url: str = "https://api.github.com"  # GITHUB_API_URL
    output_path: str | None = None  # GITHUB_OUTPUT
    env_path: str | None = None  # GITHUB_ENV

    # structured logging toggle
    structured_logging: bool = True  # NEXTVER_STRUCT_LOG ("0" to disable)

    @field_validator("default_release_type", mode="before")
    @classmethod
    def _lower_release_type(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("tag_prefix", mode="before")
    @classmethod
    def _normalize_prefix(cls, v):
        # action.yml defaults to "v" so an empty prefix has to be spelled "none"
        if v is None:
            return ""
        v = v.strip()
        return "" if v.lower() == "none" else v

    @model_validator(mode="after")
    def _check_required(self):
        if self.calculate_prerelease_version and not self.branch_name:
            raise ValueError("branch-name is required when calculate-prerelease-version is true")
        if self.create_ref:
            if not self.github_token:
                raise ValueError("github-token is required when create-ref is true")
            if not self.repository or "/" not in self.repository:
                raise ValueError("GITHUB_REPOSITORY must be set to owner/repo when create-ref is true")
        return self

    @property
    def owner(self) -> str:
        return (self.repository or "").split("/", 1)[0]

    @property
    def repo(self) -> str:
        return (self.repository or "").split("/", 1)[-1]


def get_input(env: Mapping[str, str], name: str, required: bool = False) -> str:
    value = env.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    value = get_input(env, name)
    if not value:
        return default
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}",
        suggestion="Support boolean input list: `true | True | TRUE | false | False | FALSE`",
    )


def _pull_request_head_sha(event_path: str | None) -> str | None:
    if not event_path or not os.path.exists(event_path):
        return None
    with open(event_path, encoding="utf-8") as f:
        event = json.load(f)
    return (event.get("pull_request") or {}).get("head", {}).get("sha")


def settings_from_env(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the Actions input environment.

    Called once at the entry point; every option the pipeline needs flows from
    the returned value. Raises ConfigurationError on missing or invalid input.
    """
    env = os.environ if env is None else env
    release_type = get_input(env, "default-release-type", required=True)
    if release_type.lower() not in {r.value for r in ReleaseType}:
        raise ConfigurationError("The default release type must be set to major|minor|patch")

    prerelease = get_boolean_input(env, "calculate-prerelease-version")
    sha = env.get("GITHUB_SHA")
    if env.get("GITHUB_EVENT_NAME") == "pull_request":
        sha = _pull_request_head_sha(env.get("GITHUB_EVENT_PATH")) or sha

    try:
        return Settings(
            default_release_type=release_type,
            calculate_prerelease_version=prerelease,
            branch_name=get_input(env, "branch-name", required=prerelease) or None,
            tag_prefix=env.get("INPUT_TAG-PREFIX", "v"),
            fallback_to_no_prefix_search=get_boolean_input(
                env, "fallback-to-no-prefix-search", default=True
            ),
            create_ref=get_boolean_input(env, "create-ref"),
            include_major_release=get_boolean_input(env, "include-major-release"),
            github_token=get_input(env, "github-token") or None,
            repository=env.get("GITHUB_REPOSITORY"),
            sha=sha,
            api_url=env.get("GITHUB_API_URL") or "https://api.github.com",
            output_path=env.get("GITHUB_OUTPUT"),
            env_path=env.get("GITHUB_ENV"),
            structured_logging=env.get("NEXTVER_STRUCT_LOG", "1") != "0",
        )
    except ValidationError as e:
        raise ConfigurationError("; ".join(err["msg"] for err in e.errors())) from e
