import datetime

import pytest
from semver import Version

from nextver.compose import compose_version, increment, prerelease_label, timestamp_component
from nextver.errors import ConfigurationError
from nextver.models import ReleaseType


def test_increment_rules():
    assert str(increment("1.2.3", "major")) == "2.0.0"
    assert str(increment("1.2.3", "minor")) == "1.3.0"
    assert str(increment("1.2.3", "patch")) == "1.2.4"
    assert str(increment("1.2.3-rc.1", "major")) == "2.0.0"
    assert str(increment("1.2.3-rc.1", "minor")) == "1.3.0"


def test_patch_of_prerelease_only_drops_prerelease():
    assert str(increment("1.2.3-rc.1", "patch")) == "1.2.3"


def test_invalid_release_type():
    with pytest.raises(ConfigurationError):
        increment("1.0.0", "huge")
    with pytest.raises(ConfigurationError):
        compose_version("1.0.0", "")


def test_example_b_breaking_change():
    v = compose_version("2.0.0", ReleaseType.MAJOR)
    assert str(v.prior_version) == "2.0.0" and str(v.next_version) == "3.0.0"


def test_example_c_prerelease():
    when = datetime.datetime(2024, 3, 5, 8, 9, 10, tzinfo=datetime.timezone.utc)
    v = compose_version("1.0.0", "minor", label=prerelease_label("feature-foo"), committer_date=when)
    assert str(v.next_version) == "1.1.0-feature-foo.240305080910"
    assert v.next_tag("v") == "v1.1.0-feature-foo.240305080910"
    assert v.prerelease_label == "feature-foo"


def test_prerelease_does_not_double_increment():
    when = datetime.datetime(2024, 1, 2, 3, 4, 5)
    v = compose_version("1.4.0", "patch", label="main", committer_date=when)
    assert str(v.next_version) == "1.4.1-main.240102030405"


def test_prerelease_label_sanitizing():
    assert prerelease_label("refs/heads/feature/foo_bar") == "feature-foo-bar"
    assert prerelease_label("dependabot/npm@1.2") == "dependabot-npm-1-2"


def test_timestamp_is_utc():
    tz = datetime.timezone(datetime.timedelta(hours=2))
    when = datetime.datetime(2024, 3, 5, 10, 9, 10, tzinfo=tz)
    assert timestamp_component(when) == "240305080910"


def test_repeated_patch_is_monotonic():
    v = Version.parse("0.0.0")
    for _ in range(20):
        nxt = compose_version(v, "patch").next_version
        assert nxt > v
        v = nxt
    assert str(v) == "0.0.20"


@pytest.mark.parametrize("prior", ["0.0.0", "1.9.9", "3.0.0-alpha"])
@pytest.mark.parametrize("release_type", list(ReleaseType))
def test_next_never_below_prior(prior, release_type):
    v = compose_version(prior, release_type)
    assert v.next_version >= v.prior_version
