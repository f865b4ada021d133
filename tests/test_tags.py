from semver import Version

from nextver.tags import parse_tag, scan_release_tags


def test_parse_tag_strips_prefix_and_build():
    t = parse_tag("v1.2.3+build.7", "v")
    assert t.version == Version(1, 2, 3)
    assert t.prerelease is False
    assert t.name == "v1.2.3+build.7"


def test_parse_tag_prerelease_and_invalid():
    assert parse_tag("v1.3.0-beta.1", "v").prerelease is True
    assert parse_tag("v1.2", "v").version is None
    assert parse_tag("latest", "v").version is None


def test_parse_tag_clean_leniency_without_prefix():
    # unprefixed search still accepts a leading v like `semver clean`
    assert parse_tag("v2.0.0", "").version == Version(2, 0, 0)
    assert parse_tag(" 2.0.1 ", "").version == Version(2, 0, 1)


def test_scan_sorts_descending_and_drops_prereleases(fake_git):
    git = fake_git(tags=["v1.2.0", "v1.10.0", "v1.3.0-beta.1", "v1.9.9", "vnext", "v0.1.0"])
    tags = scan_release_tags(git, "v")
    assert [t.name for t in tags] == ["v1.10.0", "v1.9.9", "v1.2.0", "v0.1.0"]
    assert all(not t.prerelease and t.version is not None for t in tags)


def test_scan_prefix_filter(fake_git):
    git = fake_git(tags=["api-1.0.0", "web-2.0.0"])
    assert [t.name for t in scan_release_tags(git, "api-")] == ["api-1.0.0"]


def test_scan_falls_back_to_unprefixed_search(fake_git, caplog):
    git = fake_git(tags=["1.0.0", "1.1.0"])
    caplog.set_level("INFO")
    assert scan_release_tags(git, "v", fallback_to_no_prefix_search=False) == []
    tags = scan_release_tags(git, "v", fallback_to_no_prefix_search=True)
    assert [t.name for t in tags] == ["1.1.0", "1.0.0"]
    assert "Falling back to searching with no prefix" in caplog.text


def test_scan_no_tags_warns(fake_git, caplog):
    caplog.set_level("INFO")
    assert scan_release_tags(fake_git(), "v", True) == []
    assert "fetch-depth: 0" in caplog.text


def test_scan_git_failure_degrades_to_no_tags(fake_git, caplog):
    git = fake_git(tags=["v1.0.0"], fail_on={"list_tags"})
    assert scan_release_tags(git, "v") == []
    assert "An error occurred listing the tags" in caplog.text
