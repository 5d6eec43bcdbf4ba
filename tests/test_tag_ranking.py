"""
Tests for the tag ranking engine.

Covers version parsing of tag names, name-string ordering, the since
filter and per-tag failure collection.
"""

import semver

from core.domain.models import RankingOptions, RawTag
from core.services.tag_ranking import parse_tag_version, rank_tags


def _tags(*names):
    return [RawTag(name=name, message=f"msg {name}") for name in names]


def _names(tags):
    return [tag.name for tag in tags]


class TestParseTagVersion:
    """Tests for parse_tag_version"""

    def test_leading_v_is_stripped(self):
        assert parse_tag_version("v1.2.3") == semver.Version(1, 2, 3)

    def test_plain_version(self):
        assert parse_tag_version("1.2.3") == semver.Version(1, 2, 3)

    def test_prerelease_and_build(self):
        version = parse_tag_version("v2.0.0-rc.1+build.5")
        assert version.prerelease == "rc.1"
        assert version.build == "build.5"

    def test_only_first_v_is_removed(self):
        """`vv1.0.0` becomes `v1.0.0`, which is not a version"""
        try:
            parse_tag_version("vv1.0.0")
        except ValueError:
            pass
        else:
            raise AssertionError("vv1.0.0 should not parse")

    def test_first_v_anywhere_in_name_is_removed(self):
        """The first `v` is dropped even when it is not leading"""
        assert parse_tag_version("1.0.0-dev") == semver.Version(1, 0, 0, prerelease="de")

    def test_leading_zeros_rejected(self):
        for name in ("v01.0.0", "1.02.0", "1.0"):
            try:
                parse_tag_version(name)
            except ValueError:
                continue
            raise AssertionError(f"{name} should not parse")


class TestRankTagsSemver:
    """Tests for rank_tags with semantic-version sorting enabled"""

    def test_sorts_descending_by_name_string(self):
        """Names are compared as strings: v9 > v10 > v1"""
        result = rank_tags(_tags("v1.0.0", "v9.0.0", "v10.0.0"))
        assert _names(result.selected) == ["v9.0.0", "v10.0.0", "v1.0.0"]

    def test_string_order_differs_from_version_order(self):
        result = rank_tags(_tags("1.9.0", "1.10.0"))
        assert _names(result.selected) == ["1.9.0", "1.10.0"]

    def test_since_is_inclusive(self):
        options = RankingOptions(since="1.0.0")
        result = rank_tags(_tags("1.0.0"), options)
        assert _names(result.selected) == ["1.0.0"]

    def test_since_filters_older_tags(self):
        options = RankingOptions(since="1.1.0")
        result = rank_tags(_tags("v1.0.0", "v1.1.0", "v1.2.0", "v1.1.0-rc.1"), options)
        assert _names(result.selected) == ["v1.2.0", "v1.1.0"]

    def test_unparsable_name_is_reported_and_excluded(self):
        result = rank_tags(_tags("abc", "v1.0.0"))
        assert _names(result.selected) == ["v1.0.0"]
        assert len(result.failures) == 1
        assert result.failures[0].name == "abc"
        assert "abc" in result.failures[0].error

    def test_failed_tag_is_kept_without_version(self):
        result = rank_tags(_tags("abc", "v1.0.0"))
        parsed = {tag.name: tag for tag in result.parsed}
        assert parsed["abc"].version is None
        assert parsed["v1.0.0"].version == semver.Version(1, 0, 0)

    def test_messages_are_carried(self):
        result = rank_tags(_tags("v1.0.0"))
        assert result.selected[0].message == "msg v1.0.0"

    def test_default_since_admits_every_parsed_tag(self):
        result = rank_tags(_tags("v0.0.0", "v0.0.1-alpha", "v3.0.0"))
        assert _names(result.selected) == ["v3.0.0", "v0.0.1-alpha", "v0.0.0"]

    def test_prerelease_of_zero_is_below_default_since(self):
        """0.0.0-alpha < 0.0.0 under semver precedence"""
        result = rank_tags(_tags("v0.0.0-alpha"))
        assert result.selected == []
        assert result.failures == []


class TestRankTagsPlain:
    """Tests for rank_tags with semantic-version sorting disabled"""

    def test_input_order_preserved(self):
        options = RankingOptions(sort_semver=False, since="5.0.0")
        result = rank_tags(_tags("v1.0.0", "abc", "v9.0.0", "v10.0.0"), options)
        assert _names(result.selected) == ["v1.0.0", "abc", "v9.0.0", "v10.0.0"]

    def test_no_parsing_no_failures(self):
        options = RankingOptions(sort_semver=False)
        result = rank_tags(_tags("abc", "v1.0.0"), options)
        assert result.failures == []
        assert all(tag.version is None for tag in result.parsed)


class TestRankTagsProperties:
    """Invariants that hold for every input"""

    def test_parsed_count_matches_input(self):
        raw = _tags("v1.0.0", "abc", "", "v2.0.0-beta", "vv3", "1.0")
        for options in (RankingOptions(), RankingOptions(sort_semver=False), RankingOptions(since="9.9.9")):
            assert len(rank_tags(raw, options).parsed) == len(raw)

    def test_empty_input(self):
        result = rank_tags([])
        assert result.parsed == []
        assert result.selected == []
        assert result.failures == []

    def test_idempotent(self):
        raw = _tags("v1.0.0", "abc", "v10.0.0", "v2.0.0")
        options = RankingOptions(since="1.0.0")
        assert rank_tags(raw, options) == rank_tags(raw, options)

    def test_input_list_not_mutated(self):
        raw = _tags("v1.0.0", "v2.0.0")
        rank_tags(raw)
        assert _names(raw) == ["v1.0.0", "v2.0.0"]
