"""Tests for semantic version arithmetic."""

from __future__ import annotations

import pytest

from release_pilot.core.version import BumpType, Version, next_version, parse_version
from release_pilot.exceptions import InvalidVersionError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse(self):
        """Parse a plain version."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_leading_v(self):
        """A leading v is stripped."""
        assert parse_version("v10.0.7") == Version(10, 0, 7)

    def test_parse_surrounding_whitespace(self):
        """Surrounding whitespace is ignored."""
        assert Version.parse(" 1.0.0\n") == Version(1, 0, 0)

    def test_leading_zeros_normalised(self):
        """Leading zeros are accepted and dropped on output."""
        assert str(Version.parse("01.002.0003")) == "1.2.3"

    @pytest.mark.parametrize(
        "text",
        ["1.2", "1.2.x", "1.2.3.4", "", "v", "-1.2.3", "1.2.3-rc.1", "1.2.3+build", "V1.2.3", "a.b.c", "1..3"],
    )
    def test_invalid(self, text: str):
        """Anything but three non-negative integers is rejected."""
        with pytest.raises(InvalidVersionError) as exc_info:
            Version.parse(text)
        assert exc_info.value.version == text

    def test_str_has_no_prefix(self):
        """String form never has a leading v."""
        assert str(Version.parse("v2.0.0")) == "2.0.0"


class TestVersionBump:
    """Tests for Version.bump()."""

    def test_major_resets_minor_and_patch(self):
        assert Version(1, 2, 3).bump(BumpType.MAJOR) == Version(2, 0, 0)

    def test_minor_resets_patch(self):
        assert Version(1, 2, 3).bump(BumpType.MINOR) == Version(1, 3, 0)

    def test_patch(self):
        assert Version(1, 2, 3).bump(BumpType.PATCH) == Version(1, 2, 4)

    def test_from_zero(self):
        """Bumping 0.0.0 works for every kind."""
        assert str(Version(0, 0, 0).bump(BumpType.PATCH)) == "0.0.1"
        assert str(Version(0, 0, 0).bump(BumpType.MINOR)) == "0.1.0"
        assert str(Version(0, 0, 0).bump(BumpType.MAJOR)) == "1.0.0"


class TestNextVersion:
    """Tests for next_version()."""

    def test_patch(self):
        assert next_version("1.2.3", "patch") == "1.2.4"

    def test_minor(self):
        assert next_version("1.2.3", "minor") == "1.3.0"

    def test_major(self):
        assert next_version("1.2.3", "major") == "2.0.0"

    def test_leading_v_stripped(self):
        assert next_version("v1.2.3", BumpType.PATCH) == "1.2.4"

    def test_carries_past_nine(self):
        """Components are numbers, not digits."""
        assert next_version("1.9.9", "patch") == "1.9.10"

    def test_two_components_invalid(self):
        with pytest.raises(InvalidVersionError):
            next_version("1.2", "patch")

    def test_non_numeric_invalid(self):
        with pytest.raises(InvalidVersionError):
            next_version("1.2.x", "patch")

    def test_unknown_bump_kind(self):
        with pytest.raises(ValueError):
            next_version("1.2.3", "huge")


class TestBumpType:
    """Tests for BumpType."""

    def test_precedence(self):
        """major > minor > patch."""
        assert BumpType.MAJOR.precedence > BumpType.MINOR.precedence > BumpType.PATCH.precedence

    def test_str(self):
        assert str(BumpType.MINOR) == "minor"
