"""Semantic version parsing and arithmetic.

Only the strict ``MAJOR.MINOR.PATCH`` form is supported. A leading ``v``
is accepted on input and never emitted on output; callers decide whether
a tag gets a prefix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from release_pilot.exceptions import InvalidVersionError

VERSION_PATTERN: re.Pattern[str] = re.compile(r"^v?(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)$")


class BumpType(str, Enum):
    """Which component of the version to increment.

    Members are declared from strongest to weakest.
    """

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    def __str__(self) -> str:
        return self.value

    @property
    def precedence(self) -> int:
        """Higher value wins when bumps are combined."""
        return {BumpType.MAJOR: 3, BumpType.MINOR: 2, BumpType.PATCH: 1}[self]


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` version."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string.

        Args:
            text: Version such as ``"1.2.3"`` or ``"v1.2.3"``.

        Returns:
            The parsed version.

        Raises:
            InvalidVersionError: If the string is not three dot-separated
                non-negative integers.
        """
        match = VERSION_PATTERN.match(text.strip())
        if not match:
            raise InvalidVersionError(text)
        return cls(int(match["major"]), int(match["minor"]), int(match["patch"]))

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for the given bump kind."""
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> Version:
    """Parse a version string (alias of :meth:`Version.parse`)."""
    return Version.parse(text)


def next_version(current: str, bump_type: BumpType | str) -> str:
    """Compute the next version string.

    >>> next_version("1.2.3", "minor")
    '1.3.0'
    >>> next_version("v1.2.3", BumpType.PATCH)
    '1.2.4'

    Raises:
        InvalidVersionError: If ``current`` is not a strict semantic version.
        ValueError: If ``bump_type`` is not a known bump kind.
    """
    return str(Version.parse(current).bump(BumpType(bump_type)))
