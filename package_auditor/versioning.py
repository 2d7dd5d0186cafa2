"""NuGet version parsing.

Only exact versions are accepted. Ranges ("[1.0,2.0)") and floating
versions ("1.*") are rejected because a registry lookup needs a single
concrete version.
"""
from __future__ import annotations

import re
from typing import Any, NamedTuple, Optional

from package_auditor.exceptions import VersionParseError

_LABEL = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

VERSION_PATTERN = re.compile(
    r"^(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:\.(?P<revision>\d+))?"
    rf"(?:-(?P<release>{_LABEL}))?"
    rf"(?:\+(?P<metadata>{_LABEL}))?$"
)


class NuGetVersion(NamedTuple):
    """A parsed NuGet package version."""

    major: int
    minor: int
    patch: int
    revision: int
    release: str
    metadata: Optional[str]

    @property
    def is_prerelease(self) -> bool:
        """True if the version carries a release label."""
        return bool(self.release)

    @property
    def normalized(self) -> str:
        """Normalized form used by the registry.

        Leading zeros and build metadata are dropped, and the fourth
        component is only kept when non-zero.
        """
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release:
            text += f"-{self.release}"
        return text

    @property
    def sort_key(self) -> tuple[Any, ...]:
        """Key ordering versions by precedence.

        A release label sorts before the same version without one. Label
        identifiers compare numerically when numeric, otherwise
        case-insensitively, and numeric identifiers sort first.
        """
        if not self.release:
            release_key: tuple[Any, ...] = (1,)
        else:
            release_key = (
                0,
                tuple(
                    (0, int(part), "") if part.isdigit() else (1, 0, part.lower())
                    for part in self.release.split(".")
                ),
            )
        return (self.major, self.minor, self.patch, self.revision, release_key)

    def __str__(self) -> str:
        return self.normalized


def parse_version(text: str) -> NuGetVersion:
    """Parse an exact NuGet version string.

    Args:
        text: Version string such as "6.6.2", "1.0.0-beta.1" or "4.5.0.0".

    Returns:
        Parsed NuGetVersion.

    Raises:
        VersionParseError: If the string is empty or not an exact version.
    """
    match = VERSION_PATTERN.match(text.strip())
    if match is None:
        raise VersionParseError(text)

    return NuGetVersion(
        major=int(match.group("major")),
        minor=int(match.group("minor") or 0),
        patch=int(match.group("patch") or 0),
        revision=int(match.group("revision") or 0),
        release=match.group("release") or "",
        metadata=match.group("metadata"),
    )


def versions_equal(left: str, right: str) -> bool:
    """Compare two version strings the way the registry does.

    Release labels compare case-insensitively and build metadata is
    ignored.
    """
    return parse_version(left).normalized.lower() == parse_version(right).normalized.lower()
