"""Tolerant version parsing and major.minor helpers.

Platform versions come from cluster status fields and user flags in forms like
"2.17.0", "v3.0", or "3.0.0-ea.1". Only major and minor matter for upgrade
decisions, so every comparison here ignores patch and pre-release parts.
"""

import re

from packaging.version import InvalidVersion, Version

from ..exceptions import InvalidVersionError


# Semantic-version strings PEP 440 cannot express, e.g. "3.0.0-ea.1"
_SEMVER = re.compile(
    r"^(?P<core>\d+(?:\.\d+){0,2})(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)


def parse_tolerant(raw: str) -> Version:
    """Parse a version string, accepting a leading "v" and missing parts.

    Semantic-version pre-release and build suffixes that PEP 440 cannot
    represent are dropped, so "3.0.0-ea.1" parses as 3.0.0.

    Args:
        raw: Version string such as "2.17.0", "v3.0" or " 3 "

    Returns:
        Parsed version; missing minor/patch default to 0

    Raises:
        InvalidVersionError: If the string is empty or not a version
    """
    text = (raw or "").strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    if not text:
        raise InvalidVersionError(
            f"invalid version {raw!r}: empty",
            suggestion="Use a version like 3.0.0",
        )
    try:
        version = Version(text)
    except InvalidVersion as e:
        match = _SEMVER.match(text)
        if match is None:
            raise InvalidVersionError(
                f"invalid version {raw!r}",
                suggestion="Use a version like 3.0.0",
            ) from e
        version = Version(match.group("core"))
    if version.epoch:
        raise InvalidVersionError(f"invalid version {raw!r}")
    if version.local:
        version = Version(version.public)
    return version


def major_minor(version: Version) -> tuple[int, int]:
    """Return the (major, minor) pair of a version."""
    return version.major, version.minor


def major_minor_label(version: Version) -> str:
    """Return "major.minor", e.g. "2.17"."""
    return f"{version.major}.{version.minor}"


def same_major_minor(a: Version, b: Version) -> bool:
    """Return True if both versions share major and minor."""
    return major_minor(a) == major_minor(b)


def is_upgrade_from_2x_to_3x(current: Version | None, target: Version | None) -> bool:
    """Return True for an upgrade from any 2.x to any 3.x.

    Later majors may carry different requirements, so 2.x -> 4.x is False.
    Missing versions yield False.
    """
    if current is None or target is None:
        return False
    return current.major == 2 and target.major == 3


def is_version_at_least(version: Version | None, major: int, minor: int) -> bool:
    """Return True if version is at least major.minor; patch is ignored."""
    if version is None:
        return False
    if version.major > major:
        return True
    return version.major == major and version.minor >= minor
