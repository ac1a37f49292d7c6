"""Version validation and ordering.

Release tags pass through validate_version() before any asset work is
done. Accepted versions are "MAJOR.MINOR.PATCH" with an optional dotted
pre-release suffix ("1.2.3-rc.1"). Ordering uses version_key(); equality
and deduplication always use the exact normalized string.
"""

import re

from packaging.version import InvalidVersion, Version

from release_registry.logger import get_logger

logger = get_logger(__name__)

_CORE_RE = re.compile(r"^\d+\.\d+\.\d+")
_LEADING_DIGITS_RE = re.compile(r"^\d+")
_PREFIX_RE = re.compile(r"^v", re.IGNORECASE)
_DEV_MARKERS = ("-dev", "+dev")


def normalize_tag(raw_tag: str) -> str:
    """Strip surrounding whitespace and one leading "v"/"V"."""
    return _PREFIX_RE.sub("", raw_tag.strip(), count=1)


def rejection_reason(version: str) -> str | None:
    """Explain why a normalized version is rejected.

    Args:
        version: Version string with the tag prefix already removed

    Returns:
        Human readable reason, or None when the version is acceptable

    Examples:
        >>> rejection_reason("1.2.3") is None
        True
        >>> rejection_reason("1.25rc3")
        'does not start with MAJOR.MINOR.PATCH'

    """
    if not _CORE_RE.match(version):
        return "does not start with MAJOR.MINOR.PATCH"

    if "-" in version:
        # Build metadata after "+" is not part of the pre-release label
        pre_release = version.split("-")[1].split("+")[0]
        if "." not in pre_release:
            return f"pre-release '{pre_release}' is not dot separated"

    if any(marker in version for marker in _DEV_MARKERS):
        return "development snapshot"

    return None


def validate_version(raw_tag: str) -> str | None:
    """Validate a release tag and return its normalized version.

    Examples:
        >>> validate_version("v2.0.0-rc.1")
        '2.0.0-rc.1'
        >>> validate_version("1.0.0-dev.5") is None
        True

    Args:
        raw_tag: Tag name as published by the release source

    Returns:
        Normalized version, or None when the tag is rejected

    """
    if not raw_tag:
        return None

    version = normalize_tag(raw_tag)
    reason = rejection_reason(version)
    if reason:
        logger.debug("Rejected version tag %s: %s", raw_tag, reason)
        return None
    return version


def _leading_int(component: str) -> int:
    match = _LEADING_DIGITS_RE.match(component)
    return int(match.group()) if match else 0


def version_key(version: str) -> tuple[int, int, int]:
    """Return the numeric (major, minor, patch) triple used for sorting.

    Text after the first "-" is ignored, missing components are 0 and
    components without leading digits count as 0.

    Examples:
        >>> version_key("1.2.3-rc.1")
        (1, 2, 3)
        >>> version_key("4.5")
        (4, 5, 0)

    """
    parts = version.split("-", 1)[0].split(".")
    parts.extend(["0"] * (3 - len(parts)))
    major, minor, patch = (_leading_int(part) for part in parts[:3])
    return major, minor, patch


def precedence_key(
    version: str,
) -> tuple[tuple[int, int, int], tuple[int, Version | str], str]:
    """Full sort key: numeric triple, then semantic precedence, then text.

    Two distinct versions can share a numeric triple ("1.0.0" and
    "1.0.0-rc.1"). packaging orders those the way semver does (a release
    sorts above its pre-releases); versions packaging cannot parse fall
    below parseable ones and are ordered by text. The raw string is the
    last resort so the order is always total.
    """
    try:
        semantic: tuple[int, Version | str] = (1, Version(version))
    except InvalidVersion:
        semantic = (0, version)
    return version_key(version), semantic, version
