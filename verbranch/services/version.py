"""Resolve the target version of a versioning branch.

The increment rules follow npm's ``semver.inc`` so that versions line up with
what ``npm version`` would produce for the same package:

- major/minor/patch release the next version, except that a pre-release
  of exactly that version is released as is (2.0.0-beta.1 -> 2.0.0);
- premajor/preminor/prepatch bump the component and start a pre-release;
- prerelease bumps the last numeric identifier of an existing pre-release,
  or starts one on the next patch.
"""

import re
from typing import List, Union

import semver

from verbranch.errors import InvalidInputError, InvalidVersionError
from verbranch.models import BumpLevel, ReleaseType, ResolvedVersion

Identifier = Union[int, str]

_PRE_ID_RE = re.compile(r"^[0-9A-Za-z-]+$")

_PRE_RELEASE_TYPES = {
    BumpLevel.MAJOR: ReleaseType.PREMAJOR,
    BumpLevel.MINOR: ReleaseType.PREMINOR,
    BumpLevel.PATCH: ReleaseType.PREPATCH,
    BumpLevel.PRERELEASE: ReleaseType.PRERELEASE,
}


def _clean(text: str) -> str:
    # npm accepts a single leading "v" on otherwise valid versions
    text = text.strip()
    return text[1:] if text.startswith("v") else text


def is_valid_version(text: str | None) -> bool:
    if not text or not isinstance(text, str):
        return False
    return semver.Version.is_valid(_clean(text))


def parse_version(text: str | None, what: str = "Version") -> semver.Version:
    """Parse a semantic version or raise InvalidVersionError naming *what*."""
    if not is_valid_version(text):
        raise InvalidVersionError(f"{what}: {text}, is invalid.")
    return semver.Version.parse(_clean(text))


def parse_bump_level(value: BumpLevel | str | None) -> BumpLevel:
    try:
        return BumpLevel(value)
    except ValueError:
        raise InvalidInputError(f"Invalid version-level: {value or ''}") from None


def validate_pre_id(pre_id: str | None) -> str:
    pre_id = (pre_id or "").strip()
    if pre_id and not _PRE_ID_RE.match(pre_id):
        raise InvalidInputError(f"Invalid pre-id: {pre_id}")
    return pre_id


def release_type_for(bump_level: BumpLevel | str, pre_id: str | None = None) -> ReleaseType:
    """Map a bump level to a release type; a pre-id turns it into a pre-release bump."""
    level = parse_bump_level(bump_level)
    if pre_id or level is BumpLevel.PRERELEASE:
        return _PRE_RELEASE_TYPES[level]
    return ReleaseType(level.value)


def _identifiers(prerelease: str | None) -> List[Identifier]:
    if not prerelease:
        return []
    return [int(part) if part.isdigit() else part for part in prerelease.split(".")]


def _next_prerelease(pre: List[Identifier], pre_id: str) -> List[Identifier]:
    if not pre:
        pre = [0]
    else:
        pre = list(pre)
        for i in range(len(pre) - 1, -1, -1):
            if isinstance(pre[i], int):
                pre[i] += 1
                break
        else:
            pre.append(0)
    if pre_id:
        # 1.2.0-beta.1 -> 1.2.0-beta.2, while 1.2.0-beta or 1.2.0-alpha.3 restart at beta.0
        same_id = str(pre[0]) == pre_id
        if not same_id or len(pre) < 2 or not isinstance(pre[1], int):
            pre = [pre_id, 0]
    return pre


def increment(version: semver.Version, release_type: ReleaseType, pre_id: str = "") -> semver.Version:
    """Apply one release type to a version. Build metadata is dropped."""
    major, minor, patch = version.major, version.minor, version.patch
    pre = _identifiers(version.prerelease)

    if release_type is ReleaseType.MAJOR:
        if minor != 0 or patch != 0 or not pre:
            major += 1
        minor, patch, pre = 0, 0, []
    elif release_type is ReleaseType.MINOR:
        if patch != 0 or not pre:
            minor += 1
        patch, pre = 0, []
    elif release_type is ReleaseType.PATCH:
        if not pre:
            patch += 1
        pre = []
    elif release_type is ReleaseType.PREMAJOR:
        major, minor, patch = major + 1, 0, 0
        pre = _next_prerelease([], pre_id)
    elif release_type is ReleaseType.PREMINOR:
        minor, patch = minor + 1, 0
        pre = _next_prerelease([], pre_id)
    elif release_type is ReleaseType.PREPATCH:
        patch += 1
        pre = _next_prerelease([], pre_id)
    elif release_type is ReleaseType.PRERELEASE:
        if not pre:
            patch += 1
        pre = _next_prerelease(pre, pre_id)
    else:
        raise AssertionError(f"unexpected release type: {release_type}")

    prerelease = ".".join(str(p) for p in pre) or None
    return semver.Version(major, minor, patch, prerelease=prerelease)


def split_prerelease(prerelease: str | None) -> tuple[str, str]:
    """Split a pre-release into (pre-id, pre-inc): "beta.3" -> ("beta", "3")."""
    parts = (prerelease or "").split(".") if prerelease else []
    if parts and parts[-1].isdigit():
        return ".".join(parts[:-1]), parts[-1]
    return ".".join(parts), ""


def describe_version(
    text: str,
    release_type: ReleaseType | None = None,
    is_prerelease: bool = False,
) -> ResolvedVersion:
    parsed = parse_version(text)
    pre_id, pre_inc = split_prerelease(parsed.prerelease)
    return ResolvedVersion(
        version=text,
        major=parsed.major,
        minor=parsed.minor,
        patch=parsed.patch,
        pre_id=pre_id,
        pre_inc=pre_inc,
        release_type=release_type,
        is_prerelease=is_prerelease,
    )


def resolve_version(
    base_version: str,
    bump_level: BumpLevel | str,
    pre_id: str | None = None,
    custom_version: str | None = None,
) -> ResolvedVersion:
    """Compute the target version of the versioning branch.

    A custom version, when given, must be valid and wins over the computed
    bump. ``is_prerelease`` reflects the requested bump (prerelease level or
    a pre-id), not the shape of the custom version.

    Raises:
        InvalidInputError: unknown bump level or malformed pre-id.
        InvalidVersionError: invalid base or custom version.
    """
    level = parse_bump_level(bump_level)
    pre_id = validate_pre_id(pre_id)
    custom_version = (custom_version or "").strip()
    if custom_version and not is_valid_version(custom_version):
        raise InvalidVersionError(f"Custom version: {custom_version}, is invalid.")
    base = parse_version(base_version, what="Base version")

    is_prerelease = level is BumpLevel.PRERELEASE or bool(pre_id)
    if custom_version:
        return describe_version(custom_version, is_prerelease=is_prerelease)

    release_type = release_type_for(level, pre_id)
    new_version = increment(base, release_type, pre_id)
    return describe_version(str(new_version), release_type=release_type, is_prerelease=is_prerelease)
