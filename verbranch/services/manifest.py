"""Read the current version from a manifest file (package.json, YAML) at a branch or commit."""

import json
import logging
from pathlib import PurePosixPath
from typing import Any

import yaml

from verbranch.adapters.base import GitPlatformAdapter
from verbranch.errors import InvalidInputError, InvalidVersionError

LOG = logging.getLogger("verbranch.services.manifest")

DEFAULT_VERSION_FILE = "package.json"


def parse_manifest(path: str, content: str) -> dict[str, Any]:
    """Parse manifest content by file extension (.json, .yml, .yaml)."""
    suffix = PurePosixPath(path).suffix.lower()
    if suffix == ".json":
        data = json.loads(content)
    elif suffix in (".yml", ".yaml"):
        data = yaml.safe_load(content)
    else:
        raise InvalidInputError(f"Unsupported version-file: {path}")
    if not isinstance(data, dict):
        raise InvalidInputError(f"Version file: {path}, is not a mapping.")
    return data


def read_version(
    adapter: GitPlatformAdapter,
    repo: str,
    ref: str,
    path: str = DEFAULT_VERSION_FILE,
) -> str:
    """Return the ``version`` field of the manifest at ref (branch name or commit SHA)."""
    content = adapter.get_file_content(repo, path, ref)
    try:
        data = parse_manifest(path, content)
    except (ValueError, yaml.YAMLError) as e:
        raise InvalidInputError(f"Version file: {path}, cannot be parsed: {e}") from e
    version = data.get("version")
    if not isinstance(version, str) or not version:
        raise InvalidVersionError(f"Base version: {version}, is invalid.")
    LOG.info("Version in %s@%s: %s", path, ref, version)
    return version
