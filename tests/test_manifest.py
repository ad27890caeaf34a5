"""Tests for reading the base version from a manifest file."""

from unittest.mock import Mock

import pytest

from verbranch.errors import InvalidInputError, InvalidVersionError
from verbranch.services.manifest import parse_manifest, read_version


def test_read_version_from_package_json(adapter: Mock) -> None:
    adapter.get_file_content.return_value = '{\n\t"name": "pkg",\n\t"version": "1.2.3"\n}\n'

    assert read_version(adapter, "owner/repo", "main") == "1.2.3"
    adapter.get_file_content.assert_called_once_with("owner/repo", "package.json", "main")


def test_read_version_from_yaml(adapter: Mock) -> None:
    adapter.get_file_content.return_value = "name: chart\nversion: 0.4.0-rc.1\n"

    assert read_version(adapter, "owner/repo", "develop", "Chart.yaml") == "0.4.0-rc.1"


def test_missing_version_field(adapter: Mock) -> None:
    adapter.get_file_content.return_value = '{"name": "pkg"}'

    with pytest.raises(InvalidVersionError):
        read_version(adapter, "owner/repo", "main")


def test_unparsable_content(adapter: Mock) -> None:
    adapter.get_file_content.return_value = "{not json"

    with pytest.raises(InvalidInputError, match="cannot be parsed"):
        read_version(adapter, "owner/repo", "main")


def test_unsupported_extension() -> None:
    with pytest.raises(InvalidInputError, match="Unsupported version-file"):
        parse_manifest("setup.cfg", "[metadata]\nversion = 1.0.0\n")


def test_manifest_must_be_mapping() -> None:
    with pytest.raises(InvalidInputError, match="not a mapping"):
        parse_manifest("package.json", "[1, 2]")
