"""Tests for package.json reading and writing."""

import json
import os

import pytest
import yaml

from workspace.manifest import (
    ManifestError,
    apply_update,
    build_root_manifest,
    discover_manifests,
    load_manifest,
    load_manifests,
    read_json,
    write_json,
    write_workspace_file,
)
from workspace.models import ManifestUpdate, ReconcileResult


def write_package(directory, document):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(document, indent=2))
    return path


class TestLoadManifest:
    """Test manifest loading."""

    def test_load(self, tmp_path):
        path = write_package(tmp_path / "crypto", {
            "name": "@nmshd/crypto",
            "version": "2.0.0",
            "dependencies": {"libsodium-wrappers-sumo": "0.7.11"},
            "devDependencies": {"typescript": "^5.0.0"},
        })
        m = load_manifest(str(path))
        assert m.name == "@nmshd/crypto"
        assert m.version == "2.0.0"
        assert m.dependencies == {"libsodium-wrappers-sumo": "0.7.11"}
        assert m.dev_dependencies == {"typescript": "^5.0.0"}
        assert m.path == str(path)
        assert m.document["name"] == "@nmshd/crypto"

    def test_missing_sections(self, tmp_path):
        m = load_manifest(str(write_package(tmp_path / "x", {"name": "x"})))
        assert m.dependencies == {}
        assert m.dev_dependencies == {}

    def test_missing_name_falls_back_to_directory(self, tmp_path):
        m = load_manifest(str(write_package(tmp_path / "cns-content", {"version": "1.0.0"})))
        assert m.name == "cns-content"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("{not json")
        with pytest.raises(ManifestError):
            load_manifest(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError):
            load_manifest(str(tmp_path / "nope" / "package.json"))

    def test_section_must_be_object(self, tmp_path):
        path = write_package(tmp_path / "x", {"name": "x", "dependencies": ["lodash"]})
        with pytest.raises(ManifestError, match="'dependencies' must be an object"):
            load_manifest(str(path))

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("[]")
        with pytest.raises(ManifestError):
            load_manifest(str(path))


class TestDiscovery:
    """Test package discovery."""

    def test_sorted_and_filtered(self, tmp_path):
        write_package(tmp_path / "b", {"name": "b"})
        write_package(tmp_path / "a", {"name": "a"})
        (tmp_path / "docs").mkdir()
        (tmp_path / "README.md").write_text("readme")
        found = discover_manifests(str(tmp_path))
        assert [os.path.basename(os.path.dirname(p)) for p in found] == ["a", "b"]
        assert [m.name for m in load_manifests(str(tmp_path))] == ["a", "b"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ManifestError):
            discover_manifests(str(tmp_path / "packages"))


class TestApplyUpdate:
    """Test applying updates to documents."""

    def test_replaces_sections_and_keeps_rest(self):
        document = {"name": "a", "scripts": {"build": "tsc"}, "dependencies": {"x": "1.0.0"},
                    "devDependencies": {"jest": "29.0.0"}}
        update = ManifestUpdate("a", {"x": "^1.1.0"}, {})
        result = apply_update(document, update)
        assert result["dependencies"] == {"x": "^1.1.0"}
        assert result["devDependencies"] == {}
        assert result["scripts"] == {"build": "tsc"}
        assert document["dependencies"] == {"x": "1.0.0"}

    def test_does_not_add_empty_sections(self):
        result = apply_update({"name": "a"}, ManifestUpdate("a", {}, {}))
        assert "dependencies" not in result
        assert "devDependencies" not in result


class TestRootManifest:
    """Test root manifest construction."""

    def test_new_root(self):
        result = ReconcileResult(root_dev_dependencies={"typescript": "^5.1.2"})
        root = build_root_manifest(None, result, "nmshd")
        assert root == {"name": "nmshd", "private": True, "devDependencies": {"typescript": "^5.1.2"}}

    def test_merges_into_existing(self):
        existing = {"name": "mono", "devDependencies": {"nx": "17.0.0", "typescript": "^4.0.0"}}
        result = ReconcileResult(
            root_dependencies={"lodash": "^4.17.21"},
            root_dev_dependencies={"typescript": "^5.1.2"},
        )
        root = build_root_manifest(existing, result)
        assert root["name"] == "mono"
        assert root["devDependencies"] == {"nx": "17.0.0", "typescript": "^5.1.2"}
        assert root["dependencies"] == {"lodash": "^4.17.21"}
        assert existing["devDependencies"]["typescript"] == "^4.0.0"


class TestWriting:
    """Test file output."""

    def test_write_json_format(self, tmp_path):
        path = tmp_path / "package.json"
        write_json(str(path), {"name": "a", "dependencies": {"ü": "1.0.0"}})
        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '  "name": "a"' in text
        assert "ü" in text
        assert read_json(str(path)) == {"name": "a", "dependencies": {"ü": "1.0.0"}}
        assert [p.name for p in tmp_path.iterdir()] == ["package.json"]

    def test_read_json_missing(self, tmp_path):
        assert read_json(str(tmp_path / "package.json")) is None

    def test_workspace_file(self, tmp_path):
        path = write_workspace_file(str(tmp_path), ["packages/*"])
        with open(path, encoding="utf-8") as fh:
            assert yaml.safe_load(fh) == {"packages": ["packages/*"]}
