"""Reading and writing package.json manifests and workspace files."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from typing import Any, Dict, Iterable, List, Optional

import yaml

from constants import Constants

from .models import DEPENDENCIES, DEV_DEPENDENCIES, ManifestUpdate, PackageManifest, ReconcileResult

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """A manifest could not be read or has an unexpected shape."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


def _string_map(path: str, document: Dict[str, Any], key: str) -> Dict[str, str]:
    value = document.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(path, f"'{key}' must be an object")
    return dict(value)


def load_manifest(path: str) -> PackageManifest:
    """Load a package.json file.

    Raises:
        ManifestError: if the file is missing, is not valid JSON or is not an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestError(path, str(exc)) from exc
    if not isinstance(document, dict):
        raise ManifestError(path, "top level must be an object")

    name = document.get("name")
    if not isinstance(name, str) or not name:
        name = os.path.basename(os.path.dirname(os.path.abspath(path)))
        logger.warning("%s has no name, using directory name '%s'", path, name)

    version = document.get("version")
    return PackageManifest(
        name=name,
        version=version if isinstance(version, str) else None,
        dependencies=_string_map(path, document, DEPENDENCIES),
        dev_dependencies=_string_map(path, document, DEV_DEPENDENCIES),
        path=path,
        document=document,
    )


def discover_manifests(packages_dir: str) -> List[str]:
    """Return package.json paths of the direct children of ``packages_dir``.

    Sorted by directory name so the reconciliation fold order is stable.
    """
    if not os.path.isdir(packages_dir):
        raise ManifestError(packages_dir, "packages directory not found")
    found = []
    for entry in sorted(os.listdir(packages_dir)):
        candidate = os.path.join(packages_dir, entry, Constants.PACKAGE_JSON_FILE)
        if os.path.isfile(candidate):
            found.append(candidate)
        else:
            logger.debug("Skipping %s: no %s", entry, Constants.PACKAGE_JSON_FILE)
    return found


def load_manifests(packages_dir: str) -> List[PackageManifest]:
    return [load_manifest(p) for p in discover_manifests(packages_dir)]


def apply_update(document: Dict[str, Any], update: ManifestUpdate) -> Dict[str, Any]:
    """Return a copy of ``document`` carrying the updated dependency maps.

    Sections the manifest did not declare are only added when non-empty.
    """
    result = copy.deepcopy(document)
    for key, values in ((DEPENDENCIES, update.dependencies), (DEV_DEPENDENCIES, update.dev_dependencies)):
        if key in result or values:
            result[key] = dict(values)
    return result


def _merged(existing: Any, additions: Dict[str, str]) -> Dict[str, str]:
    merged = dict(existing) if isinstance(existing, dict) else {}
    merged.update(additions)
    return dict(sorted(merged.items()))


def build_root_manifest(
    existing: Optional[Dict[str, Any]],
    result: ReconcileResult,
    name: str = Constants.DEFAULT_ROOT_NAME,
) -> Dict[str, Any]:
    """Build the root package.json, keeping whatever the existing one declares."""
    root = copy.deepcopy(existing) if existing else {"name": name, "private": True}
    if result.root_dependencies or DEPENDENCIES in root:
        root[DEPENDENCIES] = _merged(root.get(DEPENDENCIES), result.root_dependencies)
    if result.root_dev_dependencies or DEV_DEPENDENCIES in root:
        root[DEV_DEPENDENCIES] = _merged(root.get(DEV_DEPENDENCIES), result.root_dev_dependencies)
    return root


def read_json(path: str) -> Optional[Dict[str, Any]]:
    """Read a JSON object, returning None if the file does not exist."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise ManifestError(path, "top level must be an object")
    return data


def _atomic_write(path: str, content: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp = tempfile.mkstemp(dir=directory, prefix=".monosetup-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        os.replace(tmp, path)
    except OSError:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


def write_json(path: str, data: Dict[str, Any]) -> None:
    """Write ``data`` as 2-space indented JSON with a trailing newline."""
    _atomic_write(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    logger.debug("Wrote %s", path)


def write_workspace_file(root_dir: str, patterns: Iterable[str]) -> str:
    """Write pnpm-workspace.yaml listing the package globs. Returns its path."""
    path = os.path.join(root_dir, Constants.WORKSPACE_FILE)
    _atomic_write(path, yaml.safe_dump({"packages": list(patterns)}, sort_keys=False))
    return path
