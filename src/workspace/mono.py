"""Turn a directory of cloned packages into a single pnpm workspace."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from cli_config import MonoConfig

from .manifest import (
    apply_update,
    build_root_manifest,
    load_manifests,
    read_json,
    write_json,
    write_workspace_file,
)
from .models import ReconcileOptions, ReconcileResult
from .reconcile import reconcile
from .scripts import strip_manifest_scripts

logger = logging.getLogger(__name__)


def plan_workspace(config: MonoConfig) -> Tuple[ReconcileResult, List[Tuple[str, Dict[str, Any]]], Dict[str, Any]]:
    """Compute every file the setup would write, without touching the disk.

    Returns:
        (result, [(manifest path, new document)], root document). Only
        manifests whose content changes are listed.
    """
    manifests = load_manifests(config.packages_path)
    logger.info("Found %d packages in %s", len(manifests), config.packages_path)

    options = ReconcileOptions(
        merge_dependencies=config.merge_dependencies,
        internal_patterns=tuple(config.internal_patterns),
    )
    result = reconcile(manifests, options)

    writes: List[Tuple[str, Dict[str, Any]]] = []
    for manifest, update in zip(manifests, result.updates):
        document = apply_update(manifest.document, update)
        scripts = document.get("scripts")
        if config.strip_scripts and isinstance(scripts, dict):
            document["scripts"] = strip_manifest_scripts(scripts, config.strip_scripts)
        if document != manifest.document:
            writes.append((manifest.path, document))

    root = build_root_manifest(read_json(config.root_manifest_path), result, config.root_name)
    return result, writes, root


def setup_workspace(config: MonoConfig) -> ReconcileResult:
    """Reconcile the packages under ``config.packages_path`` and write the workspace.

    All manifests are loaded and reconciled before the first write; a load or
    parse failure leaves every file untouched.
    """
    result, writes, root = plan_workspace(config)
    if config.dry_run:
        logger.info("Dry run: %d package manifests would change", len(writes))
        return result

    for path, document in writes:
        write_json(path, document)
    write_json(config.root_manifest_path, root)
    workspace_file = write_workspace_file(config.root, [f"{config.packages_dir}/*"])
    logger.info(
        "Updated %d package manifests, root manifest and %s", len(writes), workspace_file
    )
    return result
