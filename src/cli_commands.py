"""Sub-command implementations: clone, install, build, clean and reconcile.

These wrap external tools (git, the package manager, nx) around the
workspace reconciliation in ``workspace.mono``.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import stat
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from cli_config import MonoConfig
from common.process import CommandError, run_command
from constants import Constants
from workspace.models import ReconcileResult
from workspace.mono import setup_workspace

logger = logging.getLogger(__name__)


def _force_remove(func, path, _exc) -> None:
    # git marks pack files read-only on Windows
    os.chmod(path, stat.S_IWRITE)
    func(path)


def remove_path(path: str) -> bool:
    """Delete a file or directory tree if present. Returns True if removed."""
    if os.path.isdir(path) and not os.path.islink(path):
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=_force_remove)
        else:
            shutil.rmtree(path, onerror=_force_remove)  # pylint: disable=deprecated-argument
        return True
    if os.path.lexists(path):
        os.remove(path)
        return True
    return False


def clone_repository(name: str, url: str, packages_dir: str) -> Optional[str]:
    """Clone ``url`` into ``packages_dir/name`` and drop its git metadata.

    Returns the package directory, or None when it already existed.
    """
    target = os.path.join(packages_dir, name)
    if os.path.exists(target):
        logger.info("%s already present, skipping clone", name)
        return None
    run_command([Constants.GIT_COMMAND, "clone", url, name], cwd=packages_dir, context=f"git clone {name}")
    remove_path(os.path.join(target, ".git"))
    logger.info("Cloned %s", name)
    return target


def clone_all(repositories: List[Tuple[str, str]], packages_dir: str, max_workers: int) -> List[str]:
    """Clone every repository in parallel.

    Waits for every clone to finish, then raises the first failure in
    repository order.
    """
    os.makedirs(packages_dir, exist_ok=True)
    if not repositories:
        return []
    workers = max(1, min(max_workers, len(repositories)))
    errors: List[Exception] = []
    cloned: List[str] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [(name, pool.submit(clone_repository, name, url, packages_dir)) for name, url in repositories]
        for name, future in futures:
            try:
                path = future.result()
            except (CommandError, OSError) as exc:
                logger.error("Failed to clone %s: %s", name, exc)
                errors.append(exc)
                continue
            if path:
                cloned.append(path)
    if errors:
        raise errors[0]
    return cloned


def initialize(config: MonoConfig) -> ReconcileResult:
    """Clone all configured repositories, then set up the workspace."""
    clone_all(config.repositories, config.packages_path, config.max_workers)
    return setup_workspace(config)


def install(config: MonoConfig) -> None:
    run_command(config.install_command, cwd=config.root, context="install")


def build(config: MonoConfig) -> None:
    run_command(config.build_command, cwd=config.root, context="build")


def clean(config: MonoConfig) -> List[str]:
    """Remove cloned packages, node_modules and lockfiles. Returns removed paths."""
    removed = []
    if os.path.isdir(config.packages_path):
        for entry in sorted(os.listdir(config.packages_path)):
            path = os.path.join(config.packages_path, entry)
            if remove_path(path):
                removed.append(path)
    for name in [Constants.NODE_MODULES_DIR] + Constants.LOCKFILES:
        path = os.path.join(config.root, name)
        if remove_path(path):
            removed.append(path)
    logger.info("Removed %d paths", len(removed))
    return removed


def reconcile_only(config: MonoConfig, stream=None) -> ReconcileResult:
    """Reconcile the existing packages; print the report on a dry run."""
    result = setup_workspace(config)
    if config.dry_run:
        stream = stream or sys.stdout
        stream.write(json.dumps(result.to_dict(), indent=2) + "\n")
    return result
