"""Configuration for monosetup runs.

Precedence, lowest first: built-in defaults, the YAML/JSON config file, the
MONOSETUP_MERGE environment variable, CLI flags.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(Exception):
    """The configuration file is unreadable or malformed."""


@dataclass
class MonoConfig:
    """Resolved settings for one run."""

    root: str = "."
    packages_dir: str = Constants.PACKAGES_DIR
    root_name: str = Constants.DEFAULT_ROOT_NAME
    repositories: List[Tuple[str, str]] = field(default_factory=lambda: list(Constants.DEFAULT_REPOSITORIES))
    internal_patterns: List[str] = field(default_factory=lambda: list(Constants.DEFAULT_INTERNAL_PATTERNS))
    merge_dependencies: bool = False
    install_command: List[str] = field(default_factory=lambda: list(Constants.INSTALL_COMMAND))
    build_command: List[str] = field(default_factory=lambda: list(Constants.BUILD_COMMAND))
    strip_scripts: List[str] = field(default_factory=lambda: list(Constants.STRIP_SCRIPTS))
    max_workers: int = Constants.MAX_WORKERS
    dry_run: bool = False

    @property
    def packages_path(self) -> str:
        return os.path.join(self.root, self.packages_dir)

    @property
    def root_manifest_path(self) -> str:
        return os.path.join(self.root, Constants.PACKAGE_JSON_FILE)


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"expected a boolean, got '{value}'")


def _command(value: Any, key: str) -> List[str]:
    if isinstance(value, str):
        return shlex.split(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"'{key}' must be a string or a list of strings")


def _string_list(value: Any, key: str) -> List[str]:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"'{key}' must be a list of strings")


def _repositories(value: Any) -> List[Tuple[str, str]]:
    if not isinstance(value, list):
        raise ConfigError("'repositories' must be a list")
    repos = []
    for item in value:
        if not isinstance(item, dict) or not item.get("name") or not item.get("url"):
            raise ConfigError("each repository needs a 'name' and a 'url'")
        repos.append((str(item["name"]), str(item["url"])))
    return repos


def find_config(root: str) -> Optional[str]:
    """Return the first default config file present under ``root``."""
    for name in Constants.CONFIG_FILES:
        candidate = os.path.join(root, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML (or .json) config file into a dict.

    Raises:
        ConfigError: if the file cannot be read or is not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to load config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")
    return data


def apply_file_config(config: MonoConfig, data: Dict[str, Any]) -> MonoConfig:
    """Apply the recognised keys of a loaded config file to ``config``."""
    if "packages_dir" in data:
        config.packages_dir = str(data["packages_dir"])
    if "root_name" in data:
        config.root_name = str(data["root_name"])
    if "repositories" in data:
        config.repositories = _repositories(data["repositories"])
    if "internal_patterns" in data:
        config.internal_patterns = _string_list(data["internal_patterns"], "internal_patterns")
    if "merge_dependencies" in data:
        config.merge_dependencies = parse_bool(data["merge_dependencies"])
    if "install_command" in data:
        config.install_command = _command(data["install_command"], "install_command")
    if "build_command" in data:
        config.build_command = _command(data["build_command"], "build_command")
    if "strip_scripts" in data:
        config.strip_scripts = _string_list(data["strip_scripts"], "strip_scripts")
    if "max_workers" in data:
        try:
            config.max_workers = max(1, int(data["max_workers"]))
        except (TypeError, ValueError) as exc:
            raise ConfigError("'max_workers' must be an integer") from exc
    unknown = set(data) - {
        "packages_dir", "root_name", "repositories", "internal_patterns", "merge_dependencies",
        "install_command", "build_command", "strip_scripts", "max_workers",
    }
    for key in sorted(unknown):
        logger.warning("Ignoring unknown config key '%s'", key)
    return config


def build_config(args: Any, environ: Optional[Dict[str, str]] = None) -> MonoConfig:
    """Resolve the run configuration from parsed CLI arguments."""
    environ = os.environ if environ is None else environ
    root = getattr(args, "ROOT", None) or "."
    config = MonoConfig(root=root)

    path = getattr(args, "CONFIG", None) or find_config(root)
    if path:
        logger.debug("Loading config from %s", path)
        apply_file_config(config, load_config(path))

    env_merge = environ.get(Constants.ENV_MERGE)
    if env_merge is not None:
        config.merge_dependencies = parse_bool(env_merge)

    if getattr(args, "MERGE", False):
        config.merge_dependencies = True
    if getattr(args, "DRY_RUN", False):
        config.dry_run = True
    workers = getattr(args, "WORKERS", None)
    if workers is not None:
        config.max_workers = max(1, int(workers))
    return config
