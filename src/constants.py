"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    COMMAND_ERROR = 2
    PARSE_ERROR = 3


class Commands(Enum):
    """Sub-commands supported by the program.

    Args:
        Enum (string): Sub-commands supported by the program.
    """

    INIT = "init"
    INSTALL = "install"
    CLEAN = "clean"
    BUILD = "build"
    RECONCILE = "reconcile"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_COMMANDS = [c.value for c in Commands]
    DEFAULT_REPOSITORIES = [
        ("cns-app-runtime", "https://github.com/nmshd/cns-app-runtime"),
        ("cns-app-web", "https://github.com/nmshd/cns-app-web"),
        ("cns-connector", "https://github.com/nmshd/cns-connector"),
        ("cns-consumption", "https://github.com/nmshd/cns-consumption"),
        ("cns-content", "https://github.com/nmshd/cns-content"),
        ("cns-crypto", "https://github.com/nmshd/cns-crypto"),
        ("cns-transport", "https://github.com/nmshd/cns-transport"),
        ("connector-tui", "https://github.com/nmshd/connector-tui"),
        ("cns-runtime", "https://github.com/nmshd/cns-runtime"),
    ]
    DEFAULT_INTERNAL_PATTERNS = ["@nmshd/*"]
    DEFAULT_ROOT_NAME = "workspace"
    PACKAGES_DIR = "packages"
    PACKAGE_JSON_FILE = "package.json"
    WORKSPACE_FILE = "pnpm-workspace.yaml"
    LOCKFILES = ["pnpm-lock.yaml", "package-lock.json", "yarn.lock"]
    NODE_MODULES_DIR = "node_modules"
    CONFIG_FILES = ["monosetup.yml", "monosetup.yaml", "monosetup.json"]

    INSTALL_COMMAND = ["pnpm", "install"]
    BUILD_COMMAND = ["npx", "nx", "run-many", "-t", "build:node"]
    GIT_COMMAND = "git"
    STRIP_SCRIPTS = ["build", "build:node"]
    MAX_WORKERS = 8

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "MONOSETUP_LOG_LEVEL"
    ENV_MERGE = "MONOSETUP_MERGE"
