"""monosetup - assemble independently versioned npm packages into one workspace.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_commands import build, clean, initialize, install, reconcile_only
from cli_config import ConfigError, build_config
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from common.process import CommandError
from constants import Commands, ExitCodes
from versioning.errors import ManifestParseError
from workspace.manifest import ManifestError

logger = logging.getLogger(__name__)

HANDLERS = {
    Commands.INIT.value: initialize,
    Commands.INSTALL.value: install,
    Commands.CLEAN.value: clean,
    Commands.BUILD.value: build,
    Commands.RECONCILE.value: reconcile_only,
}


def run(argv=None) -> int:
    """Run one command and return its exit code."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.command),
        )

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    try:
        HANDLERS[args.command](config)
    except ManifestParseError as e:
        logger.error(
            "Invalid version range in %s: %s.%s = '%s' (%s). No files were changed.",
            e.manifest, e.section, e.dependency, e.raw, e.kind.value,
        )
        return ExitCodes.PARSE_ERROR.value
    except ManifestError as e:
        logger.error("Manifest error: %s", e)
        return ExitCodes.FILE_ERROR.value
    except CommandError as e:
        logger.error("%s", e)
        return ExitCodes.COMMAND_ERROR.value
    except OSError as e:
        logger.error("File error: %s", e)
        return ExitCodes.FILE_ERROR.value

    logger.info("%s finished.", args.command)
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
