"""Argument parsing functionality for monosetup."""

import argparse

from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="monosetup",
        description=(
            "monosetup - Assemble independently versioned npm packages into one workspace"
        ),
        add_help=True,
    )

    parser.add_argument("command",
                        help="What to execute: init (clone and set up), install, clean, build, "
                             "reconcile (rewrite manifests only)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_COMMANDS)

    parser.add_argument("--root",
                        dest="ROOT",
                        help="Workspace root directory (default: current directory)",
                        action="store",
                        type=str,
                        default=".")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-m", "--merge",
                        dest="MERGE",
                        help="Align every runtime dependency on its highest version across packages.",
                        action="store_true")
    parser.add_argument("-n", "--dry-run",
                        dest="DRY_RUN",
                        help="Compute the reconciliation and print it without writing files.",
                        action="store_true")
    parser.add_argument("-w", "--workers",
                        dest="WORKERS",
                        help="Maximum number of parallel clones",
                        action="store",
                        type=int)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
