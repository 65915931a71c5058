"""Subprocess execution with consistent logging and error handling."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """An external command could not be run or exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: Optional[int], message: str):
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(message)


def run_command(argv: Sequence[str], *, cwd: str, context: str, capture: bool = False) -> str:
    """Run ``argv`` in ``cwd``.

    Args:
        argv: Command and arguments.
        cwd: Working directory.
        context: Short label for log messages (e.g. "git clone").
        capture: Capture stdout instead of inheriting the console.

    Returns:
        Captured stdout, or an empty string when not capturing.

    Raises:
        CommandError: if the executable is missing or exits non-zero.
    """
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "Running command",
                extra=extra_context(event="process_start", component="process", action=context, target=cwd),
            )
        try:
            proc = subprocess.run(
                [shutil.which(argv[0]) or argv[0], *argv[1:]],
                cwd=cwd,
                check=False,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as exc:
            raise CommandError(argv, None, f"{context}: executable '{argv[0]}' not found") from exc
        except OSError as exc:
            raise CommandError(argv, None, f"{context}: {exc}") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "Command finished",
            extra=extra_context(
                event="process_exit",
                component="process",
                action=context,
                outcome="success" if proc.returncode == 0 else "failure",
                status_code=proc.returncode,
                duration_ms=t.duration_ms(),
            ),
        )
    if proc.returncode != 0:
        raise CommandError(argv, proc.returncode, f"{context} failed with exit code {proc.returncode}")
    return (proc.stdout or "") if capture else ""
