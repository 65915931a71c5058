"""Remove test steps from package build scripts.

Workspace builds run every package's build script; tests are run separately,
so ``&&``-chained test invocations are dropped from the scripts being built.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable

logger = logging.getLogger(__name__)

_RUNNERS = r"(?:jest|mocha|vitest|karma|ava|tap)"
_TEST_STEP = re.compile(
    rf"""^\s*(?:
        (?:npm|pnpm|yarn|bun)\s+(?:run\s+)?test(?::[\w:.-]+)?   # npm test, npm run test:unit
        |(?:npx|pnpm\s+exec|yarn)\s+{_RUNNERS}                 # npx jest
        |{_RUNNERS}                                             # jest --ci
    )(?:\s|$)""",
    re.VERBOSE,
)


def is_test_step(step: str) -> bool:
    return bool(_TEST_STEP.match(step))


def strip_test_steps(command: str) -> str:
    """Return ``command`` without its ``&&``-chained test steps."""
    steps = [s.strip() for s in command.split("&&")]
    if not any(is_test_step(s) for s in steps):
        return command
    kept = [s for s in steps if s and not is_test_step(s)]
    return " && ".join(kept)


def strip_manifest_scripts(scripts: Dict[str, str], names: Iterable[str]) -> Dict[str, str]:
    """Strip test steps from the named scripts.

    Scripts left empty are removed. Returns a new mapping in the original order.
    """
    targets = set(names)
    result: Dict[str, str] = {}
    for key, command in scripts.items():
        if key not in targets or not isinstance(command, str):
            result[key] = command
            continue
        stripped = strip_test_steps(command)
        if stripped != command:
            logger.debug("Stripped test steps from script '%s': %r -> %r", key, command, stripped)
        if stripped:
            result[key] = stripped
    return result
