"""npm range compatibility checks backed by semantic_version."""

import logging
from typing import Optional

import semantic_version

from .models import Version

logger = logging.getLogger(__name__)


def lower_bound(version: Version) -> Optional[str]:
    """Return the lowest concrete version a constraint accepts, or None for wildcards."""
    if version.is_wildcard:
        return None
    core = ".".join(str(c or 0) for c in (version.major, version.minor, version.patch))
    return core + (version.appendix or "")


def range_admits(range_str: str, version: Version) -> Optional[bool]:
    """Tell whether ``range_str`` still accepts the lower bound of ``version``.

    Returns None when either side cannot be interpreted by semantic_version.
    """
    floor = lower_bound(version)
    if floor is None:
        return None
    try:
        spec = semantic_version.NpmSpec(range_str)
        return spec.match(semantic_version.Version(floor))
    except ValueError as exc:
        logger.debug("Cannot check '%s' against '%s': %s", floor, range_str, exc)
        return None
