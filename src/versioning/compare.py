"""Total ordering over parsed version ranges.

The ordering ranks the loosest-or-highest constraint last so that a
``max()`` fold over every occurrence of a dependency keeps the range that
subsumes the others:

1. Structurally equal values are equal.
2. A wildcard ranks above every non-wildcard; wildcards tie with each other.
3. Differing majors decide (an absent component sorts below a present one).
4. With equal majors the strategy decides first (exact < tilde < caret),
   then the minor, then the patch.

The appendix never takes part in ordering.
"""

from typing import Iterable, Optional

from .models import Version


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _cmp_optional(a: Optional[int], b: Optional[int]) -> int:
    """Compare two optional components with ``None`` below any number."""
    if a is None or b is None:
        return _cmp(a is not None, b is not None)
    return _cmp(a, b)


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as ``a`` orders below, equal to or above ``b``."""
    if a == b:
        return 0
    if a.is_wildcard or b.is_wildcard:
        return _cmp(a.is_wildcard, b.is_wildcard)

    major = _cmp_optional(a.major, b.major)
    if major:
        return major

    minor = _cmp_optional(a.minor, b.minor)
    strategy = _cmp(a.patch_strategy, b.patch_strategy)
    if strategy < 0:
        return -1
    if strategy > 0:
        return 1
    if minor:
        return minor
    return _cmp_optional(a.patch, b.patch)


def max_version(current: Version, candidate: Version) -> Version:
    """Return ``candidate`` only if it orders strictly above ``current``."""
    if compare_versions(candidate, current) > 0:
        return candidate
    return current


def highest(versions: Iterable[Version]) -> Optional[Version]:
    """Fold an iterable down to its highest value, first-seen wins ties."""
    best = None
    for version in versions:
        best = version if best is None else max_version(best, version)
    return best
