"""Parser for the npm-style range subset used in workspace manifests.

Supported forms: exact (``1.2.3``, ``1.2``), tilde (``~1.2.3``), caret
(``^1.2.3``), x-ranges (``1.x``, ``1.2.x``) and wildcards (``*``, ``x``,
``x.x.x``, ``*.*``), each with an optional ``-prerelease`` or ``+build``
appendix.
"""

import re
from typing import List, Optional, Tuple

from .errors import ParseErrorKind, VersionParseError
from .models import PatchStrategy, Version

# Components are stored as unsigned 32-bit integers.
MAX_COMPONENT = 2**32 - 1

_DIGITS = re.compile(r"[0-9]+")
# "*", "x", "x.x.x", "*.x" and so on; every component is a wildcard.
_WILDCARD = re.compile(r"[*xX](?:\.[*xX]){0,2}")


def split_appendix(raw: str) -> Tuple[str, Optional[str]]:
    """Split ``raw`` at the first ``-`` or ``+`` into (prefix, appendix)."""
    cut = [i for i in (raw.find("-"), raw.find("+")) if i >= 0]
    if not cut:
        return raw, None
    i = min(cut)
    return raw[:i], raw[i:]


def _component(raw: str, text: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise VersionParseError(raw, ParseErrorKind.INVALID_FORMAT, f"'{text}' is not a number")
    value = int(text)
    if value > MAX_COMPONENT:
        raise VersionParseError(raw, ParseErrorKind.COMPONENT_OVERFLOW, f"{value} exceeds {MAX_COMPONENT}")
    return value


def _numeric_components(raw: str, text: str) -> List[int]:
    parts = text.split(".")
    if len(parts) > 3:
        raise VersionParseError(raw, ParseErrorKind.INVALID_FORMAT, "a version has at most three components")
    return [_component(raw, part) for part in parts]


def parse_version(raw: str) -> Version:
    """Parse one range string into a :class:`Version`.

    Raises:
        VersionParseError: if ``raw`` is empty, malformed or overflows.
    """
    if not raw:
        raise VersionParseError(raw, ParseErrorKind.EMPTY, "the range is empty")

    prefix, appendix = split_appendix(raw)
    if not prefix:
        raise VersionParseError(raw, ParseErrorKind.INVALID_FORMAT, "missing version before appendix")

    lead = prefix[0]
    if lead in ("~", "^"):
        if len(prefix) == 1:
            raise VersionParseError(raw, ParseErrorKind.INVALID_FORMAT, f"nothing follows '{lead}'")
        numbers = _numeric_components(raw, prefix[1:])
        numbers += [None] * (3 - len(numbers))
        strategy = PatchStrategy.PATCH if lead == "~" else PatchStrategy.MINOR
        return Version(numbers[0], numbers[1], numbers[2], appendix, strategy)

    if "0" <= lead <= "9":
        return _parse_plain(raw, prefix, appendix)

    if _WILDCARD.fullmatch(prefix):
        return Version(appendix=appendix, patch_strategy=PatchStrategy.MAJOR)

    raise VersionParseError(raw, ParseErrorKind.INVALID_FORMAT, f"unexpected leading character '{lead}'")


def _parse_plain(raw: str, prefix: str, appendix: Optional[str]) -> Version:
    numbers: List[Optional[int]] = [None, None, None]
    strategy = PatchStrategy.NONE
    for index, part in enumerate(prefix.split(".")):
        if index >= 3:
            raise VersionParseError(raw, ParseErrorKind.INVALID_FORMAT, "a version has at most three components")
        if index == 1 and part == "x":
            strategy = PatchStrategy.MINOR
            break
        if index == 2 and part == "x":
            strategy = PatchStrategy.PATCH
            break
        numbers[index] = _component(raw, part)
    return Version(numbers[0], numbers[1], numbers[2], appendix, strategy)
