"""Exceptions raised while parsing dependency version ranges."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    """Category of a version range parse failure."""
    INVALID_FORMAT = "InvalidFormat"
    COMPONENT_OVERFLOW = "ComponentOverflow"
    EMPTY = "Empty"


class VersionParseError(ValueError):
    """A single range string could not be parsed."""

    def __init__(self, raw: str, kind: ParseErrorKind, reason: Optional[str] = None):
        self.raw = raw
        self.kind = kind
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"{kind.value} version range '{raw}'{detail}")


class ManifestParseError(VersionParseError):
    """A range string inside a manifest could not be parsed.

    Carries enough context to point the user at the offending entry.
    """

    def __init__(self, manifest: str, section: str, dependency: str, cause: VersionParseError):
        self.manifest = manifest
        self.section = section
        self.dependency = dependency
        super().__init__(cause.raw, cause.kind, cause.reason)
        self.args = (
            f"{manifest}: {section}.{dependency} has {cause.kind.value} version range '{cause.raw}'",
        )
