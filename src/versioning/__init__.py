"""Parsing, ordering and serialization of dependency version ranges."""

from .compare import compare_versions, highest, max_version
from .errors import ManifestParseError, ParseErrorKind, VersionParseError
from .models import PatchStrategy, Version, to_string
from .parser import parse_version

__all__ = [
    "PatchStrategy",
    "Version",
    "to_string",
    "parse_version",
    "compare_versions",
    "max_version",
    "highest",
    "ParseErrorKind",
    "VersionParseError",
    "ManifestParseError",
]
