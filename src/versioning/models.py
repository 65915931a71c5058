"""Data models for parsed version ranges."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class PatchStrategy(IntEnum):
    """How loose a range is, from an exact pin up to any version."""
    NONE = 0   # exact: 1.2.3
    PATCH = 1  # tilde: ~1.2.3, 1.2.x
    MINOR = 2  # caret: ^1.2.3, 1.x
    MAJOR = 3  # wildcard: *, x


@dataclass(frozen=True)
class Version:
    """One dependency constraint as written in a manifest.

    Equality is structural over all fields. Ordering ignores ``appendix``
    and follows :func:`versioning.compare.compare_versions`, so two values
    may order as equal without being ``==``.
    """
    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None
    appendix: Optional[str] = None
    patch_strategy: PatchStrategy = PatchStrategy.NONE

    def __post_init__(self):
        if self.patch_strategy != PatchStrategy.MAJOR and self.major is None:
            raise ValueError("only a wildcard range may omit the major component")

    @property
    def is_wildcard(self) -> bool:
        return self.patch_strategy == PatchStrategy.MAJOR

    def __str__(self) -> str:
        return to_string(self)

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) < 0

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) <= 0

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) > 0

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) >= 0


def to_string(version: Version) -> str:
    """Serialize a Version back into its canonical range string.

    ``1.x`` and ``1.2.x`` come back as ``^1`` and ``~1.2``.
    """
    appendix = version.appendix or ""
    if version.patch_strategy == PatchStrategy.MAJOR:
        return "*" + appendix

    parts = []
    for component in (version.major, version.minor, version.patch):
        if component is None:
            break
        parts.append(str(component))
    prefix = {PatchStrategy.PATCH: "~", PatchStrategy.MINOR: "^"}.get(version.patch_strategy, "")
    return prefix + ".".join(parts) + appendix


def _compare(a: Version, b: Version) -> int:
    # Deferred import: compare depends on the models defined above.
    from .compare import compare_versions  # pylint: disable=import-outside-toplevel
    return compare_versions(a, b)
