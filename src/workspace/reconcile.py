"""Reconcile dependency ranges across the manifests of a workspace.

Every manifest's ``dependencies`` and ``devDependencies`` are parsed and folded
into per-name statistics (occurrence count and highest range). Dev
dependencies used by every package are hoisted to the root manifest; the rest
are aligned on the reconciled range. Runtime dependencies are aligned only for
internal packages unless merging is enabled.

Parsing happens before any output is built: one malformed range aborts the
whole run.
"""

from __future__ import annotations

import fnmatch
import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from versioning.compare import max_version
from versioning.compat import range_admits
from versioning.errors import ManifestParseError, ParseErrorKind, VersionParseError
from versioning.models import Version
from versioning.parser import parse_version

from .models import (
    DEPENDENCIES,
    DEV_DEPENDENCIES,
    DependencyChange,
    DependencyStat,
    ManifestUpdate,
    PackageManifest,
    ReconcileOptions,
    ReconcileResult,
)

logger = logging.getLogger(__name__)

ParsedSection = Dict[str, Version]


def _manifest_label(manifest: PackageManifest) -> str:
    return manifest.name or manifest.path or "<unnamed>"


def _parse_section(manifest: PackageManifest, section: str, entries: Dict[str, str]) -> ParsedSection:
    parsed: ParsedSection = {}
    for name, raw in entries.items():
        try:
            if not isinstance(raw, str):
                raise VersionParseError(str(raw), ParseErrorKind.INVALID_FORMAT, "range is not a string")
            parsed[name] = parse_version(raw)
        except VersionParseError as exc:
            raise ManifestParseError(_manifest_label(manifest), section, name, exc) from exc
    return parsed


def parse_manifests(manifests: Sequence[PackageManifest]) -> List[Tuple[ParsedSection, ParsedSection]]:
    """Parse every range of every manifest, failing on the first bad one.

    Returns:
        One (dependencies, devDependencies) pair per manifest, in input order.

    Raises:
        ManifestParseError: naming the manifest, section and dependency.
    """
    return [
        (
            _parse_section(m, DEPENDENCIES, m.dependencies),
            _parse_section(m, DEV_DEPENDENCIES, m.dev_dependencies),
        )
        for m in manifests
    ]


def fold_versions(sections: Iterable[ParsedSection]) -> Dict[str, DependencyStat]:
    """Fold parsed sections into ``name -> DependencyStat``.

    Each occurrence bumps the count; the version only changes when a later
    occurrence orders strictly higher.
    """
    stats: Dict[str, DependencyStat] = {}
    for section in sections:
        for name, version in section.items():
            stat = stats.get(name)
            if stat is None:
                stats[name] = DependencyStat(count=1, version=version)
            else:
                stat.count += 1
                stat.version = max_version(stat.version, version)
    return stats


def internal_matcher(options: ReconcileOptions, manifests: Sequence[PackageManifest]) -> Callable[[str], bool]:
    """Build a predicate for workspace-internal dependency names.

    A name is internal if it matches a configured pattern or is itself one
    of the reconciled packages.
    """
    siblings = {m.name for m in manifests if m.name}
    patterns = tuple(options.internal_patterns)

    def _is_internal(name: str) -> bool:
        return name in siblings or any(fnmatch.fnmatchcase(name, p) for p in patterns)

    return _is_internal


def _rewrite(
    manifest: PackageManifest,
    section: str,
    name: str,
    old: str,
    parsed_old: Version,
    target: Version,
    changes: List[DependencyChange],
) -> str:
    new = str(target)
    if new == old:
        return old
    compatible = range_admits(new, parsed_old)
    label = _manifest_label(manifest)
    if not (target.is_wildcard or parsed_old.is_wildcard) and target.major != parsed_old.major:
        logger.warning("%s: %s %s moved across majors from %s to %s", label, section, name, old, new)
    else:
        logger.debug("%s: %s %s aligned from %s to %s", label, section, name, old, new)
    changes.append(DependencyChange(section, name, old, new, compatible))
    return new


def reconcile(
    manifests: Sequence[PackageManifest],
    options: Optional[ReconcileOptions] = None,
) -> ReconcileResult:
    """Reconcile the dependency ranges of ``manifests``.

    Args:
        manifests: Package manifests, folded in the given order.
        options: Reconciliation policy; defaults to ReconcileOptions().

    Returns:
        ReconcileResult with the root maps and one ManifestUpdate per manifest.

    Raises:
        ManifestParseError: if any range fails to parse. Nothing is produced.
    """
    options = options or ReconcileOptions()
    manifests = list(manifests)
    parsed = parse_manifests(manifests)
    total = len(manifests)

    dep_stats = fold_versions(deps for deps, _ in parsed)
    dev_stats = fold_versions(dev for _, dev in parsed)
    is_internal = internal_matcher(options, manifests)

    hoisted = {name for name, stat in dev_stats.items() if stat.count == total}
    result = ReconcileResult(
        root_dependencies={
            name: str(stat.version)
            for name, stat in sorted(dep_stats.items())
            if stat.count == total
        },
        root_dev_dependencies={name: str(dev_stats[name].version) for name in sorted(hoisted)},
        dependency_stats=dep_stats,
        dev_dependency_stats=dev_stats,
    )

    for manifest, (deps, dev) in zip(manifests, parsed):
        changes: List[DependencyChange] = []

        new_deps: Dict[str, str] = {}
        for name, old in manifest.dependencies.items():
            if options.merge_dependencies or is_internal(name):
                new_deps[name] = _rewrite(
                    manifest, DEPENDENCIES, name, old, deps[name], dep_stats[name].version, changes
                )
            else:
                new_deps[name] = old

        new_dev: Dict[str, str] = {}
        for name, old in manifest.dev_dependencies.items():
            if name in hoisted:
                changes.append(DependencyChange(DEV_DEPENDENCIES, name, old, None))
                continue
            new_dev[name] = _rewrite(
                manifest, DEV_DEPENDENCIES, name, old, dev[name], dev_stats[name].version, changes
            )

        result.updates.append(ManifestUpdate(manifest.name, new_deps, new_dev, changes))

    if is_debug_enabled(logger):
        logger.debug(
            "Reconciled workspace",
            extra=extra_context(
                event="decision",
                component="reconcile",
                action="reconcile",
                count=total,
                hoisted=len(hoisted),
                merge=options.merge_dependencies,
            ),
        )
    logger.info(
        "Reconciled %d manifests: %d dependencies, %d dev dependencies, %d hoisted",
        total, len(dep_stats), len(dev_stats), len(hoisted),
    )
    return result
