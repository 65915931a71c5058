"""Data models for workspace manifests and reconciliation results."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from constants import Constants
from versioning.models import Version

DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "devDependencies"


@dataclass
class PackageManifest:
    """The parts of a package.json the reconciler reads."""
    name: str
    version: Optional[str] = None
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    path: Optional[str] = None
    document: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DependencyStat:
    """Occurrence count and highest-seen range for one dependency name."""
    count: int
    version: Version


@dataclass(frozen=True)
class ReconcileOptions:
    """Reconciliation policy.

    merge_dependencies rewrites every runtime dependency to its reconciled
    version, not only the internal ones.
    """
    merge_dependencies: bool = False
    internal_patterns: Tuple[str, ...] = tuple(Constants.DEFAULT_INTERNAL_PATTERNS)


@dataclass
class DependencyChange:
    """One rewritten entry in a manifest."""
    section: str
    dependency: str
    old: str
    new: Optional[str]  # None when hoisted to the root
    compatible: Optional[bool] = None


@dataclass
class ManifestUpdate:
    """Updated dependency maps for one input manifest."""
    name: str
    dependencies: Dict[str, str]
    dev_dependencies: Dict[str, str]
    changes: List[DependencyChange] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes)


@dataclass
class ReconcileResult:
    """Everything a reconciliation run produces."""
    root_dependencies: Dict[str, str] = field(default_factory=dict)
    root_dev_dependencies: Dict[str, str] = field(default_factory=dict)
    updates: List[ManifestUpdate] = field(default_factory=list)
    dependency_stats: Dict[str, DependencyStat] = field(default_factory=dict)
    dev_dependency_stats: Dict[str, DependencyStat] = field(default_factory=dict)

    @property
    def hoisted(self) -> List[str]:
        """Dev dependency names moved to the root."""
        return list(self.root_dev_dependencies)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly report of the run."""
        return {
            "rootDependencies": dict(self.root_dependencies),
            "rootDevDependencies": dict(self.root_dev_dependencies),
            "packages": [
                {
                    "name": u.name,
                    "dependencies": dict(u.dependencies),
                    "devDependencies": dict(u.dev_dependencies),
                    "changes": [
                        {
                            "section": c.section,
                            "dependency": c.dependency,
                            "old": c.old,
                            "new": c.new,
                            "compatible": c.compatible,
                        }
                        for c in u.changes
                    ],
                }
                for u in self.updates
            ],
        }
