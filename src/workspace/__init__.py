"""Workspace manifest reconciliation."""

from .models import (
    DependencyChange,
    DependencyStat,
    ManifestUpdate,
    PackageManifest,
    ReconcileOptions,
    ReconcileResult,
)
from .reconcile import reconcile

__all__ = [
    "DependencyChange",
    "DependencyStat",
    "ManifestUpdate",
    "PackageManifest",
    "ReconcileOptions",
    "ReconcileResult",
    "reconcile",
]
