"""Host builds the model builder can read."""

from __future__ import annotations

from buildmodel.hosts.maven import load_maven_project
from buildmodel.hosts.memory import (
    MemoryComponent,
    MemoryConfiguration,
    MemoryDependency,
    MemoryExtension,
    MemoryProject,
    MemoryResolutionResult,
    MemoryTask,
    ModuleCoordinate,
)
from buildmodel.hosts.snapshot import Snapshot, load_snapshot, snapshot_from_dict

__all__ = [
    "MemoryComponent",
    "MemoryConfiguration",
    "MemoryDependency",
    "MemoryExtension",
    "MemoryProject",
    "MemoryResolutionResult",
    "MemoryTask",
    "ModuleCoordinate",
    "Snapshot",
    "load_maven_project",
    "load_snapshot",
    "snapshot_from_dict",
]
