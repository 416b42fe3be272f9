"""Host-independent data model for extracted project models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DependencyKind(str, Enum):
    PROJECT = "project"
    CONFIGURATION = "configuration"
    DEPENDENCY = "dependency"


@dataclass
class DependencyNode:
    """A node in a project's dependency tree."""

    name: str  # project name, configuration name, or "group:artifact:version"
    kind: DependencyKind
    children: list[DependencyNode] = field(default_factory=list)


@dataclass
class MethodDescriptor:
    name: str
    parameter_types: list[str] = field(default_factory=list)
    deprecated: bool = False


@dataclass
class FieldDescriptor:
    name: str
    deprecated: bool = False


@dataclass
class CapabilityClosure:
    """Methods and fields exposed by one extension registered on a project."""

    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)
    fields: list[FieldDescriptor] = field(default_factory=list)


@dataclass
class TaskInfo:
    """A task as seen by the tooling client."""

    name: str
    group: str | None
    path: str
    project: str
    build_file: str
    root_project: str
    description: str | None = None


@dataclass
class ProjectNode:
    """One project of the build, with its subprojects nested in ``children``."""

    is_root: bool
    project_dir: str
    children: list[ProjectNode] = field(default_factory=list)
    tasks: list[TaskInfo] = field(default_factory=list)
    dependency_root: DependencyNode | None = None
    plugins: list[str] = field(default_factory=list)
    closures: list[CapabilityClosure] = field(default_factory=list)
    script_classpath: list[str] = field(default_factory=list)


class TaskCache:
    """Tasks seen during one model build, keyed by task name.

    A later task with the same name replaces the earlier entry.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, TaskInfo] = {}

    def put(self, task: TaskInfo) -> bool:
        """Store *task*; return True if it replaced an entry with the same name."""
        replaced = task.name in self._tasks
        self._tasks[task.name] = task
        return replaced

    def get(self, name: str) -> TaskInfo | None:
        return self._tasks.get(name)

    def clear(self) -> None:
        self._tasks.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self):
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)


@dataclass
class Diagnostics:
    """Counters for inputs left out of the model."""

    non_resolvable_configurations: int = 0
    excluded_configurations: int = 0
    pruned_configurations: int = 0
    unresolved_edges: int = 0
    truncated_dependencies: int = 0
    missing_subprojects: int = 0
    undescribed_extensions: int = 0
    overwritten_tasks: int = 0
    backfilled_tasks: int = 0

    def omissions(self) -> dict[str, int]:
        """Return the non-zero counters that represent dropped input."""
        counters = {
            "non_resolvable_configurations": self.non_resolvable_configurations,
            "excluded_configurations": self.excluded_configurations,
            "pruned_configurations": self.pruned_configurations,
            "unresolved_edges": self.unresolved_edges,
            "missing_subprojects": self.missing_subprojects,
            "undescribed_extensions": self.undescribed_extensions,
        }
        return {k: v for k, v in counters.items() if v}
