"""Plain in-memory implementations of the host protocols."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ModuleCoordinate:
    group: str
    name: str
    version: str

    @classmethod
    def parse(cls, text: str) -> ModuleCoordinate:
        """Parse ``group:name:version``."""
        parts = text.split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Expected group:name:version, got {text!r}")
        return cls(*parts)

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"


@dataclass(eq=False)
class MemoryComponent:
    module_version: ModuleCoordinate
    dependencies: list[MemoryDependency] = field(default_factory=list)


@dataclass(eq=False)
class MemoryDependency:
    requested: str
    selected: MemoryComponent | None = None

    @property
    def is_resolved(self) -> bool:
        return self.selected is not None

    @classmethod
    def resolved(cls, component: MemoryComponent) -> MemoryDependency:
        return cls(str(component.module_version), component)

    @classmethod
    def unresolved(cls, requested: str) -> MemoryDependency:
        return cls(requested)


@dataclass(eq=False)
class MemoryResolutionResult:
    root: MemoryComponent | None


@dataclass(eq=False)
class MemoryConfiguration:
    name: str
    resolution_result: MemoryResolutionResult
    can_be_resolved: bool = True


@dataclass
class MemoryTask:
    name: str
    path: str
    group: str | None = None
    description: str | None = None


@dataclass
class MemoryExtension:
    name: str
    public_type: Any


@dataclass(eq=False)
class MemoryProject:
    """A project of an in-memory build; link subprojects with add_subproject()."""

    name: str
    project_dir: Path
    build_file: Path | None = None
    parent: MemoryProject | None = None
    subprojects: list[MemoryProject | None] = field(default_factory=list)
    script_classpath: list[str] = field(default_factory=list)
    configurations: list[MemoryConfiguration] = field(default_factory=list)
    plugins: list[str] = field(default_factory=list)
    extensions: list[MemoryExtension] = field(default_factory=list)
    tasks: list[MemoryTask] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.project_dir = Path(self.project_dir)
        if self.build_file is None:
            self.build_file = self.project_dir / "build.gradle"
        else:
            self.build_file = Path(self.build_file)

    @property
    def path(self) -> str:
        """Gradle-style project path: ``:`` for the root, ``:a:b`` below it."""
        if self.parent is None:
            return ":"
        parent_path = self.parent.path
        if parent_path == ":":
            return f":{self.name}"
        return f"{parent_path}:{self.name}"

    def task_path(self, task_name: str) -> str:
        return f":{task_name}" if self.path == ":" else f"{self.path}:{task_name}"

    def add_subproject(self, child: MemoryProject) -> MemoryProject:
        child.parent = self
        self.subprojects.append(child)
        return child

    def add_task(
        self,
        name: str,
        group: str | None = None,
        description: str | None = None,
        path: str | None = None,
    ) -> MemoryTask:
        task = MemoryTask(name, path or self.task_path(name), group, description)
        self.tasks.append(task)
        return task
