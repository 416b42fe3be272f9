"""Host protocols: the view of a build engine that the model builder reads.

The builder never mutates anything it receives through these interfaces.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol


class ModuleVersion(Protocol):
    group: str
    name: str
    version: str


class ResolvedComponent(Protocol):
    """A component selected during dependency resolution."""

    @property
    def module_version(self) -> ModuleVersion: ...

    @property
    def dependencies(self) -> Iterable[DependencyResult]: ...


class DependencyResult(Protocol):
    """An edge of the resolved graph; ``selected`` is set only when resolved."""

    @property
    def requested(self) -> str: ...

    @property
    def is_resolved(self) -> bool: ...

    @property
    def selected(self) -> ResolvedComponent | None: ...


class ResolutionResult(Protocol):
    @property
    def root(self) -> ResolvedComponent | None: ...


class HostConfiguration(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def can_be_resolved(self) -> bool: ...

    @property
    def resolution_result(self) -> ResolutionResult: ...


class HostTask(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def group(self) -> str | None: ...

    @property
    def path(self) -> str: ...

    @property
    def description(self) -> str | None: ...


class ExtensionSchema(Protocol):
    """An extension a plugin registered on a project, with its public type."""

    @property
    def name(self) -> str: ...

    @property
    def public_type(self) -> Any: ...


class HostProject(Protocol):
    """One project of the host build."""

    @property
    def name(self) -> str: ...

    @property
    def project_dir(self) -> Path: ...

    @property
    def parent(self) -> HostProject | None: ...

    @property
    def subprojects(self) -> Iterable[HostProject | None]: ...

    @property
    def build_file(self) -> Path: ...

    @property
    def script_classpath(self) -> Iterable[str | Path]: ...

    @property
    def configurations(self) -> Iterable[HostConfiguration]: ...

    @property
    def plugins(self) -> Iterable[str]: ...

    @property
    def extensions(self) -> Iterable[ExtensionSchema]: ...

    @property
    def tasks(self) -> Iterable[HostTask]: ...


@dataclass
class MemberInfo:
    """A method or field as reported by a type describer."""

    name: str
    parameter_types: list[str] = field(default_factory=list)
    modifiers: frozenset[str] = frozenset({"public"})
    annotations: list[str] = field(default_factory=list)

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers


@dataclass
class CapabilityDescription:
    """Public members of an extension type."""

    methods: list[MemberInfo] = field(default_factory=list)
    fields: list[MemberInfo] = field(default_factory=list)


class CapabilityDescriber(Protocol):
    """Describes extension types; returns None for types it cannot describe."""

    def describe(self, public_type: Any) -> CapabilityDescription | None: ...
