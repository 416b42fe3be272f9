"""Load a build snapshot (JSON or YAML dump of a host build) into memory-host objects.

Layout::

    sourceRoots: [buildSrc/src/main/java]
    components:
      "org.a:a:1": ["org.b:b:1", {requested: "org.x:x:+", unresolved: true}]
    project:
      name: demo
      dir: .
      buildFile: build.gradle
      scriptClasspath: [...]
      plugins: [java]
      extensions:
        - {name: java, type: org.example.JavaExtension}
        - {name: inline, methods: [{name: getFoo, modifiers: [public, abstract]}]}
      configurations:
        - {name: compileClasspath, dependencies: ["org.a:a:1"]}
      tasks:
        - {name: build, group: build, description: Assembles and tests.}
      subprojects: [...]

Relative paths are resolved against the snapshot's directory (project ``dir``
against the parent project's directory).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from buildmodel.errors import SnapshotError
from buildmodel.host import CapabilityDescription, MemberInfo
from buildmodel.hosts.memory import (
    MemoryComponent,
    MemoryConfiguration,
    MemoryDependency,
    MemoryExtension,
    MemoryProject,
    MemoryResolutionResult,
    ModuleCoordinate,
)

logger = logging.getLogger(__name__)

SNAPSHOT_NAMES = (
    "buildmodel-snapshot.json",
    "buildmodel-snapshot.yaml",
    "buildmodel-snapshot.yml",
)


@dataclass
class Snapshot:
    root: MemoryProject
    source_roots: list[Path] = field(default_factory=list)


def load_snapshot(path: Path) -> Snapshot:
    """Read *path* (``.json``, ``.yaml`` or ``.yml``) and build its projects."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Could not read snapshot {path}: {e}") from e

    if path.suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON in {path}: {e}") from e
    else:
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SnapshotError(f"Invalid YAML in {path}: {e}") from e

    return snapshot_from_dict(data, path.parent.resolve())


def snapshot_from_dict(data: dict, base_dir: Path) -> Snapshot:
    if not isinstance(data, dict) or not isinstance(data.get("project"), dict):
        raise SnapshotError("Snapshot must be a mapping with a 'project' mapping")

    components = _mapping(data.get("components"), "components")
    root = _load_project(data["project"], base_dir, base_dir, None, components)
    source_roots = [
        (base_dir / str(r)).resolve()
        for r in _list(data.get("sourceRoots"), "sourceRoots")
    ]
    logger.debug("Loaded snapshot of %s", root.name)
    return Snapshot(root=root, source_roots=source_roots)


def _mapping(value, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SnapshotError(f"'{what}' must be a mapping")
    return value


def _list(value, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotError(f"'{what}' must be a list")
    return value


def _coordinate(text) -> ModuleCoordinate:
    try:
        return ModuleCoordinate.parse(str(text))
    except ValueError as e:
        raise SnapshotError(str(e)) from e


def _load_project(
    data: dict,
    parent_dir: Path,
    base_dir: Path,
    parent: MemoryProject | None,
    components: dict,
) -> MemoryProject:
    name = data.get("name")
    if not name:
        raise SnapshotError("Every project needs a 'name'")

    project_dir = (parent_dir / str(data.get("dir", name if parent else "."))).resolve()
    project = MemoryProject(
        name=str(name),
        project_dir=project_dir,
        build_file=project_dir / str(data.get("buildFile", "build.gradle")),
        parent=parent,
        script_classpath=[
            str((base_dir / str(p)).resolve())
            for p in _list(data.get("scriptClasspath"), "scriptClasspath")
        ],
        plugins=[str(p) for p in _list(data.get("plugins"), "plugins")],
    )

    for ext in _list(data.get("extensions"), "extensions"):
        project.extensions.append(_load_extension(ext))

    for config in _list(data.get("configurations"), "configurations"):
        project.configurations.append(_load_configuration(config, project, components))

    for task in _list(data.get("tasks"), "tasks"):
        if not isinstance(task, dict) or not task.get("name"):
            raise SnapshotError(f"{project.name}: every task needs a 'name'")
        project.add_task(
            str(task["name"]),
            group=task.get("group"),
            description=task.get("description"),
            path=task.get("path"),
        )

    for sub in _list(data.get("subprojects"), "subprojects"):
        if sub is None:
            project.subprojects.append(None)
            continue
        if not isinstance(sub, dict):
            raise SnapshotError(f"{project.name}: subprojects must be mappings")
        project.subprojects.append(
            _load_project(sub, project_dir, base_dir, project, components)
        )

    return project


def _load_extension(data) -> MemoryExtension:
    if not isinstance(data, dict) or not data.get("name"):
        raise SnapshotError("Every extension needs a 'name'")
    if "type" in data:
        return MemoryExtension(str(data["name"]), str(data["type"]))
    description = CapabilityDescription(
        methods=[_load_member(m) for m in _list(data.get("methods"), "methods")],
        fields=[_load_member(f) for f in _list(data.get("fields"), "fields")],
    )
    return MemoryExtension(str(data["name"]), description)


def _load_member(data) -> MemberInfo:
    if isinstance(data, str):
        return MemberInfo(name=data)
    if not isinstance(data, dict) or not data.get("name"):
        raise SnapshotError("Every extension member needs a 'name'")
    return MemberInfo(
        name=str(data["name"]),
        parameter_types=[
            str(t) for t in _list(data.get("parameterTypes"), "parameterTypes")
        ],
        modifiers=frozenset(
            str(m) for m in _list(data.get("modifiers", ["public"]), "modifiers")
        ),
        annotations=[str(a) for a in _list(data.get("annotations"), "annotations")],
    )


def _load_configuration(
    data, project: MemoryProject, components: dict
) -> MemoryConfiguration:
    if not isinstance(data, dict) or not data.get("name"):
        raise SnapshotError(f"{project.name}: every configuration needs a 'name'")
    name = str(data["name"])

    table = dict(components)
    table.update(_mapping(data.get("components"), f"{name}.components"))
    graph = _component_graph(table)

    root = MemoryComponent(
        ModuleCoordinate(str(data.get("group", "")), project.name, "unspecified")
    )
    root.dependencies = [
        _edge(e, graph) for e in _list(data.get("dependencies"), f"{name}.dependencies")
    ]
    return MemoryConfiguration(
        name=name,
        resolution_result=MemoryResolutionResult(root),
        can_be_resolved=bool(data.get("resolvable", True)),
    )


def _component_graph(table: dict) -> dict[str, MemoryComponent]:
    graph = {
        str(coord): MemoryComponent(_coordinate(coord)) for coord in table
    }
    for coord, edges in table.items():
        graph[str(coord)].dependencies = [
            _edge(e, graph) for e in _list(edges, f"components[{coord}]")
        ]
    return graph


def _edge(data, graph: dict[str, MemoryComponent]) -> MemoryDependency:
    if isinstance(data, dict):
        requested = str(data.get("requested") or data.get("selected") or "")
        if not requested:
            raise SnapshotError("Dependency edges need 'requested' or 'selected'")
        if data.get("unresolved"):
            return MemoryDependency.unresolved(requested)
        selected = str(data.get("selected", requested))
        return MemoryDependency(requested, _component(selected, graph))
    return MemoryDependency.resolved(_component(str(data), graph))


def _component(coord: str, graph: dict[str, MemoryComponent]) -> MemoryComponent:
    # Coordinates without an entry in the table are leaves.
    if coord not in graph:
        graph[coord] = MemoryComponent(_coordinate(coord))
    return graph[coord]
