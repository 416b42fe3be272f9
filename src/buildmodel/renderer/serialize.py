"""Serialize a ProjectNode tree for the tooling client."""

from __future__ import annotations

import json
from pathlib import Path

from buildmodel.model import (
    CapabilityClosure,
    DependencyNode,
    ProjectNode,
    TaskInfo,
)


def _dependency_to_dict(node: DependencyNode) -> dict:
    return {
        "name": node.name,
        "type": node.kind.value.upper(),
        "children": [_dependency_to_dict(c) for c in node.children],
    }


def _closure_to_dict(closure: CapabilityClosure) -> dict:
    return {
        "name": closure.name,
        "methods": [
            {
                "name": m.name,
                "parameterTypes": m.parameter_types,
                "deprecated": m.deprecated,
            }
            for m in closure.methods
        ],
        "fields": [{"name": f.name, "deprecated": f.deprecated} for f in closure.fields],
    }


def _task_to_dict(task: TaskInfo) -> dict:
    d = {
        "name": task.name,
        "path": task.path,
        "project": task.project,
        "buildFile": task.build_file,
        "rootProject": task.root_project,
    }
    # Absent and empty are different for the client.
    if task.group is not None:
        d["group"] = task.group
    if task.description is not None:
        d["description"] = task.description
    return d


def model_to_dict(model: ProjectNode) -> dict:
    d: dict = {
        "isRoot": model.is_root,
        "projectPath": model.project_dir,
        "children": [model_to_dict(c) for c in model.children],
        "tasks": [_task_to_dict(t) for t in model.tasks],
        "plugins": model.plugins,
        "pluginClosures": [_closure_to_dict(c) for c in model.closures],
        "scriptClasspaths": model.script_classpath,
    }
    if model.dependency_root is not None:
        d["dependencyNode"] = _dependency_to_dict(model.dependency_root)
    return d


def render_json(data: dict | list, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def render_yaml(data: dict | list, output_path: Path) -> None:
    import yaml

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(yaml.safe_dump(data, sort_keys=False))
