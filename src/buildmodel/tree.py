"""Assemble the model of one project and, recursively, its subprojects."""

from __future__ import annotations

import logging
from pathlib import Path

from buildmodel.closures import extract_closures
from buildmodel.context import BuildContext
from buildmodel.dependencies import resolve_dependency_tree
from buildmodel.host import HostProject
from buildmodel.model import ProjectNode
from buildmodel.tasks import collect_tasks

logger = logging.getLogger(__name__)


def build_project_node(
    root: HostProject | None,
    project: HostProject | None,
    context: BuildContext,
) -> ProjectNode | None:
    """Return the model of *project*, or None when either project is missing."""
    if root is None or project is None:
        return None

    script_classpath = [
        str(Path(entry).absolute()) for entry in project.script_classpath
    ]
    dependency_root = resolve_dependency_tree(project, context)
    plugins = list(project.plugins)
    closures = extract_closures(project.extensions, context)

    children: list[ProjectNode] = []
    for subproject in project.subprojects:
        child = build_project_node(root, subproject, context)
        if child is None:
            context.diagnostics.missing_subprojects += 1
            logger.debug("%s: skipping missing subproject", project.name)
            continue
        children.append(child)

    # Collected after the subprojects so this project's tasks are the last
    # writers for shared names in the task cache.
    tasks = collect_tasks(root, project, context.tasks, context.diagnostics)

    return ProjectNode(
        is_root=project.parent is None,
        project_dir=str(Path(project.project_dir).absolute()),
        children=children,
        tasks=tasks,
        dependency_root=dependency_root,
        plugins=plugins,
        closures=closures,
        script_classpath=script_classpath,
    )
