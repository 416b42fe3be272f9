"""Collect project tasks and flatten them for tooling clients."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from buildmodel.host import HostProject
from buildmodel.model import Diagnostics, ProjectNode, TaskCache, TaskInfo

logger = logging.getLogger(__name__)


def collect_tasks(
    root: HostProject,
    project: HostProject,
    cache: TaskCache,
    diagnostics: Diagnostics,
) -> list[TaskInfo]:
    """Return *project*'s declared tasks and record each one in *cache* by name."""
    build_file = str(Path(project.build_file).absolute())
    tasks: list[TaskInfo] = []

    for task in project.tasks:
        info = TaskInfo(
            name=task.name,
            group=task.group,
            path=task.path,
            project=project.name,
            build_file=build_file,
            root_project=root.name,
            description=task.description,
        )
        tasks.append(info)
        if cache.put(info):
            diagnostics.overwritten_tasks += 1

    logger.debug("%s: %d tasks", project.name, len(tasks))
    return tasks


def iter_projects(model: ProjectNode) -> Iterator[ProjectNode]:
    """Yield *model* and all of its descendants, parents first."""
    yield model
    for child in model.children:
        yield from iter_projects(child)


def task_definitions(model: ProjectNode) -> list[dict]:
    """Flatten every project's tasks into client task definitions."""
    definitions: list[dict] = []
    for project in iter_projects(model):
        for task in project.tasks:
            definitions.append(
                {
                    "id": project.project_dir + task.path,
                    "script": task.path,
                    "description": task.description,
                    "group": task.group,
                    "project": task.project,
                    "rootProject": task.root_project,
                    "buildFile": task.build_file,
                    "projectFolder": project.project_dir,
                }
            )
    return definitions
