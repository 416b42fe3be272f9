"""Build the whole project model and reconcile the root project's task list."""

from __future__ import annotations

import logging
from pathlib import Path

from buildmodel.context import BuildContext
from buildmodel.errors import MalformedHostError
from buildmodel.host import HostProject
from buildmodel.model import Diagnostics, ProjectNode, TaskInfo
from buildmodel.tree import build_project_node

logger = logging.getLogger(__name__)

MODEL_NAME = "buildmodel.ProjectModel"


def assemble_model(
    root: HostProject, context: BuildContext | None = None
) -> ProjectNode:
    """Build the model of the whole build rooted at *root*.

    Tasks seen anywhere in the build but missing from the root's own task list
    are appended to it, attributed to the root project and its build file.
    """
    if context is None:
        context = BuildContext()
    context.tasks.clear()
    context.diagnostics = Diagnostics()

    model = build_project_node(root, root, context)
    if model is None:
        raise MalformedHostError("No root project to build a model from")

    task_names = {task.name for task in model.tasks}
    root_build_file = str(Path(root.build_file).absolute())
    for cached in context.tasks:
        if cached.name in task_names:
            continue
        task_names.add(cached.name)
        model.tasks.append(
            TaskInfo(
                name=cached.name,
                group=cached.group,
                path=cached.path,
                project=root.name,
                build_file=root_build_file,
                root_project=cached.root_project,
                description=cached.description,
            )
        )
        context.diagnostics.backfilled_tasks += 1

    diagnostics = context.diagnostics
    logger.debug(
        "Model of %s: %d root tasks (%d backfilled), %d cached task names",
        root.name,
        len(model.tasks),
        diagnostics.backfilled_tasks,
        len(context.tasks),
    )
    omissions = diagnostics.omissions()
    if omissions:
        report = logger.warning if context.config.warn_on_omissions else logger.debug
        report(
            "Left out of the model of %s: %s",
            root.name,
            ", ".join(f"{k}={v}" for k, v in omissions.items()),
        )

    return model


class ProjectModelBuilder:
    """Tooling-model builder entry point: one fresh context per request."""

    def __init__(self, context_factory=BuildContext) -> None:
        self.context_factory = context_factory
        self.last_diagnostics: Diagnostics | None = None

    def can_build(self, model_name: str) -> bool:
        return model_name == MODEL_NAME

    def build_all(self, model_name: str, project: HostProject) -> ProjectNode:
        if not self.can_build(model_name):
            raise ValueError(f"Unsupported model: {model_name}")
        context = self.context_factory()
        model = assemble_model(project, context)
        self.last_diagnostics = context.diagnostics
        return model
