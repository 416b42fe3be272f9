"""Orchestrator: detect -> assemble -> render."""

from __future__ import annotations

import logging
from pathlib import Path

from buildmodel.assembler import assemble_model
from buildmodel.config import load_config
from buildmodel.context import BuildContext
from buildmodel.detect import load_host, project_dir_of
from buildmodel.renderer.serialize import model_to_dict, render_json, render_yaml
from buildmodel.tasks import task_definitions

logger = logging.getLogger(__name__)


def run(
    target: Path,
    *,
    output: Path | None = None,
    fmt: str = "json",
    config_path: Path | None = None,
    tasks_only: bool = False,
) -> Path:
    """Run the full buildmodel pipeline and return the output path."""
    target = target.resolve()
    project_dir = project_dir_of(target)
    config = load_config(project_dir, config_path)

    root = load_host(target, config)
    logger.debug("Root project: %s (%s)", root.name, root.project_dir)

    context = BuildContext(config=config)
    model = assemble_model(root, context)

    data = task_definitions(model) if tasks_only else model_to_dict(model)
    suffix = "yaml" if fmt == "yaml" else "json"
    stem = "buildmodel-tasks" if tasks_only else "buildmodel"
    out_path = output or (project_dir / f"{stem}.{suffix}")
    if fmt == "yaml":
        render_yaml(data, out_path)
    else:
        render_json(data, out_path)

    logger.info("Generated %s", out_path)
    return out_path
