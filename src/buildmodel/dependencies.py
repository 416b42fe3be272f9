"""Turn a project's resolved configurations into a dependency tree."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from buildmodel.context import BuildContext
from buildmodel.errors import MalformedHostError
from buildmodel.host import (
    DependencyResult,
    HostConfiguration,
    HostProject,
    ResolvedComponent,
)
from buildmodel.model import DependencyKind, DependencyNode, Diagnostics

logger = logging.getLogger(__name__)


def coordinate(component: ResolvedComponent) -> str:
    """Return ``group:artifact:version`` for *component*."""
    mv = component.module_version
    return f"{mv.group}:{mv.name}:{mv.version}"


def resolve_dependency_tree(
    project: HostProject, context: BuildContext
) -> DependencyNode:
    """Build the PROJECT node for *project* with one child per non-empty configuration."""
    root = DependencyNode(project.name, DependencyKind.PROJECT)
    diagnostics = context.diagnostics

    for config in project.configurations:
        if not config.can_be_resolved:
            diagnostics.non_resolvable_configurations += 1
            logger.debug("%s: skipping non-resolvable %s", project.name, config.name)
            continue
        if context.config.is_excluded(config.name):
            diagnostics.excluded_configurations += 1
            logger.debug("%s: skipping excluded %s", project.name, config.name)
            continue

        config_node = resolve_configuration(config, diagnostics)
        if config_node.children:
            root.children.append(config_node)
        else:
            diagnostics.pruned_configurations += 1
            logger.debug(
                "%s: %s has no resolved dependencies", project.name, config.name
            )

    logger.debug(
        "%s: %d configurations with dependencies", project.name, len(root.children)
    )
    return root


def resolve_configuration(
    config: HostConfiguration, diagnostics: Diagnostics
) -> DependencyNode:
    """Expand one configuration's resolution result into a CONFIGURATION node.

    Each coordinate is expanded only on its first visit within the
    configuration.  Later visits, whether from a cycle or a diamond, become
    leaves.
    """
    root_component = config.resolution_result.root
    if root_component is None:
        raise MalformedHostError(
            f"Resolution result of configuration {config.name!r} has no root component"
        )

    config_node = DependencyNode(config.name, DependencyKind.CONFIGURATION)
    seen: set[str] = set()

    # Explicit stack of (node, remaining edges) instead of recursion so deep
    # graphs do not hit the interpreter's recursion limit.
    stack: list[tuple[DependencyNode, Iterator[DependencyResult]]] = [
        (config_node, iter(root_component.dependencies))
    ]
    while stack:
        parent, edges = stack[-1]
        edge = next(edges, None)
        if edge is None:
            stack.pop()
            continue

        if not edge.is_resolved:
            diagnostics.unresolved_edges += 1
            logger.debug("%s: unresolved %s", config.name, edge.requested)
            continue

        selected = edge.selected
        if selected is None:
            raise MalformedHostError(
                f"Resolved dependency {edge.requested!r} in {config.name!r} "
                "has no selected component"
            )

        name = coordinate(selected)
        node = DependencyNode(name, DependencyKind.DEPENDENCY)
        parent.children.append(node)
        if name in seen:
            diagnostics.truncated_dependencies += 1
            continue
        seen.add(name)
        stack.append((node, iter(selected.dependencies)))

    return config_node

