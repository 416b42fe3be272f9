"""Present a Maven project (and its modules) as a host build, via jgo."""

from __future__ import annotations

import logging
from pathlib import Path

from buildmodel.hosts.memory import (
    MemoryComponent,
    MemoryConfiguration,
    MemoryDependency,
    MemoryProject,
    MemoryResolutionResult,
    ModuleCoordinate,
)

logger = logging.getLogger(__name__)

# Gradle-style classpath configurations, by the Maven scopes they include.
_CONFIGURATIONS = {
    "compileClasspath": {None, "compile", "provided"},
    "runtimeClasspath": {None, "compile", "runtime"},
    "testCompileClasspath": {None, "compile", "provided", "test"},
    "testRuntimeClasspath": {None, "compile", "runtime", "provided", "test"},
}

_PHASES = {
    "clean": "Removes files generated by the previous build.",
    "validate": "Validates that the project is correct.",
    "compile": "Compiles the source code of the project.",
    "test": "Runs the unit tests.",
    "package": "Packages the compiled code.",
    "verify": "Runs checks on the packaged results.",
    "install": "Installs the package into the local repository.",
    "deploy": "Copies the package to the remote repository.",
}


def _open_pom(pom_path: Path):
    """Return (POM, Model) for *pom_path*."""
    from jgo.maven import POM, MavenContext, Model

    pom = POM(pom_path)
    return pom, Model(pom, MavenContext())


def load_maven_project(
    project_dir: Path, parent: MemoryProject | None = None
) -> MemoryProject | None:
    """Build the host project for *project_dir*, or None if its POM is unusable."""
    pom_path = project_dir / "pom.xml"
    if not pom_path.exists():
        logger.debug("No pom.xml in %s", project_dir)
        return None

    try:
        pom, model = _open_pom(pom_path)
    except ImportError:
        logger.warning(
            "jgo not installed; cannot read Maven projects. "
            "Install with: pip install buildmodel[maven]"
        )
        return None
    except (OSError, ValueError, KeyError) as e:
        logger.warning("Could not parse %s: %s", pom_path, e)
        return None

    name = pom.artifactId or project_dir.name
    project = MemoryProject(
        name=name,
        project_dir=project_dir,
        build_file=pom_path,
        parent=parent,
        plugins=list(pom.values("build/plugins/plugin/artifactId")),
    )

    try:
        _, tree = model.dependencies()
    except (OSError, ValueError, KeyError) as e:
        logger.warning("Could not resolve dependencies of %s: %s", name, e)
        tree = None

    if tree is not None:
        for config_name, scopes in _CONFIGURATIONS.items():
            project.configurations.append(
                _configuration(config_name, scopes, tree, pom, name)
            )

    for phase, description in _PHASES.items():
        project.add_task(phase, group="lifecycle", description=description)

    for module in pom.values("modules/module"):
        project.subprojects.append(load_maven_project(project_dir / module, project))

    logger.debug(
        "Maven project %s: %d configurations, %d modules",
        name,
        len(project.configurations),
        len(project.subprojects),
    )
    return project


def _configuration(
    config_name: str, scopes: set, tree, pom, project_name: str
) -> MemoryConfiguration:
    memo: dict[int, MemoryComponent] = {}
    root = MemoryComponent(
        ModuleCoordinate(pom.groupId or "", project_name, "unspecified")
    )
    root.dependencies = [
        MemoryDependency.resolved(_component(child, scopes, memo))
        for child in tree.children
        if child.dep.scope in scopes
    ]
    return MemoryConfiguration(
        name=config_name, resolution_result=MemoryResolutionResult(root)
    )


def _component(node, scopes: set, memo: dict[int, MemoryComponent]) -> MemoryComponent:
    """Convert a jgo dependency-tree node, sharing components for shared nodes."""
    node_id = id(node)
    if node_id in memo:
        return memo[node_id]
    dep = node.dep
    component = MemoryComponent(
        ModuleCoordinate(dep.groupId, dep.artifactId, dep.version)
    )
    memo[node_id] = component
    component.dependencies = [
        MemoryDependency.resolved(_component(child, scopes, memo))
        for child in node.children
        if child.dep.scope in scopes
    ]
    return component
