"""Auto-detect what kind of host build a path points at and load it."""

from __future__ import annotations

import logging
from pathlib import Path

from buildmodel.config import BuildModelConfig
from buildmodel.errors import SnapshotError
from buildmodel.host import HostProject
from buildmodel.hosts.maven import load_maven_project
from buildmodel.hosts.snapshot import SNAPSHOT_NAMES, load_snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIXES = (".json", ".yaml", ".yml")


def project_dir_of(target: Path) -> Path:
    """Directory that holds config files and default output for *target*."""
    return target if target.is_dir() else target.parent


def load_host(target: Path, config: BuildModelConfig) -> HostProject:
    """Return the root project of the build at *target*.

    *target* is a snapshot file, a directory containing one, a Maven
    project directory or its pom.xml.  Source roots declared by a snapshot
    are added to *config*.
    """
    snapshot_path = _find_snapshot(target)
    if snapshot_path is not None:
        logger.debug("Loading snapshot %s", snapshot_path)
        snapshot = load_snapshot(snapshot_path)
        for root in snapshot.source_roots:
            if root not in config.source_roots:
                config.source_roots.append(root)
        return snapshot.root

    maven_dir = _find_maven_project(target)
    if maven_dir is not None:
        logger.debug("Loading Maven project %s", maven_dir)
        project = load_maven_project(maven_dir)
        if project is None:
            raise SnapshotError(f"Could not load Maven project at {maven_dir}")
        return project

    raise SnapshotError(f"Could not detect a build at {target}")


def _find_snapshot(target: Path) -> Path | None:
    if target.is_file():
        return target if target.suffix in SNAPSHOT_SUFFIXES else None
    if target.is_dir():
        for name in SNAPSHOT_NAMES:
            candidate = target / name
            if candidate.is_file():
                return candidate
    return None


def _find_maven_project(target: Path) -> Path | None:
    if target.is_file() and target.name == "pom.xml":
        return target.parent
    if target.is_dir() and (target / "pom.xml").exists():
        return target
    return None
