"""Read buildmodel settings from .buildmodel.toml or pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class BuildModelConfig:
    exclude_configurations: list[str] = field(default_factory=list)
    source_roots: list[Path] = field(default_factory=list)
    warn_on_omissions: bool = False

    def is_excluded(self, configuration_name: str) -> bool:
        return any(
            fnmatchcase(configuration_name, pattern)
            for pattern in self.exclude_configurations
        )


def load_config(
    project_dir: Path | None = None, config_path: Path | None = None
) -> BuildModelConfig:
    """Load settings, preferring *config_path*, then .buildmodel.toml, then pyproject.toml."""
    if config_path is not None:
        table = _read_table(config_path, ("buildmodel",))
        if table is None:
            table = _read_table(config_path, ("tool", "buildmodel"))
        return _from_table(table or {}, config_path.parent)

    if project_dir is None:
        return BuildModelConfig()

    for name, keys in (
        (".buildmodel.toml", ("buildmodel",)),
        ("pyproject.toml", ("tool", "buildmodel")),
    ):
        path = project_dir / name
        if not path.exists():
            continue
        table = _read_table(path, keys)
        if table is not None:
            logger.debug("Using config from %s", path)
            return _from_table(table, project_dir)

    return BuildModelConfig()


def _read_table(path: Path, keys: tuple[str, ...]) -> dict | None:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return None

    for key in keys:
        data = data.get(key)
        if not isinstance(data, dict):
            return None
    return data


def _from_table(table: dict, base_dir: Path) -> BuildModelConfig:
    exclude = table.get("exclude-configurations", [])
    roots = table.get("source-roots", [])
    if not isinstance(exclude, list) or not isinstance(roots, list):
        logger.warning(
            "Ignoring malformed buildmodel config: lists expected for "
            "exclude-configurations and source-roots"
        )
        return BuildModelConfig()

    return BuildModelConfig(
        exclude_configurations=[str(p) for p in exclude],
        source_roots=[(base_dir / str(r)).resolve() for r in roots],
        warn_on_omissions=bool(table.get("warn-on-omissions", False)),
    )
