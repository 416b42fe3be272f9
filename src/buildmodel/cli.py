"""Command-line interface for buildmodel."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from buildmodel.errors import BuildModelError
from buildmodel.pipeline import run

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="buildmodel",
        description="Extract a project model (projects, dependencies, plugins, tasks) for tooling clients.",
    )
    parser.add_argument(
        "target",
        type=Path,
        help="Build snapshot file, or a directory containing a snapshot or pom.xml",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: buildmodel.json next to the build)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        dest="fmt",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: .buildmodel.toml or [tool.buildmodel] in pyproject.toml)",
    )
    parser.add_argument(
        "--tasks",
        action="store_true",
        dest="tasks_only",
        help="Write the flattened task definitions instead of the project model",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("buildmodel").setLevel(logging.DEBUG)

    try:
        run(
            args.target,
            output=args.output,
            fmt=args.fmt,
            config_path=args.config,
            tasks_only=args.tasks_only,
        )
    except BuildModelError as e:
        logger.error("%s", e)
        sys.exit(1)
