"""CLI entry point for ``create-webic-app``.

Usage::

    create-webic-app
    python -m webic.cli
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from webic.config import ScaffoldConfig
from webic.errors import ScaffoldError
from webic.scaffolder.generator import ProjectGenerator, report_failure
from webic.utils import console


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="create-webic-app",
        description="Create a new Webic app in the current directory.",
        epilog="The app name and description are asked for interactively.",
    )


def main(argv: list[str] | None = None) -> int:
    """Run the interactive scaffolder and return the process exit code."""
    build_parser().parse_args(argv)

    generator = ProjectGenerator(ScaffoldConfig.from_env())
    try:
        asyncio.run(generator.generate())
    except ScaffoldError as exc:
        report_failure(exc)
        console.print()
        return exc.exit_code
    except KeyboardInterrupt:
        console.print()
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
