"""Task sequences of the asset pipeline and the ``webic`` command.

Sequences (run inside a generated project)::

    webic dev          # compile into .dev/, serve on localhost, rebuild on change
    webic build        # compile a production build into build/
    webic clean-dev    # remove .dev/
    webic clean-build  # remove build/

Tasks within a sequence run one after another. A task that fails records
the failure and the next task still runs; the sequence report then tells the
caller whether everything completed cleanly.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from rich.markup import escape

from webic.assets.results import SequenceReport, TaskResult
from webic.assets.server import DevServer
from webic.assets.tasks import COMPILE_TASKS, Task, clean
from webic.config import AppConfig
from webic.errors import ConfigError
from webic.utils import clear_screen, console, format_duration, print_error, print_step, print_success

# ---------------------------------------------------------------------------
# Sequence runner
# ---------------------------------------------------------------------------


def report_task(result: TaskResult) -> None:
    """Print one line for a finished task, plus the error detail if it failed."""
    duration = format_duration(result.duration_seconds)
    if result.ok:
        console.print(f"  [green]+[/green] {result.name} [dim]({duration})[/dim]")
    else:
        console.print(f"  [red]x[/red] {result.name} [dim]({duration})[/dim]")
        console.print(f"    [red]{escape(result.detail)}[/red]")


def run_tasks(sequence: str, tasks: Iterable[Task], config: AppConfig) -> SequenceReport:
    """Run *tasks* in order against *config* and collect their results."""
    report = SequenceReport(sequence=sequence, environment=config.environment)
    for run in tasks:
        result = run(config)
        report_task(result)
        report.results.append(result)
    return report


def _banner(config: AppConfig, verb: str) -> None:
    console.print(f"{verb} [yellow]{config.name}[/yellow]")
    console.print(f"Version: {config.version}")
    console.print(f"Mode: {config.environment}")
    console.print()


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------


def open_server(config: AppConfig, server: DevServer) -> TaskResult:
    server.open()
    return TaskResult(name="open-server", outputs=[server.url])


def reload_server(config: AppConfig, server: DevServer) -> TaskResult:
    server.reload()
    return TaskResult(name="reload-server")


def watch(config: AppConfig, server: DevServer) -> TaskResult:
    server.watch(lambda: recompile(config, server))
    return TaskResult(name="watch", outputs=[str(config.path(config.source.root))])


def recompile(config: AppConfig, server: DevServer) -> SequenceReport:
    """Watch callback: compile everything again, then reload the browsers."""
    clear_screen()
    print_step("Compiling your app...")
    report = run_tasks("watch", COMPILE_TASKS, config)
    report.results.append(reload_server(config, server))
    if report.ok:
        print_step("Successfully compiled.")
    else:
        print_step(f"Compiled with {len(report.failed)} failed task(s).")
    return report


def run_dev(config: AppConfig, server: DevServer | None = None) -> SequenceReport:
    """Compile into the development tree, then serve and watch it.

    Blocks in ``server.serve()`` until the process is interrupted.
    """
    config = config.for_environment("development")
    server = server or DevServer(config)

    clear_screen()
    _banner(config, "Starting")

    # A stale development tree may hold files whose sources were deleted.
    report = run_tasks("dev", (clean, *COMPILE_TASKS), config)
    report.results.append(open_server(config, server))
    report.results.append(watch(config, server))

    console.print()
    if report.ok:
        print_success("Your code Successfully compiled.")
    else:
        print_error(f"Compiled with {len(report.failed)} failed task(s), watching for changes.")
    console.print()
    console.print(f"You can view [yellow]{config.name}[/yellow] in your browser: [yellow]{server.url}[/yellow]")
    console.print()
    console.print(f"Get started in [yellow]{config.source.root}[/yellow] directory.")
    console.print()
    console.print("Note that you're in development mode, your app is not optimized.")
    console.print("To create a production build, use: [cyan]webic build[/cyan]")
    console.print()

    server.serve()
    return report


def run_build(config: AppConfig) -> SequenceReport:
    """Compile every asset into the production tree."""
    config = config.for_environment("production")
    console.print()
    _banner(config, "Optimizing your app")

    report = run_tasks("build", COMPILE_TASKS, config)

    if report.ok:
        print_step(
            f"All done! your app [yellow]{config.name}/[/yellow] Successfully optimized.\n\n"
            "Your build folder is ready to be deployed."
        )
    else:
        names = ", ".join(result.name for result in report.failed)
        print_error(f"Build finished with errors in: {names}")
    return report


def run_clean_dev(config: AppConfig) -> SequenceReport:
    config = config.for_environment("development")
    print_step("Cleaning your development...")
    report = run_tasks("clean-dev", (clean,), config)
    print_step("Done.")
    return report


def run_clean_build(config: AppConfig) -> SequenceReport:
    config = config.for_environment("production")
    print_step("Cleaning your production...")
    report = run_tasks("clean-build", (clean,), config)
    print_step("Done.")
    return report


SEQUENCES: dict[str, Callable[[AppConfig], SequenceReport]] = {
    "dev": run_dev,
    "build": run_build,
    "clean-dev": run_clean_dev,
    "clean-build": run_clean_build,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webic",
        description="Webic asset pipeline -- compile, serve and bundle a Webic app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  webic dev\n"
            "  webic build\n"
            "  webic clean-build --project-dir ./my-app\n"
        ),
    )
    parser.add_argument("sequence", choices=sorted(SEQUENCES), help="Task sequence to run")
    parser.add_argument(
        "--project-dir",
        default=".",
        help="Root of the Webic app (default: current directory)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``webic`` / ``python -m webic.assets``."""
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.from_manifest(Path(args.project_dir))
    except ConfigError as exc:
        print_error(str(exc))
        return 1

    try:
        report = SEQUENCES[args.sequence](config)
    except KeyboardInterrupt:
        console.print()
        return 0
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
