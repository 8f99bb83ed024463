"""Main scaffolding orchestrator.

Creates a new webic app: checks the runtime, asks for the project identity,
copies the bundled template into ``<cwd>/<name>``, rewrites the generated
manifests, runs the install and git steps and prints what to do next.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from webic.config import ScaffoldConfig
from webic.errors import ScaffoldError
from webic.paths import project_destination
from webic.scaffolder.commands import ShellStep, default_steps, run_step
from webic.scaffolder.identity import ProjectIdentity
from webic.scaffolder.instantiator import instantiate
from webic.scaffolder.manifest import rewrite as rewrite_manifests
from webic.scaffolder.prompts import prompt_identity
from webic.utils import console, print_error, print_success, print_summary_table, print_warning

EXIT_RUNTIME_TOO_OLD = 1
EXIT_DESTINATION_EXISTS = 1
EXIT_COMMAND_FAILED = -1

# (command, explanation) pairs shown once the project is ready.
USAGE_COMMANDS: list[tuple[str, str]] = [
    ("webic dev", "Starts the development server."),
    ("webic build", "Optimizes and bundles the app for production."),
    ("webic clean-dev", "Removes the development environment."),
    ("webic clean-build", "Removes the production build."),
]


class ProjectGenerator:
    """Drives one ``create-webic-app`` run.

    Attributes:
        config: Scaffolder settings (template location, working directory,
            install command, minimum Python version).
        identity: Project name/description; prompted for when ``None``.
        steps: External commands run inside the new project, in order.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        identity: ProjectIdentity | None = None,
        steps: list[ShellStep] | None = None,
    ) -> None:
        self.config = config
        self.identity = identity
        self.steps = steps if steps is not None else default_steps(config.install_command)

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Create the project and return its root directory.

        Raises:
            ScaffoldError: When the runtime is too old, the destination
                already exists, or a fatal step fails. ``exit_code`` holds
                the status the process should exit with.
        """
        self.check_runtime()

        if self.identity is None:
            self.identity = prompt_identity(default_description=self.config.default_description)
        identity = self.identity

        project_root = project_destination(self.config.cwd, identity.name)

        console.print()
        console.print(f"Creating a new Webic app in [yellow]{project_root}[/yellow]")

        self._create_root(project_root)

        written = await asyncio.to_thread(instantiate, self.config.template_dir, project_root)

        console.print("Setting your app files and configurations...")
        await asyncio.to_thread(
            rewrite_manifests,
            project_root,
            identity,
            self.config.package_manifest,
            self.config.app_manifest,
            self.config.readme,
        )

        await self._run_steps(project_root)

        console.print()
        print_summary_table(
            {
                "App": identity.name,
                "Description": identity.description,
                "Location": str(project_root),
                "Files": str(len(written)),
            },
            title="Webic App",
        )
        print_instructions(identity.name, project_root)
        return project_root

    def check_runtime(self) -> None:
        """Refuse to run on an interpreter older than ``config.min_python``."""
        current = sys.version_info[:2]
        if current < self.config.min_python:
            required = ".".join(str(part) for part in self.config.min_python)
            running = ".".join(str(part) for part in sys.version_info[:3])
            raise ScaffoldError(
                f"You are running Python {running}\n"
                f"Webic App requires Python {required} or higher\n"
                "Please update your version of Python",
                exit_code=EXIT_RUNTIME_TOO_OLD,
            )

    # -- Steps -------------------------------------------------------------

    def _create_root(self, project_root: Path) -> None:
        if project_root.exists():
            raise ScaffoldError(
                f"The directory {project_root} already exists, please try again.",
                exit_code=EXIT_DESTINATION_EXISTS,
            )
        project_root.mkdir()

    async def _run_steps(self, project_root: Path) -> None:
        """Run every declared step; stop on a failed fatal step."""
        warnings: list[str] = []
        for step in self.steps:
            console.print()
            if step.message:
                console.print(step.message)
            ok = await run_step(step, project_root)
            if ok:
                _report_step_success(step)
            elif step.fatal:
                raise ScaffoldError(step.failure or f"{step.name} failed.", exit_code=EXIT_COMMAND_FAILED)
            else:
                warnings.append(step.failure or f"{step.name} failed.")

        if warnings:
            print_warning(" ".join(dict.fromkeys(warnings)))


def _report_step_success(step: ShellStep) -> None:
    if step.name == "install":
        print_success("All packages installed.")
    elif step.name == "git-init":
        print_success("Git Initialized, branch name: [cyan](master)[/cyan]")


def print_instructions(app_name: str, project_root: Path) -> None:
    """Print where the project was created and how to work with it."""
    console.print()
    print_success(f"Created [bold yellow]{app_name}[/bold yellow] in: [yellow]{project_root}[/yellow]")
    console.print()
    console.print("Inside your app directory, you can run the following commands:")
    for command, explanation in USAGE_COMMANDS:
        console.print()
        console.print(f"[cyan]{command}[/cyan]")
        console.print(f"   {explanation}")
    console.print()
    console.print(f"Get started by editing [yellow]{app_name}/app[/yellow] by running:")
    console.print(f"[cyan]   cd[/cyan] {app_name}")
    console.print("[cyan]   webic dev[/cyan]")
    console.print()
    console.print("Let's build stuff!")


def report_failure(error: ScaffoldError) -> None:
    """Print every line of a scaffolding error in the error style."""
    for line in str(error).splitlines():
        print_error(line)
