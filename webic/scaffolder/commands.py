"""External commands run inside a freshly generated project.

Each step declares whether its failure stops scaffolding (``fatal``) or is
only reported as a warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from webic.utils import print_error, run_command


@dataclass(frozen=True)
class ShellStep:
    """One external command and how seriously its failure is taken."""

    name: str
    command: str
    fatal: bool = False
    message: str = ""
    failure: str = ""


def default_steps(install_command: str) -> list[ShellStep]:
    """Install dependencies, create the git repository, relax CRLF checks."""
    return [
        ShellStep(
            "install",
            install_command,
            fatal=True,
            message="Installing packages. This might take a couple of minutes...",
            failure="Failed to install the dependencies.",
        ),
        ShellStep(
            "git-init",
            "git init -b master && git add .",
            failure="Failed to initialize git repo.",
        ),
        ShellStep(
            "git-config",
            "git config core.safecrlf false",
            failure="Failed to configure git repo.",
        ),
    ]


async def run_step(step: ShellStep, cwd: str | Path) -> bool:
    """Run *step* in *cwd* with inherited output streams.

    Returns:
        ``True`` when the command exits with status 0, ``False`` otherwise
        (including when the command cannot be started at all).
    """
    try:
        returncode, _, _ = await run_command(step.command, cwd=cwd, capture=False)
    except OSError as exc:
        print_error(f"Failed to execute {step.command}: {exc}")
        return False
    if returncode != 0:
        print_error(f"Failed to execute {step.command} (exit status {returncode})")
        return False
    return True
