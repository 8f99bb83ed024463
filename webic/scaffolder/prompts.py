"""Interactive questions asked before anything is written to disk."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Prompt

from webic.config import DEFAULT_DESCRIPTION
from webic.scaffolder.identity import ProjectIdentity, validate_app_name
from webic.utils import console as default_console
from webic.utils import print_error


def ask_app_name(console: Console | None = None) -> str:
    """Ask for the app name until a valid one is entered."""
    console = console or default_console
    while True:
        answer = Prompt.ask("App name", console=console, default="", show_default=False)
        problem = validate_app_name(answer)
        if problem is None:
            return answer
        print_error(problem)


def ask_app_description(console: Console | None = None, default: str = DEFAULT_DESCRIPTION) -> str:
    console = console or default_console
    return Prompt.ask("App description", console=console, default=default)


def prompt_identity(
    console: Console | None = None,
    default_description: str = DEFAULT_DESCRIPTION,
) -> ProjectIdentity:
    """Run the prompt flow and return the resolved project identity."""
    name = ask_app_name(console)
    description = ask_app_description(console, default=default_description)
    return ProjectIdentity(name=name, description=description)
