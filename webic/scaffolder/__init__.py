"""webic scaffolder -- creates a new project from the bundled template.

Quick usage::

    from webic.config import ScaffoldConfig
    from webic.scaffolder import ProjectGenerator, ProjectIdentity

    identity = ProjectIdentity(name="my-app", description="A sample app")
    generator = ProjectGenerator(ScaffoldConfig(), identity)
    project_path = await generator.generate()
"""

from webic.scaffolder.generator import ProjectGenerator
from webic.scaffolder.identity import ProjectIdentity, validate_app_name
from webic.scaffolder.instantiator import instantiate, scan_template
from webic.scaffolder.manifest import rewrite
from webic.scaffolder.rules import DEFAULT_RULES, CopyMode, CopyRules

__all__ = [
    "DEFAULT_RULES",
    "CopyMode",
    "CopyRules",
    "ProjectGenerator",
    "ProjectIdentity",
    "instantiate",
    "rewrite",
    "scan_template",
    "validate_app_name",
]
