"""webic asset pipeline -- compiles ``app/`` into ``.dev/`` or ``build/``.

Entry points are the task sequences in :mod:`webic.assets.runner`::

    from webic.assets import AppConfig, run_build

    report = run_build(AppConfig.from_manifest("./my-app"))
    assert report.ok
"""

from webic.assets.results import SequenceReport, TaskResult
from webic.assets.runner import SEQUENCES, run_build, run_clean_build, run_clean_dev, run_dev
from webic.config import AppConfig

__all__ = [
    "SEQUENCES",
    "AppConfig",
    "SequenceReport",
    "TaskResult",
    "run_build",
    "run_clean_build",
    "run_clean_dev",
    "run_dev",
]
