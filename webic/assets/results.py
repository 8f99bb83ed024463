"""Outcome models for pipeline tasks and task sequences.

A task that hits a compile error still completes, but its result records the
failure so the sequence runner and the caller can tell a clean run from one
that carried on past an error.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class TaskResult(BaseModel):
    """Outcome of one pipeline task."""

    name: str = Field(..., description="Task name such as 'compile-styles'")
    ok: bool = Field(default=True)
    detail: str = Field(default="", description="Error detail when the task failed")
    duration_seconds: float = Field(default=0.0, ge=0.0)
    outputs: list[str] = Field(default_factory=list, description="Paths written or removed")


class SequenceReport(BaseModel):
    """Ordered results of a task sequence such as ``build``."""

    sequence: str
    environment: str
    results: list[TaskResult] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when every task completed cleanly."""
        return all(result.ok for result in self.results)

    @property
    def failed(self) -> list[TaskResult]:
        return [result for result in self.results if not result.ok]
