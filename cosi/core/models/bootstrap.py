"""
Bootstrap models — ordered named steps and the log they produce.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BootstrapStep(BaseModel):
    """One named shell command in a bootstrap sequence."""

    name: str
    command: str


class StepRecord(BaseModel):
    """What happened when a step ran."""

    name: str
    command: str
    ok: bool
    output: str = ""
    error: str | None = None


class BootstrapReport(BaseModel):
    """Result of running a bootstrap sequence to completion or first failure."""

    steps: list[StepRecord] = Field(default_factory=list)
    failed_step: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed_step is None

    @property
    def output(self) -> str:
        """Concatenated output of every step that ran."""
        return "".join(record.output for record in self.steps)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "failed_step": self.failed_step,
            "output": self.output,
            "steps": [record.model_dump() for record in self.steps],
        }
