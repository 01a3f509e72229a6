"""
Computation-unit message contract.

On the wire a unit receives one request dict ``{sessions, exercises,
measurements?}`` and answers with exactly one dict: either the success
bundle itself or ``{"error": "<message>"}``.  The orchestrator parses that
answer into the tagged union ``ComputeSuccess | ComputeFailure``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from app.schemas.training import Exercise, Measurement, Session, TrainingSnapshot


class ComputeRequest(BaseModel):
    """Full snapshot handed to a unit."""

    sessions: list[Session] = Field(default_factory=list)
    exercises: list[Exercise] = Field(default_factory=list)
    measurements: list[Measurement] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: TrainingSnapshot) -> ComputeRequest:
        return cls(sessions=snapshot.sessions, exercises=snapshot.exercises, measurements=snapshot.measurements)

    def to_snapshot(self) -> TrainingSnapshot:
        return TrainingSnapshot(sessions=self.sessions, exercises=self.exercises, measurements=self.measurements)


class ComputeSuccess(BaseModel):
    status: Literal["ok"] = "ok"
    unit: str
    bundle: dict[str, Any]


class ComputeFailure(BaseModel):
    status: Literal["error"] = "error"
    unit: str
    error: str


ComputeResult = Annotated[Union[ComputeSuccess, ComputeFailure], Field(discriminator="status")]
