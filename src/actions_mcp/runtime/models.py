"""Data models for the invocation lifecycle."""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field

from actions_mcp.protocol.models import InvocationResult


class InvocationState(str, Enum):
    """Where an invocation is in its lifecycle."""

    PENDING = "pending"
    VALIDATING = "validating"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (InvocationState.SUCCEEDED, InvocationState.FAILED)


_TRANSITIONS: dict[InvocationState, frozenset[InvocationState]] = {
    InvocationState.PENDING: frozenset({InvocationState.VALIDATING}),
    InvocationState.VALIDATING: frozenset({InvocationState.RUNNING, InvocationState.FAILED}),
    InvocationState.RUNNING: frozenset({InvocationState.SUCCEEDED, InvocationState.FAILED}),
    InvocationState.SUCCEEDED: frozenset(),
    InvocationState.FAILED: frozenset(),
}


class Invocation(BaseModel):
    """One execution of a tool against one set of arguments."""

    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    state: InvocationState = InvocationState.PENDING
    result: InvocationResult | None = None
    error: str | None = None

    def transition(self, state: InvocationState) -> None:
        """Move to *state*, rejecting moves the lifecycle does not allow."""
        if state not in _TRANSITIONS[self.state]:
            msg = f"Invalid invocation transition: {self.state.value} -> {state.value}"
            raise RuntimeError(msg)
        self.state = state

    def succeed(self, result: InvocationResult) -> None:
        self.transition(InvocationState.SUCCEEDED)
        self.result = result

    def fail(self, error: str) -> None:
        self.transition(InvocationState.FAILED)
        self.error = error
