"""Reporter session model — the only mutable state of the reporter.

A ``Session`` lives for exactly one host attachment.  It owns the
elapsed-time reference used to stamp lines, the aggregate exit status
recorded by the most recent task-end, and whether script-level listeners
are currently installed on the host.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from taskecho.core.elapsed import ElapsedTimeTracker


class ReporterState(str, Enum):
    """Lifecycle of a reporter against its host."""

    DETACHED = "detached"
    ATTACHED = "attached"
    CLOSED = "closed"


# Valid lifecycle transitions — enforced by LifecycleCorrelator.
# CLOSED (detached after having been attached) is terminal.
VALID_TRANSITIONS: dict[ReporterState, set[ReporterState]] = {
    ReporterState.DETACHED: {ReporterState.ATTACHED},
    ReporterState.ATTACHED: {ReporterState.CLOSED},
    ReporterState.CLOSED: set(),
}


class Session(BaseModel):
    """Mutable per-attachment reporter state."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    state: ReporterState = ReporterState.DETACHED
    elapsed: ElapsedTimeTracker = Field(default_factory=ElapsedTimeTracker)
    aggregate_exit_status: int | None = None  # unset until the first task-end
    fine_grained_attached: bool = False

    @property
    def succeeded(self) -> bool:
        """Whether a task-end explicitly recorded success.

        An unset aggregate counts as failure.
        """
        return self.aggregate_exit_status == 0
