"""A follower's replication progress as seen by the leader."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from raftrack.inflights import Inflights


class StateType(Enum):
    """State of a tracked follower."""

    PROBE = 0
    """Last index unknown; appends are sent periodically to find it."""
    REPLICATE = 1
    """Steady state in which the follower eagerly receives entries."""
    SNAPSHOT = 2
    """The follower needs a snapshot to catch up."""

    def __str__(self) -> str:
        return _STATE_NAMES[self]


_STATE_NAMES = {
    StateType.PROBE: "StateProbe",
    StateType.REPLICATE: "StateReplicate",
    StateType.SNAPSHOT: "StateSnapshot",
}


class ProgressStateError(Exception):
    """Raised when an operation is not valid in the progress's state."""


@dataclass
class Progress:
    """A follower's progress in the view of the leader."""

    match: int = 0
    next: int = 0
    state: StateType = StateType.PROBE
    pending_snapshot: int = 0
    recent_active: bool = False
    msg_app_flow_paused: bool = False
    inflights: Optional[Inflights] = None
    is_learner: bool = False

    def reset_state(self, state: StateType) -> None:
        """Move into ``state``, clearing the pause flag, pending snapshot and inflights."""
        self.msg_app_flow_paused = False
        self.pending_snapshot = 0
        self.state = state
        if self.inflights is not None:
            self.inflights.reset()

    def become_probe(self) -> None:
        """Transition into the probe state.

        Next becomes Match+1 or, if larger, one past the pending snapshot.
        """
        if self.state is StateType.SNAPSHOT:
            pending = self.pending_snapshot
            self.reset_state(StateType.PROBE)
            self.next = max(self.match + 1, pending + 1)
        else:
            self.reset_state(StateType.PROBE)
            self.next = self.match + 1

    def become_replicate(self) -> None:
        """Transition into the replicate state, resetting Next to Match+1."""
        self.reset_state(StateType.REPLICATE)
        self.next = self.match + 1

    def become_snapshot(self, snapshot_index: int) -> None:
        """Transition into the snapshot state with the given pending snapshot."""
        self.reset_state(StateType.SNAPSHOT)
        self.pending_snapshot = snapshot_index

    def update_on_entries_send(self, entries: int, bytes: int, next_index: int) -> None:
        """Account for ``entries`` consecutive entries sent from ``next_index``."""
        if self.state is StateType.REPLICATE:
            if entries > 0:
                last = next_index + entries - 1
                self.optimistic_update(last)
                self.inflights.add(last, bytes)
            # A message that overflows or finds the window full acts as a probe.
            self.msg_app_flow_paused = self.inflights.is_full()
        elif self.state is StateType.PROBE:
            if entries > 0:
                self.msg_app_flow_paused = True
        else:
            raise ProgressStateError(f"sending append in unhandled state {self.state}")

    def maybe_update(self, n: int) -> bool:
        """Handle an ack of index ``n``; return False if it is outdated."""
        updated = False
        if self.match < n:
            self.match = n
            updated = True
            self.msg_app_flow_paused = False
        self.next = max(self.next, n + 1)
        return updated

    def optimistic_update(self, n: int) -> None:
        """Record that appends up to and including ``n`` are in flight."""
        self.next = n + 1

    def maybe_decr_to(self, rejected: int, match_hint: int) -> bool:
        """Handle a rejected append; return False if the rejection is stale."""
        if self.state is StateType.REPLICATE:
            if rejected <= self.match:
                return False
            self.next = self.match + 1
            return True

        # Non-replicating followers are probed one entry at a time.
        if self.next - 1 != rejected:
            return False

        self.next = max(min(rejected, match_hint + 1), 1)
        self.msg_app_flow_paused = False
        return True

    def is_paused(self) -> bool:
        """Return whether sending entries to this follower is throttled."""
        if self.state in (StateType.PROBE, StateType.REPLICATE):
            return self.msg_app_flow_paused
        if self.state is StateType.SNAPSHOT:
            return True
        raise ProgressStateError("unexpected state")

    def __str__(self) -> str:
        parts = [f"{self.state!s} match={self.match} next={self.next}"]
        if self.is_learner:
            parts.append(" learner")
        if self.is_paused():
            parts.append(" paused")
        if self.pending_snapshot > 0:
            parts.append(f" pendingSnap={self.pending_snapshot}")
        if not self.recent_active:
            parts.append(" inactive")
        count = len(self.inflights) if self.inflights is not None else 0
        if count > 0:
            parts.append(f" inflight={count}")
            if self.inflights.is_full():
                parts.append("[full]")
        return "".join(parts)


class ProgressMap(dict):
    """Mapping of node id to Progress."""

    def __str__(self) -> str:
        return "".join(f"{node_id}: {self[node_id]}\n" for node_id in sorted(self))