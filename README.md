# raftrack

Bookkeeping that a Raft leader keeps about each of its followers: how far
each follower's log is known to match, which index to send next, which
replication state the follower is in, and which append messages (and how
many bytes) are still unacknowledged.

It has no dependencies beyond the standard library.

## Installing

```
pip install raftrack
```

## In-flight window

`raftrack.inflights.Inflights` is a bounded window of append messages sent
but not yet acknowledged. It is limited by message count (`size`) and,
optionally, by total bytes (`max_bytes`; `0` means no byte limit). The byte
limit is soft: one message that takes the total from below the limit to at
or above it is accepted, after which the window reports itself full.

```python
from raftrack.inflights import Inflights

window = Inflights(4, 0)
window.add(10, 100)       # last index in the message, its size in bytes
window.add(11, 120)
len(window)               # 2
window.free_le(10)        # acknowledge everything up to index 10
window.pending()          # [Inflight(index=11, bytes=120)]
window.is_full()          # False
copy = window.clone()     # independent copy
window.reset()            # drop everything in flight
```

`add` raises `RuntimeError` on a full window, so check `is_full()` first.
Indexes passed to `add` are expected to increase monotonically.
Each entry of `pending()` is a frozen `Inflight` with `index` and `bytes`.

## Follower progress

`raftrack.progress.Progress` is a dataclass with the fields `match`, `next`,
`state`, `pending_snapshot`, `recent_active`, `msg_app_flow_paused`,
`inflights` and `is_learner`. Its state is one of the `StateType` members
`PROBE`, `REPLICATE` and `SNAPSHOT`, which print as `StateProbe`,
`StateReplicate` and `StateSnapshot`.

```python
from raftrack.inflights import Inflights
from raftrack.progress import Progress, ProgressMap

pr = Progress(match=1, next=5, inflights=Inflights(256, 0))
pr.become_replicate()                       # next becomes match + 1 (2)
pr.update_on_entries_send(3, 300, pr.next)  # entries 2..4 in flight, next is 5
pr.maybe_update(4)                          # True: follower acknowledged index 4
pr.maybe_decr_to(6, 4)                      # True: rejection moves next to match + 1
pr.is_paused()                              # False

progresses = ProgressMap({1: pr})
print(progresses)   # "1: StateReplicate match=4 next=5 inactive inflight=1"
```

The transitions are:

- `become_probe()` — next becomes `match + 1`, or one past the pending
  snapshot when leaving the snapshot state, if that is larger.
- `become_replicate()` — next becomes `match + 1`.
- `become_snapshot(snapshot_index)` — records the pending snapshot.
- `reset_state(state)` — used by the above; clears the pause flag, the
  pending snapshot and the in-flight window.

`maybe_update(n)` returns `False` for an outdated acknowledgement, and
`maybe_decr_to(rejected, match_hint)` returns `False` for a stale rejection;
neither changes `match` in that case. `optimistic_update(n)` sets next to
`n + 1`. A follower in the snapshot state is always paused.

`update_on_entries_send` raises `ProgressStateError` when called in the
snapshot state.

`ProgressMap` is a `dict` of node id to `Progress` whose string form lists
one progress per line in ascending id order.

## What it does not do

This package holds only per-follower bookkeeping. It does not keep the
cluster configuration, count votes, compute the committed index from a
quorum, store log entries, or send messages; those are left to the code
that uses it.

## Running the tests

```
pip install -e ".[test]"
pytest
```