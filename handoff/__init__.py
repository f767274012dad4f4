"""Single-slot hand-off between one producer thread and one consumer thread.

The pieces:
- a `SharedBuffer` monitor (one lock, one condition, capacity one)
- a producer loop that publishes timestamps into it
- a consumer loop that withdraws and reports them
- a coordinator that runs both threads and joins them

Run it with `python -m handoff.app run`.
"""
