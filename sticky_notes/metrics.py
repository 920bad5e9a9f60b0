"""Prometheus metrics for the StickyNotes core.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Store metrics
# ---------------------------------------------------------------------------

STORE_OPERATIONS = Counter(
    "sticky_notes_store_operations_total",
    "Total note store operations",
    ["operation", "status"],  # load/save, success/error
)

CORRUPT_LOADS = Counter(
    "sticky_notes_corrupt_loads_total",
    "Loads whose stored blob could not be parsed",
)

PATCHED_NOTES = Counter(
    "sticky_notes_patched_notes_total",
    "Notes loaded with a zero createdAt and given a fresh timestamp",
)

NOTES_STORED = Gauge(
    "sticky_notes_notes",
    "Number of notes in the most recently loaded or saved collection",
)

# ---------------------------------------------------------------------------
# Service metrics
# ---------------------------------------------------------------------------

NOTE_MUTATIONS = Counter(
    "sticky_notes_mutations_total",
    "Note add/edit/delete operations",
    ["action", "status"],  # add/edit/delete, success/not_found/invalid
)
