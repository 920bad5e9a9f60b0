"""Seed the note store with realistic notes for screenshots and demos.

Writes through the configured backend (see STICKY_NOTES_* settings), so the
Streamlit app and the MCP server pick the notes up immediately.

Usage:
    python scripts/seed_data.py [--storage-dir ~/.sticky_notes] [--reset]
"""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path

# Allow running as a plain script from the project root.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from sticky_notes.config import Settings, configure_logging  # noqa: E402
from sticky_notes.models import date_to_epoch_ms  # noqa: E402
from sticky_notes.service import build_note_service  # noqa: E402

# Each entry: (title, content, reminder in days from today or None)
NOTES: list[tuple[str, str, int | None]] = [
    ("Groceries", "Eggs, milk, bread, coffee beans and two lemons.", 1),
    ("Dentist", "Check-up at 10:30. Bring the insurance card.", 9),
    ("Book ideas", "A lighthouse keeper who collects other people's letters.", None),
    ("Gym plan", "Mon: legs\nWed: back + biceps\nFri: chest + triceps", None),
    ("Birthday — Ana", "Order the cake on Thursday; she likes lemon.", 4),
    ("Packing list", "Charger, passport, adapters, rain jacket.", 14),
    ("Recipe: pancakes", "2 eggs, 250 ml milk, 125 g flour, pinch of salt.", None),
    ("Wi-Fi at the office", "Network name is on the fridge, not in this note.", None),
]


def main() -> None:
    """Add the demo notes, optionally wiping the existing collection first."""
    parser = argparse.ArgumentParser(description="Seed demo notes")
    parser.add_argument(
        "--storage-dir",
        type=Path,
        default=None,
        help="Override the file backend directory",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every existing note before seeding",
    )
    args = parser.parse_args()

    config = Settings()
    if args.storage_dir is not None:
        config = config.model_copy(update={"storage_dir": args.storage_dir})
    configure_logging(config)
    service = build_note_service(config)

    print(f"\n  Seeding notes into {service.storage.kv.location}")
    print("  " + "=" * 58)

    if args.reset:
        service.storage.save([])
        print("  Existing notes removed.")

    today = date.today()
    for i, (title, content, days) in enumerate(NOTES, 1):
        reminder_at = date_to_epoch_ms(today + timedelta(days=days)) if days is not None else None
        note = service.add_note(title, content, reminder_at)
        print(f"  [{i}/{len(NOTES)}] {note.title} (createdAt={note.created_at})")

    print("  " + "=" * 58)
    print(f"  Done! {service.count} notes stored.")
    print("  Open the app with: streamlit run ui/app.py")
    print()


if __name__ == "__main__":
    main()
