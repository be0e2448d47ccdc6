"""Management CLI for wizard operations.

Usage:
    python -m stepwise.cli list-wizards          # Show registered wizard types
    python -m stepwise.cli purge-stale [DAYS]    # Delete wizards untouched for DAYS
"""

import sys
from datetime import datetime, timedelta

from sqlalchemy import create_engine, delete

import stepwise.wizards  # noqa: F401 (registers built-in wizard types)
from stepwise.config import settings
from stepwise.models.wizard import Wizard
from stepwise.wizard import registry


def list_wizards():
    wizards = registry.all()
    for w in wizards:
        print(f"  {w.slug:<20} {w.title} ({len(w.steps)} steps)  {w.start_url()}")
    print(f"\n{len(wizards)} wizard type(s)")


def purge_stale(days: int | None = None, url: str | None = None) -> int:
    """Delete stored wizards whose last update is older than ``days``."""
    days = settings.stale_wizard_days if days is None else days
    cutoff = datetime.utcnow() - timedelta(days=days)

    engine = create_engine(url or settings.database_url_sync)
    with engine.begin() as conn:
        result = conn.execute(delete(Wizard).where(Wizard.updated_at < cutoff))
    engine.dispose()

    print(f"  Purged {result.rowcount} wizard(s) not updated since {cutoff:%Y-%m-%d}")
    return result.rowcount


if __name__ == "__main__":
    cmd = sys.argv[1] if len(sys.argv) > 1 else ""
    if cmd == "list-wizards":
        list_wizards()
    elif cmd == "purge-stale":
        purge_stale(int(sys.argv[2]) if len(sys.argv) > 2 else None)
    else:
        print("Usage: python -m stepwise.cli [list-wizards|purge-stale [DAYS]]")
