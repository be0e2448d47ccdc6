"""Aggregate model imports for Alembic auto-detection."""

from stepwise.models.wizard import Wizard  # noqa: F401
