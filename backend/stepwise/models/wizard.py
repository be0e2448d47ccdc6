"""Stored wizard instances.

One row per started wizard. ``wizard_type`` is the slug of the wizard
class that owns the row; ``data`` holds the merged field values of all
steps submitted so far.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from stepwise.database import Base


class Wizard(Base):
    __tablename__ = "wizards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    wizard_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, index=True
    )
