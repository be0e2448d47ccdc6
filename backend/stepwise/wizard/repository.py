"""Storage for wizard data, keyed by wizard type and id.

Two implementations:
  - InMemoryWizardRepository  → process-local dict, for tests and demos
  - DatabaseWizardRepository  → the `wizards` table via an AsyncSession

``save_data`` always writes the complete data map in one call; callers
merge before saving.
"""

from __future__ import annotations

import abc
import copy
import itertools
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from stepwise.middleware.exceptions import WizardNotFoundError
from stepwise.models.wizard import Wizard

logger = logging.getLogger(__name__)


class WizardRepository(abc.ABC):
    @abc.abstractmethod
    async def load_data(self, wizard_type: str, wizard_id: int) -> dict:
        """Return the stored data map. Raises WizardNotFoundError."""

    @abc.abstractmethod
    async def save_data(self, wizard_type: str, wizard_id: int | None, data: dict) -> int:
        """Create a record (no id) or overwrite an existing one; return its id.

        Raises WizardNotFoundError for an id with no record.
        """

    @abc.abstractmethod
    async def delete_wizard(self, wizard_type: str, wizard_id: int) -> None:
        """Remove the record. Missing records are ignored."""


class InMemoryWizardRepository(WizardRepository):
    def __init__(self, records: dict[str, dict[int, dict]] | None = None):
        self._records: dict[tuple[str, int], dict] = {}
        for wizard_type, by_id in (records or {}).items():
            for wizard_id, data in by_id.items():
                self._records[(wizard_type, wizard_id)] = copy.deepcopy(data)
        start = max((key[1] for key in self._records), default=0) + 1
        self._ids = itertools.count(start)

    async def load_data(self, wizard_type: str, wizard_id: int) -> dict:
        try:
            return copy.deepcopy(self._records[(wizard_type, wizard_id)])
        except KeyError:
            raise WizardNotFoundError(wizard_type, wizard_id) from None

    async def save_data(self, wizard_type: str, wizard_id: int | None, data: dict) -> int:
        if wizard_id is None:
            wizard_id = next(self._ids)
        elif (wizard_type, wizard_id) not in self._records:
            raise WizardNotFoundError(wizard_type, wizard_id)
        self._records[(wizard_type, wizard_id)] = copy.deepcopy(data)
        return wizard_id

    async def delete_wizard(self, wizard_type: str, wizard_id: int) -> None:
        self._records.pop((wizard_type, wizard_id), None)

    def __contains__(self, key: tuple[str, int]) -> bool:
        return key in self._records


class DatabaseWizardRepository(WizardRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, wizard_type: str, wizard_id: int) -> Wizard | None:
        result = await self.db.execute(
            select(Wizard).where(Wizard.id == wizard_id, Wizard.wizard_type == wizard_type)
        )
        return result.scalar_one_or_none()

    async def load_data(self, wizard_type: str, wizard_id: int) -> dict:
        record = await self._find(wizard_type, wizard_id)
        if record is None:
            raise WizardNotFoundError(wizard_type, wizard_id)
        return copy.deepcopy(record.data or {})

    async def save_data(self, wizard_type: str, wizard_id: int | None, data: dict) -> int:
        if wizard_id is None:
            record = Wizard(wizard_type=wizard_type, data=dict(data))
            self.db.add(record)
        else:
            record = await self._find(wizard_type, wizard_id)
            if record is None:
                raise WizardNotFoundError(wizard_type, wizard_id)
            # New dict so the JSON column is flagged dirty
            record.data = dict(data)
        await self.db.flush()
        logger.debug(
            f"Saved wizard {wizard_type}/{record.id}",
            extra={"wizard_type": wizard_type, "wizard_id": record.id, "keys": sorted(data)},
        )
        return record.id

    async def delete_wizard(self, wizard_type: str, wizard_id: int) -> None:
        await self.db.execute(
            delete(Wizard).where(Wizard.id == wizard_id, Wizard.wizard_type == wizard_type)
        )
        await self.db.flush()
