"""Wizard lifecycle events and their dispatcher.

Firing points:
  - WizardLoaded     → right after stored data was read for an id
  - WizardSaving     → right before the merged data is persisted
  - WizardFinishing  → before the wizard's completion hook runs
  - WizardFinished   → after the completion hook returned

Listeners are registered per event class and may be plain functions or
coroutines. They run in registration order; an exception raised by a
listener aborts the request.
"""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from stepwise.wizard.base import AbstractWizard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WizardEvent:
    wizard: "AbstractWizard"


class WizardLoaded(WizardEvent):
    pass


class WizardSaving(WizardEvent):
    pass


class WizardFinishing(WizardEvent):
    pass


class WizardFinished(WizardEvent):
    pass


Listener = Callable[[WizardEvent], Any]


class WizardEvents:
    def __init__(self):
        self._listeners: dict[type[WizardEvent], list[Listener]] = defaultdict(list)

    def listen(self, event_type: type[WizardEvent], listener: Listener) -> Listener:
        self._listeners[event_type].append(listener)
        return listener

    def on(self, event_type: type[WizardEvent]):
        """Decorator form of ``listen``."""

        def decorator(listener: Listener) -> Listener:
            return self.listen(event_type, listener)

        return decorator

    def forget(self, event_type: type[WizardEvent] | None = None) -> None:
        if event_type is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event_type, None)

    async def dispatch(self, event: WizardEvent) -> None:
        listeners = self._listeners.get(type(event), [])
        logger.debug(
            f"Dispatching {type(event).__name__} to {len(listeners)} listener(s)",
            extra={"wizard_type": event.wizard.slug, "wizard_id": event.wizard.id},
        )
        for listener in listeners:
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.error(
                    f"Listener {listener!r} failed for {type(event).__name__}",
                    exc_info=True,
                )
                raise


# Process-wide dispatcher used when a wizard is built without its own
wizard_events = WizardEvents()
