"""AbstractWizard: sequences steps and persists their data.

One wizard object is built per request. It loads stored data when an id
is given, resolves the target step, lets the step process the
submission, saves the merged result in a single repository call and
answers with a rendered step or a redirect.

Lifecycle of a submission (store/update):
  1. step.process(request)       → failure: redirect to the FIRST step with the message
  2. emit WizardSaving
  3. step.before_saving(...)     → may stage extra values via set_data()
  4. drop stored fields whose dependencies changed in the payload
  5. stored + payload + staged   → repository.save_data(...)
  6. last step?                  → WizardFinishing, hooks.on_complete, WizardFinished
     otherwise                   → redirect to the next step
"""

from __future__ import annotations

import logging
from typing import Any

from starlette.responses import RedirectResponse, Response

from stepwise.config import settings
from stepwise.middleware.exceptions import UnknownStepError
from stepwise.schemas.wizard import StepSummary, WizardSummary
from stepwise.wizard.events import (
    WizardEvents,
    WizardFinished,
    WizardFinishing,
    WizardLoaded,
    WizardSaving,
    wizard_events,
)
from stepwise.wizard.field import check_dependency_cycles
from stepwise.wizard.hooks import WizardHooks
from stepwise.wizard.renderer import ResponseRenderer
from stepwise.wizard.repository import WizardRepository
from stepwise.wizard.request import WizardRequest
from stepwise.wizard.step import WizardStep

logger = logging.getLogger(__name__)


class AbstractWizard:
    slug: str = "new-wizard"
    title: str = "New wizard"
    description: str = "A brand new wizard"

    # Step classes in display order
    steps: list[type[WizardStep]] = []
    hooks: WizardHooks = WizardHooks()

    def __init__(
        self,
        repository: WizardRepository,
        renderer: ResponseRenderer,
        *,
        events: WizardEvents | None = None,
        hooks: WizardHooks | None = None,
    ):
        if not self.steps:
            raise ValueError(f"Wizard [{self.slug}] has no steps")

        self.repository = repository
        self.renderer = renderer
        self.events = events or wizard_events
        if hooks is not None:
            self.hooks = hooks

        self._id: int | None = None
        self._current_step = 0
        self._data: dict[str, Any] = {}
        self._additional_data: dict[str, Any] = {}

        self._steps = [step_class(self, i) for i, step_class in enumerate(self.steps)]
        self._step_index: dict[str, int] = {}
        for step in self._steps:
            if step.slug in self._step_index:
                raise ValueError(f"Duplicate step slug [{step.slug}] in wizard [{self.slug}]")
            self._step_index[step.slug] = step.index

        check_dependency_cycles(f for step in self._steps for f in step.declared_fields())

    @classmethod
    def start_url(cls) -> str:
        return f"{settings.wizard_prefix}/{cls.slug}"

    @property
    def id(self) -> int | None:
        return self._id

    @id.setter
    def id(self, value: int | None) -> None:
        self._id = value

    @property
    def step_list(self) -> list[WizardStep]:
        return list(self._steps)

    def exists(self) -> bool:
        return self._id is not None

    # ── Actions ──────────────────────────────────────────────

    async def create(self, request: WizardRequest) -> Response:
        """Render the first step of a new wizard."""
        return self._render_step(request, self._steps[0])

    async def show(
        self, request: WizardRequest, wizard_id: int, slug: str | None = None
    ) -> Response:
        """Render a step of a stored wizard.

        Without a slug, redirect to the step after the last complete one.
        """
        await self._load(wizard_id)

        if slug is None:
            completed = [step.index for step in self._steps if step.is_complete()]
            target = completed[-1] + 1 if completed else 0
            target = min(target, len(self._steps) - 1)
            return self.renderer.redirect(self._steps[target], self)

        return self._render_step(request, self._load_step(slug))

    async def store(self, request: WizardRequest) -> Response:
        """Handle the first submission of a new wizard."""
        return await self._submit(request, self._steps[0])

    async def update(self, request: WizardRequest, wizard_id: int, slug: str) -> Response:
        """Handle a step submission of a stored wizard."""
        await self._load(wizard_id)
        return await self._submit(request, self._load_step(slug))

    async def destroy(self, request: WizardRequest, wizard_id: int) -> Response:
        await self._load(wizard_id)

        await self.hooks.before_delete(self, request)
        await self.repository.delete_wizard(self.slug, wizard_id)
        logger.info(
            f"Deleted wizard {self.slug}/{wizard_id}",
            extra={"wizard_type": self.slug, "wizard_id": wizard_id},
        )

        return RedirectResponse(self.hooks.redirect_to(self), status_code=303)

    # ── Data ─────────────────────────────────────────────────

    def data(self, key: str | None = None, default: Any = None) -> Any:
        """Stored data overlaid with values staged during this request."""
        if key is None:
            return {**self._data, **self._additional_data}
        if key in self._additional_data:
            return self._additional_data[key]
        return self._data.get(key, default)

    def set_data(self, key: str, value: Any) -> None:
        """Stage a value to be persisted with the next save."""
        self._additional_data[key] = value

    def transform_wizard_data(self) -> Any:
        """Value describing the finished wizard, handed to completion hooks."""
        return self.data()

    def summary(self) -> WizardSummary:
        return WizardSummary(
            id=self._id,
            slug=self.slug,
            title=self.title,
            cancel_text=self.hooks.cancel_text(self),
            steps=[
                StepSummary(
                    slug=step.slug,
                    is_complete=step.is_complete(),
                    name=step.name,
                    active=step.index == self._current_step,
                    url=self.step_url(step) if self.exists() else None,
                )
                for step in self._steps
            ],
        )

    def step_url(self, step: WizardStep) -> str:
        return f"{settings.wizard_prefix}/{self.slug}/{self._id}/{step.slug}"

    # ── Internals ────────────────────────────────────────────

    async def _load(self, wizard_id: int) -> None:
        self._id = wizard_id
        self._data = await self.repository.load_data(self.slug, wizard_id)
        logger.debug(
            f"Loaded wizard {self.slug}/{wizard_id}",
            extra={"wizard_type": self.slug, "wizard_id": wizard_id},
        )
        await self.events.dispatch(WizardLoaded(self))

    def _load_step(self, slug: str) -> WizardStep:
        index = self._step_index.get(slug)
        if index is None:
            raise UnknownStepError(self.slug, slug)
        self._current_step = index
        return self._steps[index]

    def _render_step(self, request: WizardRequest, step: WizardStep) -> Response:
        view_data = {**step.view_data(request), **self.hooks.shared_data(self, request)}
        return self.renderer.render_step(step, self, view_data)

    async def _submit(self, request: WizardRequest, step: WizardStep) -> Response:
        result = await step.process(request)

        if not result.successful:
            logger.info(
                f"Step {self.slug}/{step.slug} rejected: {result.error}",
                extra={"wizard_type": self.slug, "wizard_id": self._id, "step": step.slug},
            )
            # Always back to the first step, whichever step failed
            return self.renderer.redirect_with_error(self._steps[0], self, result.error)

        await self._save_step_data(request, step, dict(result.payload))

        if step.index == len(self._steps) - 1:
            return await self._complete(request)

        return self.renderer.redirect(self._steps[step.index + 1], self)

    async def _save_step_data(self, request: WizardRequest, step: WizardStep, payload: dict) -> None:
        await self.events.dispatch(WizardSaving(self))

        await step.before_saving(request, payload)

        invalidated: set[str] = set()
        for s in self._steps:
            invalidated |= s.invalidate_dependent_fields(payload, self._data)

        data = {k: v for k, v in self._data.items() if k not in invalidated}
        data.update(payload)
        data.update(self._additional_data)

        self._id = await self.repository.save_data(self.slug, self._id, data)
        self._data = data
        self._additional_data = {}

        logger.info(
            f"Saved step {self.slug}/{step.slug} of wizard {self._id}",
            extra={
                "wizard_type": self.slug,
                "wizard_id": self._id,
                "step": step.slug,
                "invalidated": sorted(invalidated),
            },
        )

    async def _complete(self, request: WizardRequest) -> Response:
        await self.events.dispatch(WizardFinishing(self))

        response = await self.hooks.on_complete(self, request)

        await self.events.dispatch(WizardFinished(self))

        logger.info(
            f"Completed wizard {self.slug}/{self._id}",
            extra={"wizard_type": self.slug, "wizard_id": self._id},
        )
        return response
