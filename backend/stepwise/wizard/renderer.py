"""Turn wizard outcomes into HTTP responses.

The wizard never builds step responses itself; it asks a renderer to
show a step or to send the client to one. JSONResponseRenderer answers
with the wizard summary plus the step's view data, and redirects with
303 so browsers follow up with a GET.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse, RedirectResponse, Response

from stepwise.schemas.wizard import RenderedStep

if TYPE_CHECKING:
    from stepwise.wizard.base import AbstractWizard
    from stepwise.wizard.step import WizardStep


class ResponseRenderer(abc.ABC):
    @abc.abstractmethod
    def render_step(
        self, step: "WizardStep", wizard: "AbstractWizard", view_data: dict[str, Any]
    ) -> Response:
        ...

    @abc.abstractmethod
    def redirect(self, step: "WizardStep", wizard: "AbstractWizard") -> Response:
        ...

    @abc.abstractmethod
    def redirect_with_error(
        self, step: "WizardStep", wizard: "AbstractWizard", message: str | None = None
    ) -> Response:
        ...


class JSONResponseRenderer(ResponseRenderer):
    def render_step(self, step, wizard, view_data):
        body = RenderedStep(wizard=wizard.summary(), step=step.slug, view_data=view_data)
        return JSONResponse(jsonable_encoder(body))

    def redirect(self, step, wizard):
        return RedirectResponse(self.target_url(step, wizard), status_code=303)

    def redirect_with_error(self, step, wizard, message=None):
        url = self.target_url(step, wizard)
        if message:
            url = f"{url}?{urlencode({'error': message})}"
        return RedirectResponse(url, status_code=303)

    @staticmethod
    def target_url(step: "WizardStep", wizard: "AbstractWizard") -> str:
        # A wizard without an id can only be (re)started from its first step
        if not wizard.exists():
            return wizard.start_url()
        return wizard.step_url(step)
