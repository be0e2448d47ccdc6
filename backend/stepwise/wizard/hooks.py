"""Per-wizard-type customization points.

A wizard type supplies a WizardHooks instance instead of overriding
methods on the wizard itself. Every hook receives the wizard it acts on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starlette.responses import RedirectResponse, Response

from stepwise.config import settings
from stepwise.wizard.request import WizardRequest

if TYPE_CHECKING:
    from stepwise.wizard.base import AbstractWizard


class WizardHooks:
    cancel_label: str = "Cancel wizard"
    redirect_url: str | None = None

    def __init__(self, *, cancel_label: str | None = None, redirect_url: str | None = None):
        if cancel_label is not None:
            self.cancel_label = cancel_label
        if redirect_url is not None:
            self.redirect_url = redirect_url

    async def on_complete(self, wizard: "AbstractWizard", request: WizardRequest) -> Response:
        """Runs after the last step was saved. Its response ends the request."""
        return RedirectResponse(self.redirect_to(wizard), status_code=303)

    def redirect_to(self, wizard: "AbstractWizard") -> str:
        """Where to send the user after completion or deletion."""
        return self.redirect_url or settings.redirect_url

    async def before_delete(self, wizard: "AbstractWizard", request: WizardRequest) -> None:
        """Release anything the wizard reserved before its record is deleted."""

    def cancel_text(self, wizard: "AbstractWizard") -> str:
        return self.cancel_label

    def shared_data(self, wizard: "AbstractWizard", request: WizardRequest) -> dict[str, Any]:
        """View data merged into every step this wizard renders."""
        return {}
