"""Company onboarding: 3-step setup with save/resume.

Steps:
  1. company  → trading name (required), legal name, country (required)
  2. address  → street, city (required), province + postal code
  3. contact  → contact person (required), email, phone

Province and postal code depend on the country: changing the country
in step 1 discards them, so the address step has to be revisited.
"""

from typing import Any

from pydantic import EmailStr
from starlette.responses import RedirectResponse, Response

from stepwise.wizard import AbstractWizard, Field, WizardHooks, WizardRequest, WizardStep, registry

COUNTRIES = ["South Africa", "Namibia", "Zimbabwe", "Mozambique", "Eswatini", "Lesotho"]

PO_BOX_PREFIXES = ("po box", "p.o. box", "p o box", "postnet")


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class CompanyStep(WizardStep):
    slug = "company"
    name = "Company basics"

    fields = [
        Field("trading_name", str, required=True, transform=_strip),
        Field("legal_name", str | None, transform=_strip),
        Field("country", str, required=True),
    ]

    def is_complete(self) -> bool:
        return self.data("trading_name") is not None

    def view_data(self, request: WizardRequest) -> dict[str, Any]:
        return {
            "trading_name": self.data("trading_name"),
            "legal_name": self.data("legal_name"),
            "country": self.data("country"),
        }


class AddressStep(WizardStep):
    slug = "address"
    name = "Address"

    fields = [
        Field("address_line_1", str | None, transform=_strip),
        Field("city", str, required=True, transform=_strip),
        Field("province", str | None, depends_on=["country"]),
        Field("postal_code", str | None, depends_on=["country"]),
    ]

    def is_complete(self) -> bool:
        return self.data("city") is not None

    def view_data(self, request: WizardRequest) -> dict[str, Any]:
        return {
            "country": self.data("country"),
            "address_line_1": self.data("address_line_1"),
            "city": self.data("city"),
            "province": self.data("province"),
            "postal_code": self.data("postal_code"),
        }

    async def handle(self, request: WizardRequest, payload: dict):
        street = (payload.get("address_line_1") or "").lower()
        if street.startswith(PO_BOX_PREFIXES):
            return self.error("A physical address is required, PO boxes are not accepted")
        return self.success(payload)


class ContactStep(WizardStep):
    slug = "contact"
    name = "Contact person"

    fields = [
        Field("contact_name", str, required=True, transform=_strip),
        Field("contact_email", EmailStr | None),
        Field("contact_phone", str | None),
    ]

    def is_complete(self) -> bool:
        return self.data("contact_name") is not None

    def view_data(self, request: WizardRequest) -> dict[str, Any]:
        return {
            "contact_name": self.data("contact_name"),
            "contact_email": self.data("contact_email"),
            "contact_phone": self.data("contact_phone"),
        }

    async def before_saving(self, request: WizardRequest, payload: dict) -> None:
        # Display name used by the completion screen
        trading_name = self.data("trading_name")
        self.set_data("display_name", f"{trading_name} ({payload['contact_name']})")


class OnboardingHooks(WizardHooks):
    cancel_label = "Cancel onboarding"

    async def on_complete(self, wizard: AbstractWizard, request: WizardRequest) -> Response:
        return RedirectResponse(f"/onboarding/complete/{wizard.id}", status_code=303)

    def shared_data(self, wizard: AbstractWizard, request: WizardRequest) -> dict[str, Any]:
        return {"countries": COUNTRIES}


@registry.register
class OnboardingWizard(AbstractWizard):
    slug = "onboarding"
    title = "Company onboarding"
    description = "Set up your company profile, address and contact person"

    steps = [CompanyStep, AddressStep, ContactStep]
    hooks = OnboardingHooks()
