"""Wizards, steps and collaborators shared by the wizard tests."""

from typing import Any

from starlette.responses import RedirectResponse

from stepwise.wizard import (
    AbstractWizard,
    Field,
    JSONResponseRenderer,
    WizardHooks,
    WizardRequest,
    WizardStep,
)


# ── Collaborators ────────────────────────────────────────────

class RecordingRenderer(JSONResponseRenderer):
    """JSON renderer that remembers what it was asked to do."""

    def __init__(self):
        self.calls: list[dict[str, Any]] = []

    def render_step(self, step, wizard, view_data):
        self.calls.append({"action": "render", "step": step.slug, "view_data": view_data})
        return super().render_step(step, wizard, view_data)

    def redirect(self, step, wizard):
        self.calls.append({"action": "redirect", "step": step.slug})
        return super().redirect(step, wizard)

    def redirect_with_error(self, step, wizard, message=None):
        self.calls.append({"action": "redirect_with_error", "step": step.slug, "message": message})
        return super().redirect_with_error(step, wizard, message)

    @property
    def last(self) -> dict[str, Any] | None:
        return self.calls[-1] if self.calls else None

    def did_render(self, slug: str) -> bool:
        return any(c["action"] == "render" and c["step"] == slug for c in self.calls)

    def did_redirect_to(self, slug: str) -> bool:
        return any(c["action"] == "redirect" and c["step"] == slug for c in self.calls)


class RecordingHooks(WizardHooks):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.completed = 0
        self.deleted = 0
        self.completed_with: Any = None
        self.order: list[str] | None = None

    async def on_complete(self, wizard, request):
        self.completed += 1
        self.completed_with = wizard.transform_wizard_data()
        if self.order is not None:
            self.order.append("on_complete")
        return RedirectResponse("/done", status_code=303)

    async def before_delete(self, wizard, request):
        self.deleted += 1


class SharedDataHooks(WizardHooks):
    redirect_url = "/other-route"

    def shared_data(self, wizard, request):
        return {"shared_1": "one", "shared_2": "two"}


# ── Steps ────────────────────────────────────────────────────

class NameStep(WizardStep):
    slug = "name"
    name = "Your name"

    fields = [
        Field("first_name", str, required=True),
        Field("last_name", str, required=True),
    ]

    before_saving_calls = 0

    def view_data(self, request: WizardRequest) -> dict[str, Any]:
        return {
            "first_name": self.data("first_name"),
            "last_name": self.data("last_name"),
        }

    def is_complete(self) -> bool:
        return True

    async def before_saving(self, request: WizardRequest, payload: dict) -> None:
        type(self).before_saving_calls += 1


class ExtrasStep(WizardStep):
    slug = "extras"
    name = "Extras"

    fields = [Field("nickname", str | None)]

    def view_data(self, request: WizardRequest) -> dict[str, Any]:
        return {"foo": "bar"}

    async def before_saving(self, request: WizardRequest, payload: dict) -> None:
        self.set_data("source", "extras-step")

    def is_complete(self) -> bool:
        return False


class FillerStep(WizardStep):
    def is_complete(self) -> bool:
        return True


class RejectingStep(WizardStep):
    slug = "rejecting"

    def is_complete(self) -> bool:
        return False

    async def handle(self, request: WizardRequest, payload: dict):
        return self.error("Something is off")


class RegularStep(WizardStep):
    slug = "regular"

    fields = [
        Field("normal_1"),
        Field("normal_2"),
        Field("normal_3"),
    ]


class DependentStep(WizardStep):
    slug = "dependent"

    fields = [Field("dependent_1", depends_on=["normal_1", "normal_2"])]

    def is_complete(self) -> bool:
        return self.data("dependent_1") is not None


class AnotherDependentStep(WizardStep):
    slug = "another-dependent"

    fields = [
        Field("dependent_2", depends_on=["normal_2"]),
        Field("dependent_3", depends_on=["normal_3"]),
    ]

    def is_complete(self) -> bool:
        return self.data("dependent_2") is not None


# ── Wizards ──────────────────────────────────────────────────

class ProfileWizard(AbstractWizard):
    slug = "profile"
    title = "Profile setup"
    steps = [NameStep, ExtrasStep]


class MultiStepWizard(AbstractWizard):
    slug = "multi-step"
    steps = [NameStep, FillerStep, ExtrasStep]


class SingleStepWizard(AbstractWizard):
    slug = "single-step"
    steps = [NameStep]


class SharedDataWizard(AbstractWizard):
    slug = "shared-data"
    steps = [NameStep]
    hooks = SharedDataHooks()


class RejectingWizard(AbstractWizard):
    slug = "rejecting"
    steps = [RejectingStep]


class RejectLaterWizard(AbstractWizard):
    slug = "reject-later"
    steps = [NameStep, RejectingStep, ExtrasStep]


class DependentWizard(AbstractWizard):
    slug = "dependent"
    steps = [RegularStep, DependentStep]


class MultiDependentWizard(AbstractWizard):
    slug = "multi-dependent"
    steps = [RegularStep, DependentStep, AnotherDependentStep]
