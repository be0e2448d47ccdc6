"""Multi-step wizard engine.

Public API for declaring wizards:

    from stepwise.wizard import AbstractWizard, Field, WizardStep, registry

    class CompanyStep(WizardStep):
        slug = "company"
        fields = [Field("trading_name", str, required=True)]

    @registry.register
    class OnboardingWizard(AbstractWizard):
        slug = "onboarding"
        steps = [CompanyStep, ...]
"""

from stepwise.wizard.base import AbstractWizard
from stepwise.wizard.events import (
    WizardEvent,
    WizardEvents,
    WizardFinished,
    WizardFinishing,
    WizardLoaded,
    WizardSaving,
    wizard_events,
)
from stepwise.wizard.field import Field
from stepwise.wizard.hooks import WizardHooks
from stepwise.wizard.registry import WizardRegistry, registry
from stepwise.wizard.renderer import JSONResponseRenderer, ResponseRenderer
from stepwise.wizard.repository import (
    DatabaseWizardRepository,
    InMemoryWizardRepository,
    WizardRepository,
)
from stepwise.wizard.request import WizardRequest
from stepwise.wizard.step import WizardStep
from stepwise.wizard.step_result import StepResult

__all__ = [
    "AbstractWizard", "WizardStep", "Field", "StepResult", "WizardRequest",
    "WizardHooks", "WizardRegistry", "registry",
    "WizardEvent", "WizardEvents", "WizardLoaded", "WizardSaving",
    "WizardFinishing", "WizardFinished", "wizard_events",
    "ResponseRenderer", "JSONResponseRenderer",
    "WizardRepository", "InMemoryWizardRepository", "DatabaseWizardRepository",
]
