"""Registry of wizard types, looked up by slug from the URL."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stepwise.middleware.exceptions import UnknownWizardError

if TYPE_CHECKING:
    from stepwise.wizard.base import AbstractWizard


class WizardRegistry:
    def __init__(self):
        self._wizards: dict[str, type["AbstractWizard"]] = {}

    def register(self, wizard_class: type["AbstractWizard"]) -> type["AbstractWizard"]:
        """Add a wizard class. Usable as a class decorator."""
        existing = self._wizards.get(wizard_class.slug)
        if existing is not None and existing is not wizard_class:
            raise ValueError(
                f"Wizard slug [{wizard_class.slug}] is already used by {existing.__name__}"
            )
        self._wizards[wizard_class.slug] = wizard_class
        return wizard_class

    def get(self, slug: str) -> type["AbstractWizard"]:
        try:
            return self._wizards[slug]
        except KeyError:
            raise UnknownWizardError(slug) from None

    def all(self) -> list[type["AbstractWizard"]]:
        return list(self._wizards.values())

    def __contains__(self, slug: str) -> bool:
        return slug in self._wizards


registry = WizardRegistry()
