"""Built-in wizard types. Importing this package registers them."""

from stepwise.wizards.onboarding import OnboardingWizard  # noqa: F401
