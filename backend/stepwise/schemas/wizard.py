"""Pydantic schemas for wizard responses."""

from typing import Any

from pydantic import BaseModel


class StepSummary(BaseModel):
    slug: str
    is_complete: bool
    name: str
    active: bool
    url: str | None = None


class WizardSummary(BaseModel):
    id: int | None = None
    slug: str
    title: str
    cancel_text: str
    steps: list[StepSummary]


class RenderedStep(BaseModel):
    """Body returned when a step is shown."""
    wizard: WizardSummary
    step: str
    view_data: dict[str, Any] = {}


class WizardTypeInfo(BaseModel):
    slug: str
    title: str
    description: str
    start_url: str
