"""WizardStep: one page of a wizard.

A step declares its fields, validates a submission against them,
decides whether it is complete given the wizard's stored data, and
shapes the data handed to the renderer.

Validation uses a pydantic model built from the declared fields, or the
step's explicit ``schema``. A failed validation raises ValidationError
and short-circuits the wizard; business rejections are returned from
``handle`` as ``StepResult.failure``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, create_model
from pydantic import Field as PydanticField

from stepwise.wizard.field import Field
from stepwise.wizard.request import WizardRequest
from stepwise.wizard.step_result import StepResult

if TYPE_CHECKING:
    from stepwise.wizard.base import AbstractWizard


def _kebab(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()


class WizardStep:
    slug: str | None = None
    name: str | None = None

    # Declared fields. Leave empty to derive them from ``schema``.
    fields: list[Field] = []
    # Optional pydantic model validating the whole submission
    schema: type[BaseModel] | None = None

    def __init__(self, wizard: "AbstractWizard", index: int):
        self.wizard = wizard
        self._index = index
        if self.slug is None:
            self.slug = _kebab(type(self).__name__)
        if self.name is None:
            self.name = type(self).__name__
        self._fields = self.declared_fields()
        self._input_model: type[BaseModel] | None = None

    @property
    def index(self) -> int:
        return self._index

    def declared_fields(self) -> list[Field]:
        if self.fields:
            return list(self.fields)
        if self.schema is not None:
            return [
                Field(info.alias or name)
                for name, info in self.schema.model_fields.items()
            ]
        return []

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self._fields]

    # ── Processing ───────────────────────────────────────────

    async def process(self, request: WizardRequest) -> StepResult:
        payload = self.validate(request.data)
        return await self.handle(request, payload)

    def validate(self, data: dict) -> dict[str, Any]:
        """Validate submitted data and return the declared fields.

        Keys that were not submitted are left out, so stored values for
        them survive the save. Raises pydantic.ValidationError.
        """
        model = self.schema or self._build_input_model()
        validated = model.model_validate(data).model_dump(by_alias=True, exclude_unset=True)

        payload = {}
        for f in self._fields:
            if f.name in validated:
                payload[f.name] = f.apply_transform(validated[f.name])
        return payload

    async def handle(self, request: WizardRequest, payload: dict) -> StepResult:
        """Hook for business checks on validated input."""
        return self.success(payload)

    def success(self, payload: dict | None = None) -> StepResult:
        return StepResult.success(payload)

    def error(self, message: str) -> StepResult:
        return StepResult.failure(message)

    def _build_input_model(self) -> type[BaseModel]:
        if self._input_model is None:
            definitions = {}
            for i, f in enumerate(self._fields):
                default = ... if f.required else f.default
                definitions[f"field_{i}"] = (f.rule, PydanticField(default, alias=f.name))
            self._input_model = create_model(
                f"{type(self).__name__}Input",
                __config__=ConfigDict(extra="ignore"),
                **definitions,
            )
        return self._input_model

    # ── Dependent fields ─────────────────────────────────────

    def invalidate_dependent_fields(self, payload: dict, stored: dict) -> set[str]:
        """Names of this step's fields whose dependencies changed.

        Only direct dependencies count; invalidating a field does not in
        turn invalidate the fields that depend on it.
        """
        return {f.name for f in self._fields if f.should_invalidate(payload, stored)}

    # ── Completion and rendering ─────────────────────────────

    def is_complete(self) -> bool:
        return True

    def view_data(self, request: WizardRequest) -> dict[str, Any]:
        return {}

    async def before_saving(self, request: WizardRequest, payload: dict) -> None:
        pass

    # ── Wizard data passthrough ──────────────────────────────

    def data(self, key: str | None = None, default: Any = None) -> Any:
        return self.wizard.data(key, default)

    def set_data(self, key: str, value: Any) -> None:
        self.wizard.set_data(key, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} slug={self.slug!r} index={self._index}>"
