"""Outcome of processing a single wizard step."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class StepResult:
    successful: bool
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    error: str | None = None

    @classmethod
    def success(cls, payload: dict | None = None) -> "StepResult":
        return cls(successful=True, payload=MappingProxyType(dict(payload or {})))

    @classmethod
    def failure(cls, message: str) -> "StepResult":
        return cls(successful=False, error=message)
