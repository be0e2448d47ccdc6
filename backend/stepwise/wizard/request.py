"""Transport-neutral view of a submitted step request."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from starlette.requests import Request

from stepwise.middleware.exceptions import BusinessLogicError


@dataclass
class WizardRequest:
    # Submitted form fields or JSON object
    data: dict[str, Any] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    http: Request | None = None

    @classmethod
    async def from_http(cls, request: Request) -> "WizardRequest":
        """Read the body of an HTTP request as JSON or form data."""
        content_type = request.headers.get("content-type", "")
        data: dict[str, Any] = {}
        if content_type.startswith("application/json"):
            raw = await request.body()
            try:
                body = json.loads(raw) if raw else {}
            except ValueError:
                body = None
            if not isinstance(body, dict):
                raise BusinessLogicError(
                    "Request body must be a JSON object", error_code="INVALID_BODY"
                )
            data = body
        elif content_type.startswith(
            ("application/x-www-form-urlencoded", "multipart/form-data")
        ):
            form = await request.form()
            # Browsers submit untouched inputs as empty strings
            data = {key: form.get(key) or None for key in form.keys()}
        return cls(data=data, query=dict(request.query_params), http=request)
