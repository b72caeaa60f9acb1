"""
Portico Backend — Response Envelope
=====================================

What:  The uniform JSON shape of every response body, success or failure.

    {
        "code": 404,
        "success": false,
        "message": "app.common.exception.notfound",
        "payload": null,          (omitted when null)
        "variables": null         (omitted when null)
    }

`code` mirrors the HTTP status for failures and is 200 for successful
responses. `message` is a localization key (or literal text for
authentication failures); `variables` carries interpolation data for it.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """Uniform response wrapper."""

    code: int = Field(default=200, description="HTTP-status-equivalent result code")
    success: bool = Field(default=True, description="Whether the request succeeded")
    message: Optional[str] = Field(
        default=None,
        description="Localization key or literal message",
    )
    payload: Optional[Any] = Field(default=None, description="Handler result or error details")
    variables: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Interpolation data for a localized message",
    )

    @classmethod
    def ok(cls, payload: Any = None, code: int = 200) -> "Envelope":
        return cls(code=int(code), success=True, payload=payload)

    @classmethod
    def fail(
        cls,
        code: int,
        message: Optional[str] = None,
        payload: Any = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> "Envelope":
        return cls(
            code=int(code),
            success=False,
            message=message,
            payload=payload,
            variables=variables,
        )

    def render(self) -> Dict[str, Any]:
        """JSON-ready dict with unset top-level fields dropped."""
        body = self.model_dump(mode="json")
        return {key: value for key, value in body.items() if value is not None}
