"""
Portico Backend — User Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract for auth and user routes.
How:   FastAPI validates request bodies against these models; failures are
       reported as field-level validation errors (HTTP 412).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TokenRequest(BaseModel):
    """Credentials for POST /api/auth/token."""

    username: str = Field(min_length=1, max_length=255, description="Username or email")
    password: str = Field(min_length=1, max_length=255)
    remember_me: bool = Field(
        default=False,
        description="Issue a long-lived token instead of the standard one",
    )


class RegisterRequest(BaseModel):
    """New account for POST /api/auth/register."""

    username: str = Field(min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return v.lower()


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TokenResponse(BaseModel):
    token: str
    token_type: str = "Bearer"


class UserInfo(BaseModel):
    """Public projection of a user row."""

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = Field(description="UP when the service is accepting requests")
    version: str
    database: str = Field(description="Database connectivity: connected, disconnected")
    redis: str = Field(description="Redis connectivity: connected, disconnected")
