"""Pydantic request/response schemas for the sign-in and profile API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class SignInRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"id_token": "eyJhbGciOiJSUzI1NiIsImtpZCI6..."}]}}

    id_token: str = Field(..., min_length=1, max_length=8192)


# --- Response Schemas ---


class AccountSummary(BaseModel):
    id: str
    email: str
    role: str


class SignInResponse(BaseModel):
    success: bool = True
    user: AccountSummary


class AuthStatusResponse(BaseModel):
    is_authenticated: bool
    is_admin: bool


class ProfileResponse(BaseModel):
    id: str
    email: str
    role: str
    created_at: datetime | None = None


class SuccessResponse(BaseModel):
    success: bool = True
