"""
Pydantic schemas for the data API.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel


class DataRequest(BaseModel):
    type: Optional[str] = None
    action: Optional[str] = None
    data: Any = None
    id: Optional[str] = None


class AuthRequest(BaseModel):
    password: Optional[str] = None


class AuthResponse(BaseModel):
    success: Literal[True] = True
    token: str


class SeedResponse(BaseModel):
    success: Literal[True] = True
    message: str
    types: Optional[list[str]] = None


class ErrorResponse(BaseModel):
    error: str
