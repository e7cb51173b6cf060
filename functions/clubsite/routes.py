"""
HTTP routes for the club data API.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response
from pydantic import ValidationError as PydanticValidationError

from clubsite.auth import TokenService
from clubsite.content import COLLECTION_NAMES, CollectionStore, validate_collection
from clubsite.dependencies import get_collection_store, get_token_service
from clubsite.errors import NotFoundError, SerializationError, ValidationError
from clubsite.schemas import (
    AuthRequest,
    AuthResponse,
    DataRequest,
    SeedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

VALID_ACTIONS = ("create", "update", "delete", "save")


async def _read_json(request: Request) -> dict:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SerializationError("Invalid JSON body") from exc
    if not isinstance(body, dict):
        raise SerializationError("Invalid JSON body")
    return body


@router.get("/data")
def list_collection(
    collection: Optional[str] = Query(None, alias="type"),
    store: CollectionStore = Depends(get_collection_store),
):
    return store.get_all(validate_collection(collection))


@router.post("/data")
async def mutate_collection(
    request: Request,
    authorization: Optional[str] = Header(None),
    store: CollectionStore = Depends(get_collection_store),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Apply one create/update/delete/save action. Requires a bearer token.
    """
    tokens.require(authorization)
    body = await _read_json(request)
    try:
        payload = DataRequest.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid request body") from exc

    collection = validate_collection(payload.type)

    if payload.action == "create":
        if payload.data is None:
            raise ValidationError("Missing data")
        if not isinstance(payload.data, dict):
            raise ValidationError("Data must be an object")
        return {"success": True, "item": store.create(collection, payload.data)}

    if payload.action == "update":
        if not payload.id or payload.data is None:
            raise ValidationError("Missing id or data")
        if not isinstance(payload.data, dict):
            raise ValidationError("Data must be an object")
        item = store.update(collection, payload.id, payload.data)
        if item is None:
            raise NotFoundError("Item not found")
        return {"success": True, "item": item}

    if payload.action == "delete":
        if not payload.id:
            raise ValidationError("Missing id")
        if not store.delete(collection, payload.id):
            raise NotFoundError("Item not found")
        return {"success": True}

    if payload.action == "save":
        if not isinstance(payload.data, list):
            raise ValidationError("Data must be an array")
        store.replace_all(collection, payload.data)
        logger.info("Replaced %s with %d records", collection, len(payload.data))
        return {"success": True}

    raise ValidationError("Invalid action. Use: " + ", ".join(VALID_ACTIONS))


@router.post("/auth", response_model=AuthResponse)
async def login(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
):
    body = await _read_json(request)
    try:
        payload = AuthRequest.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError("Password required") from exc
    return AuthResponse(token=tokens.login(payload.password))


@router.post(
    "/seed", response_model=SeedResponse, response_model_exclude_none=True
)
def seed(store: CollectionStore = Depends(get_collection_store)):
    if not store.seed():
        return SeedResponse(message="Data already seeded")
    return SeedResponse(message="Default data seeded", types=list(COLLECTION_NAMES))


@router.options("/data")
@router.options("/auth")
@router.options("/seed")
def preflight():
    return Response(status_code=204)
