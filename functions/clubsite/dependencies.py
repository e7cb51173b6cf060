"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from fastapi import Depends

from clubsite.auth import TokenService
from clubsite.config import get_settings
from clubsite.content import CollectionStore
from clubsite.kv import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
    SqlKeyValueStore,
)

logger = logging.getLogger(__name__)

_kv_store: KeyValueStore | None = None


def get_kv_store() -> KeyValueStore:
    """
    Return a singleton key-value backend so data persists across requests.
    """
    global _kv_store
    if _kv_store:
        return _kv_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _kv_store = InMemoryKeyValueStore()
    elif settings.redis_url:
        _kv_store = RedisKeyValueStore(
            url=settings.redis_url, key_prefix=settings.redis_key_prefix
        )
    elif settings.database_url:
        _kv_store = SqlKeyValueStore(settings.database_url)
    else:
        _kv_store = InMemoryKeyValueStore()
    logger.info("Key-value backend: %s", _kv_store.__class__.__name__)
    return _kv_store


def get_collection_store(
    kv: KeyValueStore = Depends(get_kv_store),
) -> CollectionStore:
    return CollectionStore(kv)


def get_token_service(kv: KeyValueStore = Depends(get_kv_store)) -> TokenService:
    settings = get_settings()
    return TokenService(
        kv,
        password=settings.auth_password,
        ttl_seconds=settings.auth_token_ttl_seconds,
    )
