"""
Service Caching Module

This module provides cached Google Chat API service instances to avoid
rebuilding the discovery client on every request.

httplib2 transports are not thread-safe and the HTTP server handles requests
on a threadpool, so each thread gets its own service (and with it its own
transport).
"""

import threading
from typing import Any

from googleapiclient.discovery import build, Resource

from chat_relay.utils.logger import get_logger

logger = get_logger(__name__)

# Per-thread cache: each thread holds (generation, credentials key, service)
_local = threading.local()

# Bumped by clear_service_cache() to invalidate every thread's entry
_generation_lock = threading.Lock()
_generation = 0


def _get_credentials_key(credentials: Any) -> int:
    """
    Identify a credentials object for cache invalidation.

    Service account credentials refresh their token in place, so the object
    identity (not the token) decides whether the service can be reused.

    Args:
        credentials: The Google service account credentials.

    Returns:
        int: A key identifying the credentials object.
    """
    return id(credentials)


def get_chat_service(credentials: Any) -> Resource:
    """
    Get the calling thread's cached Chat API service instance.

    If a different credentials object is passed, or the cache was cleared,
    a new service is built.

    Args:
        credentials: The authorized Google credentials.

    Returns:
        Resource: The Chat API service instance.
    """
    with _generation_lock:
        generation = _generation

    cred_key = _get_credentials_key(credentials)
    cached = getattr(_local, "entry", None)
    if cached is not None and cached[0] == generation and cached[1] == cred_key:
        return cached[2]

    logger.debug(f"Creating new Chat service instance for thread {threading.get_ident()}")
    service = build("chat", "v1", credentials=credentials, cache_discovery=False)
    _local.entry = (generation, cred_key, service)
    return service


def clear_service_cache() -> None:
    """Invalidate the cached service instances of every thread."""
    global _generation

    with _generation_lock:
        _generation += 1
        logger.debug("Cleared service cache")
