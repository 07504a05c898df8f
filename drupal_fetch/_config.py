from __future__ import annotations

import logging
import os
import typing as tp

import httpx

from drupal_fetch._async._transports import default_async_transport
from drupal_fetch._core.models import AsyncTransport, SyncTransport
from drupal_fetch._exceptions import ConfigurationError, TransportUnavailableError
from drupal_fetch._sync._transports import default_sync_transport

logger = logging.getLogger("drupal_fetch.config")

DEFAULT_ENV_KEY = "DRUPAL_BASE_URL"


def _get_env_string(key: str) -> tp.Optional[str]:
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return None
    return value


def get_drupal_base_url(base_url: tp.Optional[str] = None, env_key: tp.Optional[str] = None) -> str:
    """
    Resolve the Drupal backend origin.

    The explicit `base_url` wins; otherwise the environment variable named by
    `env_key` (default `DRUPAL_BASE_URL`) is read on every call.

    Args:
        base_url: Explicit backend URL.
        env_key: Name of the environment variable to fall back to.

    Returns:
        The absolute http(s) URL without its trailing slash.

    Raises:
        ConfigurationError: If no URL is available, it is not an absolute URL,
            or its scheme is not http/https.
    """
    key = env_key if env_key is not None else DEFAULT_ENV_KEY
    raw_base_url = base_url if base_url is not None else _get_env_string(key)
    if not raw_base_url:
        raise ConfigurationError(f"Missing Drupal base URL (pass base_url or set {key})")

    try:
        parsed = httpx.URL(raw_base_url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f'Invalid Drupal base URL "{raw_base_url}" (expected http(s) URL)') from exc

    if not parsed.scheme or not parsed.host:
        raise ConfigurationError(f'Invalid Drupal base URL "{raw_base_url}" (expected http(s) URL)')

    if parsed.scheme not in ("http", "https"):
        raise ConfigurationError(f'Invalid Drupal base URL scheme "{parsed.scheme}" (expected http/https)')

    normalized = str(parsed)
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def get_async_transport(transport: tp.Optional[AsyncTransport] = None) -> AsyncTransport:
    """
    Return the injected transport, or the default httpx based one.
    """
    if transport is not None:
        if not callable(transport):
            raise TransportUnavailableError(f"Transport must be callable, got {type(transport).__name__}")
        return transport

    logger.debug("Using the default httpx transport")
    return default_async_transport


def get_sync_transport(transport: tp.Optional[SyncTransport] = None) -> SyncTransport:
    """
    Return the injected transport, or the default httpx based one.
    """
    if transport is not None:
        if not callable(transport):
            raise TransportUnavailableError(f"Transport must be callable, got {type(transport).__name__}")
        return transport

    logger.debug("Using the default httpx transport")
    return default_sync_transport
