from __future__ import annotations

import json
import logging
import typing as tp
from urllib.parse import quote

import httpx

from drupal_fetch._config import get_async_transport, get_drupal_base_url
from drupal_fetch._core._headers import Headers, HeadersInit, merge_headers
from drupal_fetch._core.models import (
    AsyncTransport,
    FetchInit,
    JsonApiDocument,
    MenuResponse,
    ResolveResponse,
)
from drupal_fetch._exceptions import BodyParseError, UpstreamHttpError
from drupal_fetch._policies import CachePolicy, NoStore, apply_cache_policy, select_cache_policy
from drupal_fetch._tags import build_entity_cache_tags, build_view_cache_tags
from drupal_fetch._urls import build_safe_url
from drupal_fetch._utils import (
    DEFAULT_ACCEPT,
    PageOption,
    jsonapi_params,
    page_params,
    set_query_params,
    validate_revalidate,
)

__all__ = ("fetch_jsonapi", "fetch_view", "fetch_menu", "resolve_path")

logger = logging.getLogger("drupal_fetch.fetch")


def _build_headers(init: tp.Optional[FetchInit], headers: tp.Optional[HeadersInit]) -> Headers:
    merged = merge_headers(init.get("headers") if init else None, headers)
    merged.setdefault("Accept", DEFAULT_ACCEPT)
    return merged


async def _send(
    url: httpx.URL,
    headers: Headers,
    init: tp.Optional[FetchInit],
    policy: CachePolicy,
    transport: AsyncTransport,
    error_prefix: str,
) -> tp.Any:
    fetch_init = apply_cache_policy(init, headers, policy)

    if isinstance(policy, NoStore):
        logger.debug(f"Fetching {url} without caching")
    else:
        logger.debug(f"Fetching {url} with revalidate={policy.ttl} and tags={list(policy.tags)}")

    response = await transport(str(url), fetch_init)

    if not response.is_success:
        raise UpstreamHttpError(error_prefix, response.status_code, response.reason_phrase, str(url))

    body = await response.aread()
    try:
        return json.loads(body)
    except ValueError as exc:
        raise BodyParseError(str(url)) from exc


async def fetch_jsonapi(
    jsonapi_path: str,
    *,
    base_url: tp.Optional[str] = None,
    env_key: tp.Optional[str] = None,
    allow_external_urls: bool = False,
    include: tp.Optional[tp.Sequence[str]] = None,
    fields: tp.Optional[tp.Mapping[str, tp.Sequence[str]]] = None,
    revalidate: tp.Optional[float] = None,
    tags: tp.Optional[tp.Sequence[str]] = None,
    transport: tp.Optional[AsyncTransport] = None,
    headers: tp.Optional[HeadersInit] = None,
    init: tp.Optional[FetchInit] = None,
) -> JsonApiDocument:
    """
    Fetch a JSON:API document, e.g. `/jsonapi/node/page/{uuid}`.

    The request is tagged with the entity cache tags of `jsonapi_path` plus
    any extra `tags`. Requests carrying an `Authorization` or `Cookie` header
    are sent with `cache="no-store"` unless `init` sets `cache` explicitly.

    Args:
        jsonapi_path: Path relative to the Drupal base URL, or an absolute URL.
        base_url: Drupal base URL. Defaults to the `env_key` environment variable.
        env_key: Environment variable holding the base URL (`DRUPAL_BASE_URL`).
        allow_external_urls: Allow absolute URLs on a different origin.
        include: Relationship paths for the `include` parameter.
        fields: Sparse fieldsets, keyed by resource type.
        revalidate: Seconds before the cached response must be refreshed.
        tags: Additional cache tags.
        transport: Callable used to send the request. Defaults to httpx.
        headers: Headers taking precedence over `init["headers"]`.
        init: Extra options passed through to the transport.

    Raises:
        TypeError: `include` or a `fields` value is a plain string.
        UpstreamHttpError: The backend answered with a non-success status.
    """
    revalidate = validate_revalidate(revalidate)
    query = jsonapi_params(include, fields)
    base = get_drupal_base_url(base_url, env_key)
    fetcher = get_async_transport(transport)

    url = build_safe_url(jsonapi_path, base, allow_external_urls=allow_external_urls)
    url = set_query_params(url, query)

    request_headers = _build_headers(init, headers)
    policy = select_cache_policy(
        request_headers,
        init,
        revalidate=revalidate,
        tags=[*build_entity_cache_tags(jsonapi_path), *(tags or [])],
    )
    return tp.cast(
        JsonApiDocument,
        await _send(url, request_headers, init, policy, fetcher, "JSON:API fetch failed"),
    )


async def fetch_view(
    data_url: str,
    *,
    base_url: tp.Optional[str] = None,
    env_key: tp.Optional[str] = None,
    allow_external_urls: bool = False,
    page: tp.Optional[PageOption] = None,
    revalidate: tp.Optional[float] = None,
    tags: tp.Optional[tp.Sequence[str]] = None,
    transport: tp.Optional[AsyncTransport] = None,
    headers: tp.Optional[HeadersInit] = None,
    init: tp.Optional[FetchInit] = None,
) -> JsonApiDocument:
    """
    Fetch a jsonapi_views document, e.g. `/jsonapi/views/blog/page_1`.

    `page` is either an int, sent as `page[offset]`, or a mapping with
    `offset` and/or `limit`. The other arguments behave as in `fetch_jsonapi`.
    """
    revalidate = validate_revalidate(revalidate)
    pagination = page_params(page)
    base = get_drupal_base_url(base_url, env_key)
    fetcher = get_async_transport(transport)

    url = build_safe_url(data_url, base, allow_external_urls=allow_external_urls)
    url = set_query_params(url, pagination)

    request_headers = _build_headers(init, headers)
    policy = select_cache_policy(
        request_headers,
        init,
        revalidate=revalidate,
        tags=[*build_view_cache_tags(data_url), *(tags or [])],
    )
    return tp.cast(
        JsonApiDocument,
        await _send(url, request_headers, init, policy, fetcher, "View fetch failed"),
    )


async def fetch_menu(
    menu: str,
    *,
    base_url: tp.Optional[str] = None,
    env_key: tp.Optional[str] = None,
    path: tp.Optional[str] = None,
    langcode: tp.Optional[str] = None,
    resolve: bool = True,
    revalidate: tp.Optional[float] = None,
    transport: tp.Optional[AsyncTransport] = None,
    headers: tp.Optional[HeadersInit] = None,
    init: tp.Optional[FetchInit] = None,
) -> MenuResponse:
    """
    Fetch a menu tree from `/jsonapi/menu/{menu}`.

    Args:
        menu: Machine name of the menu, e.g. `main`.
        path: Frontend path used to compute the active trail.
        langcode: Language of the menu links.
        resolve: When false, ask the backend not to resolve link targets.
    """
    revalidate = validate_revalidate(revalidate)
    base = get_drupal_base_url(base_url, env_key)
    fetcher = get_async_transport(transport)

    params = [("_format", "json")]
    if path:
        params.append(("path", path))
    if langcode:
        params.append(("langcode", langcode))
    if resolve is False:
        params.append(("resolve", "0"))

    menu_name = quote(menu, safe="!~*'()")
    url = build_safe_url(f"/jsonapi/menu/{menu_name}", base)
    url = set_query_params(url, params)

    request_headers = _build_headers(init, headers)
    policy = select_cache_policy(request_headers, init, revalidate=revalidate)
    return tp.cast(
        MenuResponse,
        await _send(url, request_headers, init, policy, fetcher, "Menu fetch failed"),
    )


async def resolve_path(
    path: str,
    *,
    base_url: tp.Optional[str] = None,
    env_key: tp.Optional[str] = None,
    langcode: tp.Optional[str] = None,
    revalidate: tp.Optional[float] = None,
    transport: tp.Optional[AsyncTransport] = None,
    headers: tp.Optional[HeadersInit] = None,
    init: tp.Optional[FetchInit] = None,
) -> ResolveResponse:
    """
    Resolve a frontend path (e.g. `/about-us`) to the Drupal resource behind it.
    """
    revalidate = validate_revalidate(revalidate)
    base = get_drupal_base_url(base_url, env_key)
    fetcher = get_async_transport(transport)

    params = [("path", path), ("_format", "json")]
    if langcode:
        params.append(("langcode", langcode))

    url = set_query_params(build_safe_url("/jsonapi/resolve", base), params)

    request_headers = _build_headers(init, headers)
    policy = select_cache_policy(request_headers, init, revalidate=revalidate)
    return tp.cast(
        ResolveResponse,
        await _send(url, request_headers, init, policy, fetcher, "Resolver failed"),
    )
