from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass, field

from typing_extensions import assert_never

from drupal_fetch._core._headers import Headers
from drupal_fetch._core.models import FetchInit, RevalidationHint

logger = logging.getLogger("drupal_fetch.policies")

AUTH_LIKE_HEADERS = ("authorization", "cookie")


@dataclass(frozen=True)
class NoStore:
    """
    Bypass every cache layer for the request.
    """


@dataclass(frozen=True)
class Revalidate:
    """
    Let the external cache keep the response until `ttl` expires or one of `tags` is invalidated.
    """

    ttl: t.Optional[float] = None
    """Seconds before a refresh. None means the transport default."""

    tags: t.Tuple[str, ...] = field(default_factory=tuple)


CachePolicy = t.Union[NoStore, Revalidate]


def has_auth_like_headers(headers: t.Mapping[str, str]) -> bool:
    """
    Whether the request carries credentials (`Authorization` or `Cookie`, any casing).
    """
    return any(key.lower() in AUTH_LIKE_HEADERS for key in headers)


def unique(values: t.Iterable[str]) -> t.List[str]:
    """
    Drop duplicates, keeping the first occurrence of each value.

    Example:
        ```
        assert unique(["drupal", "views", "drupal"]) == ["drupal", "views"]
        ```
    """
    return list(dict.fromkeys(values))


def select_cache_policy(
    headers: t.Mapping[str, str],
    init: t.Optional[FetchInit] = None,
    revalidate: t.Optional[float] = None,
    tags: t.Iterable[str] = (),
) -> CachePolicy:
    """
    Decide how the outgoing request may be cached.

    Credentialed requests are never cached unless the caller set an explicit
    `cache` directive on the init object. Everything else is revalidated with
    the union of the init tags and `tags`.
    """
    init = init if init is not None else {}
    has_explicit_cache = "cache" in init

    if has_auth_like_headers(headers) and not has_explicit_cache:
        logger.debug("Credentialed request without explicit cache directive, disabling caching")
        return NoStore()

    existing_tags = (init.get("revalidation") or {}).get("tags") or []
    return Revalidate(ttl=revalidate, tags=tuple(unique([*existing_tags, *tags])))


def apply_cache_policy(init: t.Optional[FetchInit], headers: Headers, policy: CachePolicy) -> FetchInit:
    """
    Build the init object handed to the transport.

    A new dictionary is always returned; the caller's init is left untouched.
    """
    fetch_init: FetchInit = {**(init or {}), "headers": headers}  # type: ignore[typeddict-item]

    if isinstance(policy, NoStore):
        fetch_init["cache"] = "no-store"
        # Never mix revalidation hints with no-store.
        fetch_init.pop("revalidation", None)
    elif isinstance(policy, Revalidate):
        revalidation: RevalidationHint = {**(fetch_init.get("revalidation") or {})}  # type: ignore[typeddict-item]
        revalidation.pop("ttl", None)
        revalidation.pop("tags", None)
        if policy.ttl is not None:
            revalidation["ttl"] = policy.ttl
        if policy.tags:
            revalidation["tags"] = list(policy.tags)
        fetch_init["revalidation"] = revalidation
    else:
        assert_never(policy)

    return fetch_init
