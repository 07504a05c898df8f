from __future__ import annotations

import typing as tp
from numbers import Real

import httpx

DEFAULT_ACCEPT = "application/vnd.api+json"

PageOption = tp.Union[int, tp.Mapping[str, int]]


def set_query_params(url: httpx.URL, params: tp.Iterable[tp.Tuple[str, str]]) -> httpx.URL:
    """
    Return a copy of `url` with each param set, replacing earlier values of the same name.
    """
    for name, value in params:
        url = url.copy_set_param(name, value)
    return url


def jsonapi_params(
    include: tp.Optional[tp.Sequence[str]] = None,
    fields: tp.Optional[tp.Mapping[str, tp.Sequence[str]]] = None,
) -> tp.List[tp.Tuple[str, str]]:
    """
    Build the `include` and sparse fieldset params of a JSON:API request.

    Example:
        ```
        jsonapi_params(include=["uid"], fields={"node--page": ["title", "body"]})
        # [("include", "uid"), ("fields[node--page]", "title,body")]
        ```
    """
    params: tp.List[tp.Tuple[str, str]] = []
    if include:
        params.append(("include", _comma_joined("include", include)))
    if fields:
        for type_, type_fields in fields.items():
            params.append((f"fields[{type_}]", _comma_joined(f"fields[{type_}]", type_fields)))
    return params


def _comma_joined(name: str, values: tp.Sequence[str]) -> str:
    # A bare str is a Sequence[str] too, and would be joined character by character.
    if isinstance(values, str):
        raise TypeError(f"{name} must be a sequence of strings, got str {values!r}")
    return ",".join(values)


def _non_negative_int(name: str, value: tp.Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def page_params(page: tp.Optional[PageOption]) -> tp.List[tp.Tuple[str, str]]:
    """
    Translate the `page` option of a view request into `page[offset]` / `page[limit]`.

    An int sets the offset only. A mapping may carry `offset` and/or `limit`.
    """
    if page is None:
        return []

    if isinstance(page, tp.Mapping):
        unknown = set(page) - {"offset", "limit"}
        if unknown:
            raise ValueError(f"Unknown page keys: {', '.join(sorted(unknown))} (expected offset/limit)")
        params = []
        if page.get("offset") is not None:
            params.append(("page[offset]", str(_non_negative_int("page offset", page["offset"]))))
        if page.get("limit") is not None:
            params.append(("page[limit]", str(_non_negative_int("page limit", page["limit"]))))
        return params

    return [("page[offset]", str(_non_negative_int("page", page)))]


def validate_revalidate(revalidate: tp.Optional[float]) -> tp.Optional[float]:
    if revalidate is None:
        return None
    if isinstance(revalidate, bool) or not isinstance(revalidate, Real):
        raise TypeError(f"revalidate must be a number of seconds, got {type(revalidate).__name__}")
    if revalidate < 0:
        raise ValueError(f"revalidate must not be negative, got {revalidate}")
    return revalidate


def transport_extensions(init: tp.Mapping[str, tp.Any]) -> tp.Dict[str, tp.Any]:
    """
    Expose the caching decision of a request as httpx request extensions.

    Caller supplied extensions are kept; the `drupal_*` keys describe the
    caching mode so that a caching transport further down the chain can act on it.
    """
    revalidation = init.get("revalidation") or {}
    return {
        **(init.get("extensions") or {}),
        "drupal_cache": init.get("cache"),
        "drupal_revalidate": revalidation.get("ttl"),
        "drupal_tags": list(revalidation.get("tags") or []),
    }
