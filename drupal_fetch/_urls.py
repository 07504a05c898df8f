from __future__ import annotations

import typing as tp

import httpx

from drupal_fetch._exceptions import CrossOriginError, UnsafeUrlError, UnsupportedSchemeError

ALLOWED_SCHEMES = ("http", "https")


def get_origin(url: httpx.URL) -> str:
    """
    Serialize the origin (scheme, host and non-default port) of a URL.

    Examples:
        >>> get_origin(httpx.URL("https://cms.example/jsonapi"))
        'https://cms.example'
        >>> get_origin(httpx.URL("http://localhost:8080/"))
        'http://localhost:8080'
        >>> get_origin(httpx.URL("http://[::1]:8080/"))
        'http://[::1]:8080'
    """
    host = f"[{url.host}]" if ":" in url.host else url.host
    origin = f"{url.scheme}://{host}"
    if url.port is not None:
        origin += f":{url.port}"
    return origin


def build_safe_url(
    input: tp.Union[str, httpx.URL],
    base: tp.Union[str, httpx.URL],
    allow_external_urls: bool = False,
) -> httpx.URL:
    """
    Resolve `input` against `base` and make sure it is safe to fetch.

    Relative inputs are joined onto the base URL. Absolute inputs replace it
    but are still compared against the base origin.

    Raises:
        UnsupportedSchemeError: The resolved URL is not http or https.
        CrossOriginError: The resolved origin differs from the base origin
            and `allow_external_urls` is false.
        UnsafeUrlError: The input cannot be parsed as a URL.
    """
    base_url = httpx.URL(base)
    try:
        url = base_url.join(input)
    except httpx.InvalidURL as exc:
        raise UnsafeUrlError(f'Cannot build a URL from "{input}": {exc}') from exc

    if url.scheme not in ALLOWED_SCHEMES:
        raise UnsupportedSchemeError(url.scheme)

    if not allow_external_urls and get_origin(url) != get_origin(base_url):
        raise CrossOriginError(get_origin(url), get_origin(base_url))

    return url
