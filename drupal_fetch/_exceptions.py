from __future__ import annotations

__all__ = (
    "DrupalFetchError",
    "ConfigurationError",
    "TransportUnavailableError",
    "UnsafeUrlError",
    "CrossOriginError",
    "UnsupportedSchemeError",
    "UpstreamHttpError",
    "BodyParseError",
)


class DrupalFetchError(Exception): ...


class ConfigurationError(DrupalFetchError): ...


class TransportUnavailableError(DrupalFetchError): ...


class UnsafeUrlError(DrupalFetchError): ...


class CrossOriginError(UnsafeUrlError):
    def __init__(self, origin: str, base_origin: str) -> None:
        super().__init__(
            f"Refusing to fetch a URL from a different origin ({origin}) than base ({base_origin}). "
            "Pass allow_external_urls=True to override."
        )
        self.origin = origin
        self.base_origin = base_origin


class UnsupportedSchemeError(UnsafeUrlError):
    def __init__(self, scheme: str) -> None:
        super().__init__(f'Unsupported URL scheme "{scheme}" (expected http/https)')
        self.scheme = scheme


class UpstreamHttpError(DrupalFetchError):
    def __init__(self, prefix: str, status_code: int, reason_phrase: str, url: str) -> None:
        super().__init__(f"{prefix}: {status_code} {reason_phrase}")
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.url = url


class BodyParseError(DrupalFetchError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Response body from {url} is not valid JSON")
        self.url = url
