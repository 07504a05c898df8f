from drupal_fetch._async._fetch import (
    fetch_jsonapi as fetch_jsonapi,
    fetch_menu as fetch_menu,
    fetch_view as fetch_view,
    resolve_path as resolve_path,
)
from drupal_fetch._config import (
    get_async_transport as get_async_transport,
    get_drupal_base_url as get_drupal_base_url,
    get_sync_transport as get_sync_transport,
)
from drupal_fetch._core._headers import Headers as Headers, HeadersInit as HeadersInit, merge_headers
from drupal_fetch._core.models import (
    AsyncResponseLike as AsyncResponseLike,
    AsyncTransport as AsyncTransport,
    FetchInit as FetchInit,
    JsonApiDocument as JsonApiDocument,
    JsonApiLinks as JsonApiLinks,
    JsonApiRelationship as JsonApiRelationship,
    JsonApiResource as JsonApiResource,
    MenuItem as MenuItem,
    MenuResponse as MenuResponse,
    NodeAttributes as NodeAttributes,
    ResolveResponse as ResolveResponse,
    RevalidationHint as RevalidationHint,
    SyncResponseLike as SyncResponseLike,
    SyncTransport as SyncTransport,
)
from drupal_fetch._exceptions import (
    BodyParseError as BodyParseError,
    ConfigurationError as ConfigurationError,
    CrossOriginError as CrossOriginError,
    DrupalFetchError as DrupalFetchError,
    TransportUnavailableError as TransportUnavailableError,
    UnsafeUrlError as UnsafeUrlError,
    UnsupportedSchemeError as UnsupportedSchemeError,
    UpstreamHttpError as UpstreamHttpError,
)
from drupal_fetch._policies import (
    CachePolicy as CachePolicy,
    NoStore as NoStore,
    Revalidate as Revalidate,
    apply_cache_policy,
    has_auth_like_headers,
    select_cache_policy,
)
from drupal_fetch._tags import build_entity_cache_tags, build_view_cache_tags
from drupal_fetch._urls import build_safe_url

__all__ = (
    # Fetch operations
    "fetch_jsonapi",
    "fetch_view",
    "fetch_menu",
    "resolve_path",
    # Configuration
    "get_drupal_base_url",
    "get_async_transport",
    "get_sync_transport",
    # URLs and cache tags
    "build_safe_url",
    "build_entity_cache_tags",
    "build_view_cache_tags",
    # Policies
    "CachePolicy",
    "NoStore",
    "Revalidate",
    "has_auth_like_headers",
    "select_cache_policy",
    "apply_cache_policy",
    # Headers
    "Headers",
    "HeadersInit",
    "merge_headers",
    # Models
    "FetchInit",
    "RevalidationHint",
    "AsyncTransport",
    "SyncTransport",
    "AsyncResponseLike",
    "SyncResponseLike",
    "JsonApiDocument",
    "JsonApiResource",
    "JsonApiRelationship",
    "JsonApiLinks",
    "NodeAttributes",
    "MenuItem",
    "MenuResponse",
    "ResolveResponse",
    # Errors
    "DrupalFetchError",
    "ConfigurationError",
    "TransportUnavailableError",
    "UnsafeUrlError",
    "CrossOriginError",
    "UnsupportedSchemeError",
    "UpstreamHttpError",
    "BodyParseError",
)
