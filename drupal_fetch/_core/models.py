from __future__ import annotations

from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Literal,
    Optional,
    Protocol,
    TypedDict,
    Union,
)

from drupal_fetch._core._headers import HeadersInit

CacheMode = Literal["default", "no-store", "reload", "no-cache", "force-cache", "only-if-cached"]


class RevalidationHint(TypedDict, total=False):
    ttl: Optional[float]
    """Seconds after which a cached response must be refreshed. Absent means the transport default."""

    tags: List[str]
    """Cache tags used by the external cache to invalidate the response."""


class FetchInit(TypedDict, total=False):
    """
    Options handed to the transport together with the request URL.

    Every key is optional. Keys the transport does not understand are passed
    through untouched, so callers may add their own (an abort handle, for example).
    """

    method: str
    headers: HeadersInit
    cache: Optional[CacheMode]
    """
    Explicit caching directive. When the key is present, even with `None`,
    credential based inference is skipped and the value is sent as is.
    """

    revalidation: RevalidationHint
    timeout: Optional[float]
    extensions: Dict[str, Any]


class AsyncResponseLike(Protocol):
    @property
    def status_code(self) -> int: ...

    @property
    def reason_phrase(self) -> str: ...

    @property
    def is_success(self) -> bool: ...

    async def aread(self) -> bytes: ...


class SyncResponseLike(Protocol):
    @property
    def status_code(self) -> int: ...

    @property
    def reason_phrase(self) -> str: ...

    @property
    def is_success(self) -> bool: ...

    def read(self) -> bytes: ...


AsyncTransport = Callable[[str, FetchInit], Awaitable[AsyncResponseLike]]
SyncTransport = Callable[[str, FetchInit], SyncResponseLike]


# JSON:API document shapes. These are hints only, responses are never validated against them.


class JsonApiLinks(TypedDict, total=False):
    self: Union[str, Dict[str, Any]]
    related: Union[str, Dict[str, Any]]
    next: Union[str, Dict[str, Any]]
    prev: Union[str, Dict[str, Any]]


class JsonApiResourceIdentifier(TypedDict, total=False):
    type: str
    id: str
    meta: Dict[str, Any]


class JsonApiRelationship(TypedDict, total=False):
    data: Union[JsonApiResourceIdentifier, List[JsonApiResourceIdentifier], None]
    links: JsonApiLinks
    meta: Dict[str, Any]


class JsonApiResource(TypedDict, total=False):
    type: str
    id: str
    attributes: Dict[str, Any]
    relationships: Dict[str, JsonApiRelationship]
    links: JsonApiLinks
    meta: Dict[str, Any]


class JsonApiDocument(TypedDict, total=False):
    data: Union[JsonApiResource, List[JsonApiResource], None]
    included: List[JsonApiResource]
    links: JsonApiLinks
    meta: Dict[str, Any]
    errors: List[Dict[str, Any]]
    jsonapi: Dict[str, Any]


class NodeAttributes(TypedDict, total=False):
    drupal_internal__nid: int
    langcode: str
    title: str
    status: bool
    created: str
    changed: str
    path: Dict[str, Any]
    body: Dict[str, Any]


class MenuItem(TypedDict, total=False):
    id: str
    title: str
    url: str
    weight: int
    parent: str
    expanded: bool
    enabled: bool
    active: bool
    in_active_trail: bool
    resolved: Dict[str, Any]
    children: List["MenuItem"]


class MenuResponse(TypedDict, total=False):
    items: List[MenuItem]
    meta: Dict[str, Any]


class ResolveResponse(TypedDict, total=False):
    resolved: bool
    kind: Optional[str]
    canonical: Optional[str]
    entity: Optional[Dict[str, Any]]
    redirect: Optional[Dict[str, Any]]
    jsonapi_url: Optional[str]
    data_url: Optional[str]
    headless: bool
    drupal_url: Optional[str]
