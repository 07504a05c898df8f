from ._sync._fetch import (
    fetch_jsonapi as fetch_jsonapi,
    fetch_menu as fetch_menu,
    fetch_view as fetch_view,
    resolve_path as resolve_path,
)
from ._sync._transports import SyncHttpxTransport as SyncHttpxTransport

__all__ = ("fetch_jsonapi", "fetch_view", "fetch_menu", "resolve_path", "SyncHttpxTransport")
