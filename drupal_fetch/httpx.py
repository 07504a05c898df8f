from ._async._transports import AsyncHttpxTransport as AsyncHttpxTransport
from ._sync._transports import SyncHttpxTransport as SyncHttpxTransport

__all__ = ("AsyncHttpxTransport", "SyncHttpxTransport")
