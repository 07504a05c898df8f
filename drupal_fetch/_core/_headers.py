from __future__ import annotations

from typing import (
    Any,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Union,
)

HeadersInit = Union["Headers", Mapping[str, str], Iterable[Tuple[str, str]]]


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive header mapping holding a single value per name.

    Assigning to an existing name replaces its value, so layering several
    header sets gives last-writer-wins semantics per key.
    """

    def __init__(self, headers: Optional[HeadersInit] = None) -> None:
        self._headers: dict[str, str] = {}
        if headers is not None:
            self.update(headers)

    def update(self, headers: HeadersInit = (), /, **kwargs: str) -> None:  # type: ignore[override]
        items = headers.items() if isinstance(headers, Mapping) else headers
        for key, value in items:
            self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def __getitem__(self, key: str) -> str:
        return self._headers[key.lower()]

    def __setitem__(self, key: str, value: str) -> None:
        self._headers[key.lower()] = value

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return repr(self._headers)

    def __str__(self) -> str:
        return str(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers

    def copy(self) -> "Headers":
        return Headers(self)


def merge_headers(*headers_list: Optional[HeadersInit]) -> Headers:
    """
    Layer header sets on top of each other into a new `Headers` object.

    Later sets win over earlier ones for the same (case-insensitive) name.
    `None` entries are skipped and none of the inputs is modified.

    Example:
        ```
        merged = merge_headers({"Accept": "text/html"}, {"accept": "application/json"})
        assert merged["Accept"] == "application/json"
        ```
    """
    headers = Headers()
    for item in headers_list:
        if item is None:
            continue
        headers.update(item)
    return headers
