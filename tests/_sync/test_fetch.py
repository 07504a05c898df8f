import copy
import typing as tp

import httpx
import pytest
from inline_snapshot import snapshot

from drupal_fetch import (
    BodyParseError,
    ConfigurationError,
    CrossOriginError,
    UnsupportedSchemeError,
    UpstreamHttpError,
)
from drupal_fetch._sync._fetch import fetch_jsonapi, fetch_menu, fetch_view, resolve_path
from drupal_fetch._core.models import FetchInit


class RecordingTransport:
    def __init__(self, response: tp.Optional[httpx.Response] = None) -> None:
        self.response = response if response is not None else httpx.Response(200, json={"data": []})
        self.calls: tp.List[tp.Tuple[str, FetchInit]] = []

    def __call__(self, url: str, init: FetchInit) -> httpx.Response:
        self.calls.append((url, init))
        return self.response

    @property
    def url(self) -> httpx.URL:
        return httpx.URL(self.calls[-1][0])

    @property
    def init(self) -> FetchInit:
        return self.calls[-1][1]



def test_fetch_jsonapi(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(200, json={"data": {"id": "abc-123"}}))

    document = fetch_jsonapi("/jsonapi/node/page/abc-123", transport=transport)

    assert document == {"data": {"id": "abc-123"}}
    assert transport.calls[0][0] == "https://cms.example/jsonapi/node/page/abc-123"
    assert transport.init["headers"]["Accept"] == "application/vnd.api+json"
    assert "cache" not in transport.init
    assert set(transport.init["revalidation"]["tags"]) == {
        "drupal",
        "type:node--page",
        "bundle:page",
        "node:abc-123",
        "uuid:abc-123",
    }
    assert "ttl" not in transport.init["revalidation"]



def test_fetch_jsonapi_with_credentials_is_not_cached(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi(
        "/jsonapi/node/page/abc-123",
        transport=transport,
        headers={"Authorization": "Bearer xyz"},
        init={"revalidation": {"ttl": 60, "tags": ["custom"]}},
    )

    assert transport.init["cache"] == "no-store"
    assert "revalidation" not in transport.init
    assert transport.init["headers"]["authorization"] == "Bearer xyz"



def test_fetch_jsonapi_with_credentials_in_init_headers(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi("/jsonapi/node/page", transport=transport, init={"headers": {"Cookie": "SESS=1"}})

    assert transport.init["cache"] == "no-store"



def test_explicit_cache_directive_is_preserved(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi(
        "/jsonapi/node/page/abc-123",
        transport=transport,
        headers={"Authorization": "Bearer xyz"},
        init={"cache": "force-cache"},
        revalidate=30,
    )

    assert transport.init["cache"] == "force-cache"
    assert transport.init["revalidation"]["ttl"] == 30
    assert "uuid:abc-123" in transport.init["revalidation"]["tags"]



def test_fetch_jsonapi_query_params(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi(
        "/jsonapi/node/article",
        transport=transport,
        include=["uid", "field_image"],
        fields={"node--article": ["title", "uid"], "user--user": ["name"]},
    )

    assert transport.url.path == "/jsonapi/node/article"
    assert dict(transport.url.params) == {
        "include": "uid,field_image",
        "fields[node--article]": "title,uid",
        "fields[user--user]": "name",
    }



def test_fetch_jsonapi_merges_tags(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi(
        "/jsonapi/node/page",
        transport=transport,
        revalidate=120,
        tags=["menu:main", "drupal"],
        init={"revalidation": {"tags": ["menu:main", "site"]}},
    )

    assert transport.init["revalidation"] == {
        "ttl": 120,
        "tags": ["menu:main", "site", "drupal", "type:node--page", "bundle:page"],
    }



def test_explicit_headers_win_over_init_headers(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi(
        "/jsonapi/node/page",
        transport=transport,
        headers={"accept": "application/json"},
        init={"headers": {"Accept": "text/html", "X-Init": "1"}},
    )

    assert dict(transport.init["headers"]) == {"accept": "application/json", "x-init": "1"}



def test_caller_inputs_are_not_modified(drupal_base_url: str) -> None:
    transport = RecordingTransport()
    headers = {"Cookie": "SESS=1"}
    init: FetchInit = {"headers": {"X-Init": "1"}, "revalidation": {"ttl": 5, "tags": ["custom"]}}
    original_init = copy.deepcopy(init)

    fetch_jsonapi("/jsonapi/node/page", transport=transport, headers=headers, init=init)
    fetch_view("/jsonapi/views/blog/page_1", transport=transport, init=init)

    assert headers == {"Cookie": "SESS=1"}
    assert init == original_init



def test_init_passes_through_unknown_keys(drupal_base_url: str) -> None:
    transport = RecordingTransport()
    init: tp.Any = {"timeout": 5.0, "signal": "opaque"}

    fetch_jsonapi("/jsonapi/node/page", transport=transport, init=init)

    assert transport.init["timeout"] == 5.0
    assert transport.init["signal"] == "opaque"



def test_fetch_jsonapi_upstream_error(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(404))

    with pytest.raises(UpstreamHttpError) as exc_info:
        fetch_jsonapi("/jsonapi/node/page/missing", transport=transport)

    assert str(exc_info.value) == "JSON:API fetch failed: 404 Not Found"
    assert exc_info.value.status_code == 404
    assert exc_info.value.reason_phrase == "Not Found"
    assert exc_info.value.url == "https://cms.example/jsonapi/node/page/missing"



def test_fetch_jsonapi_invalid_json(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(BodyParseError) as exc_info:
        fetch_jsonapi("/jsonapi/node/page", transport=transport)

    assert exc_info.value.url == "https://cms.example/jsonapi/node/page"
    assert isinstance(exc_info.value.__cause__, ValueError)



def test_fetch_jsonapi_refuses_other_origin(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    with pytest.raises(CrossOriginError):
        fetch_jsonapi("https://evil.example/jsonapi/node/page", transport=transport)

    assert transport.calls == []



def test_fetch_jsonapi_allows_other_origin_when_opted_in(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_jsonapi("https://mirror.example/jsonapi/node/page", transport=transport, allow_external_urls=True)

    assert transport.url.host == "mirror.example"



def test_fetch_jsonapi_unsupported_scheme(drupal_base_url: str) -> None:
    with pytest.raises(UnsupportedSchemeError):
        fetch_jsonapi("ftp://cms.example/file", transport=RecordingTransport(), allow_external_urls=True)



def test_fetch_jsonapi_without_base_url(no_drupal_base_url: None) -> None:
    transport = RecordingTransport()

    with pytest.raises(ConfigurationError):
        fetch_jsonapi("/jsonapi/node/page", transport=transport)

    assert transport.calls == []



def test_fetch_jsonapi_with_explicit_base_url(no_drupal_base_url: None) -> None:
    transport = RecordingTransport()

    fetch_jsonapi("/jsonapi/node/page", base_url="http://localhost:8080/", transport=transport)

    assert transport.calls[0][0] == "http://localhost:8080/jsonapi/node/page"



def test_negative_revalidate_fails_before_request(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    with pytest.raises(ValueError):
        fetch_jsonapi("/jsonapi/node/page", transport=transport, revalidate=-1)

    assert transport.calls == []



def test_string_include_and_fields_fail_before_request(no_drupal_base_url: None) -> None:
    transport = RecordingTransport()

    with pytest.raises(TypeError, match="include must be a sequence of strings"):
        fetch_jsonapi("/jsonapi/node/page", transport=transport, include="field_image")
    with pytest.raises(TypeError, match=r"fields\[node--page\] must be a sequence of strings"):
        fetch_jsonapi("/jsonapi/node/page", transport=transport, fields={"node--page": "title"})

    assert transport.calls == []



def test_fetch_view(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_view("/jsonapi/views/blog/page_1", page=2, transport=transport)

    assert transport.url.path == "/jsonapi/views/blog/page_1"
    assert dict(transport.url.params) == {"page[offset]": "2"}
    assert set(transport.init["revalidation"]["tags"]) == {"drupal", "views", "view:blog", "view:blog--page_1"}
    assert transport.init["headers"]["Accept"] == "application/vnd.api+json"



def test_fetch_view_with_offset_and_limit(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_view("/jsonapi/views/blog/page_1", page={"offset": 20, "limit": 10}, transport=transport)

    assert dict(transport.url.params) == {"page[offset]": "20", "page[limit]": "10"}



def test_fetch_view_invalid_page(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    with pytest.raises(ValueError):
        fetch_view("/jsonapi/views/blog/page_1", page=-1, transport=transport)

    assert transport.calls == []



def test_fetch_view_upstream_error(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(500))

    with pytest.raises(UpstreamHttpError, match="^View fetch failed: 500 Internal Server Error$"):
        fetch_view("/jsonapi/views/blog/page_1", transport=transport)



def test_fetch_view_with_credentials(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_view("/jsonapi/views/blog/page_1", transport=transport, headers={"Cookie": "SESS=1"})

    assert transport.init["cache"] == "no-store"
    assert "revalidation" not in transport.init



def test_fetch_menu(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(200, json={"items": []}))

    menu = fetch_menu(
        "main",
        path="/about",
        langcode="en",
        resolve=False,
        revalidate=300,
        transport=transport,
    )

    assert menu == {"items": []}
    assert transport.url.path == "/jsonapi/menu/main"
    assert list(transport.url.params.multi_items()) == [
        ("_format", "json"),
        ("path", "/about"),
        ("langcode", "en"),
        ("resolve", "0"),
    ]
    assert transport.init["revalidation"] == {"ttl": 300}



def test_fetch_menu_defaults(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_menu("footer", transport=transport)

    assert dict(transport.url.params) == {"_format": "json"}
    assert transport.init["revalidation"] == {}



def test_fetch_menu_name_is_escaped(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_menu("../admin", transport=transport)

    assert transport.calls[0][0].startswith("https://cms.example/jsonapi/menu/..%2Fadmin")



def test_fetch_menu_keeps_init_tags(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_menu("main", transport=transport, init={"revalidation": {"tags": ["menu:main"]}})

    assert transport.init["revalidation"] == {"tags": ["menu:main"]}



def test_fetch_menu_with_credentials(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    fetch_menu("main", transport=transport, headers={"Authorization": "Bearer xyz"})

    assert transport.init["cache"] == "no-store"
    assert "revalidation" not in transport.init



def test_fetch_menu_upstream_error(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(403))

    with pytest.raises(UpstreamHttpError, match="^Menu fetch failed: 403 Forbidden$"):
        fetch_menu("main", transport=transport)



def test_resolve_path(drupal_base_url: str) -> None:
    transport = RecordingTransport(
        httpx.Response(200, json={"resolved": True, "kind": "entity", "jsonapi_url": "/jsonapi/node/page/abc"})
    )

    resolved = resolve_path("/about-us", langcode="de", transport=transport)

    assert resolved["resolved"] is True
    assert transport.url.path == "/jsonapi/resolve"
    assert list(transport.url.params.multi_items()) == [
        ("path", "/about-us"),
        ("_format", "json"),
        ("langcode", "de"),
    ]
    assert transport.init["headers"]["Accept"] == "application/vnd.api+json"



def test_resolve_path_upstream_error(drupal_base_url: str) -> None:
    transport = RecordingTransport(httpx.Response(502))

    with pytest.raises(UpstreamHttpError, match="^Resolver failed: 502 Bad Gateway$") as exc_info:
        resolve_path("/about-us", transport=transport)

    assert exc_info.value.status_code == 502



def test_resolve_path_with_credentials(drupal_base_url: str) -> None:
    transport = RecordingTransport()

    resolve_path("/about-us", transport=transport, init={"headers": {"Cookie": "SESS=1"}})

    assert transport.init["cache"] == "no-store"



def test_logging(drupal_base_url: str, caplog: pytest.LogCaptureFixture) -> None:
    transport = RecordingTransport()

    with caplog.at_level("DEBUG", logger="drupal_fetch"):
        fetch_jsonapi("/jsonapi/node/page/abc-123", transport=transport, revalidate=60)
        fetch_jsonapi("/jsonapi/node/page/abc-123", transport=transport, headers={"Authorization": "Bearer xyz"})

    assert caplog.messages == snapshot(
        [
            "Fetching https://cms.example/jsonapi/node/page/abc-123 with revalidate=60 and tags=['drupal', 'type:node--page', 'bundle:page', 'node:abc-123', 'uuid:abc-123']",
            "Credentialed request without explicit cache directive, disabling caching",
            "Fetching https://cms.example/jsonapi/node/page/abc-123 without caching",
        ]
    )
