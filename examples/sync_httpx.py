#!/usr/bin/env uv run
# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "drupal-fetch",
# ]
#
# [tool.uv.sources]
# drupal-fetch = { path = "../", editable = true }
# ///

import httpx

from drupal_fetch.sync import SyncHttpxTransport, fetch_view


def fetch_and_print(transport: SyncHttpxTransport, offset: int):
    print(f"\n➡ Fetching blog listing from offset {offset}...")
    document = fetch_view(
        "/jsonapi/views/blog/page_1",
        base_url="https://cms.example",
        page={"offset": offset, "limit": 10},
        transport=transport,
    )
    print(f"📰 Items: {len(document.get('data') or [])}")


if __name__ == "__main__":
    with httpx.Client() as client:
        fetch_and_print(SyncHttpxTransport(client), 0)
        fetch_and_print(SyncHttpxTransport(client), 10)
