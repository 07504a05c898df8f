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

import asyncio
import os

import httpx

from drupal_fetch import fetch_jsonapi, fetch_menu, resolve_path
from drupal_fetch.httpx import AsyncHttpxTransport


async def main():
    base_url = os.environ.get("DRUPAL_BASE_URL", "https://cms.example")

    async with httpx.AsyncClient(timeout=10) as client:
        transport = AsyncHttpxTransport(client)

        resolved = await resolve_path("/about-us", base_url=base_url, transport=transport)
        print(f"➡ Resolved /about-us: {resolved.get('jsonapi_url')}")

        if resolved.get("jsonapi_url"):
            document = await fetch_jsonapi(
                resolved["jsonapi_url"],
                base_url=base_url,
                transport=transport,
                include=["uid"],
                revalidate=300,
            )
            print(f"📄 Document: {document.get('data')}")

        menu = await fetch_menu("main", base_url=base_url, path="/about-us", transport=transport)
        print(f"🧭 Menu items: {len(menu.get('items', []))}")


if __name__ == "__main__":
    asyncio.run(main())
