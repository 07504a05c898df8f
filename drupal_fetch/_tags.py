"""
Cache tags for JSON:API and jsonapi_views URLs.

The tag strings must stay byte-compatible with the payload sent by the
jsonapi_frontend revalidation webhook. Changing any of them breaks
invalidation for existing deployments.
"""

from __future__ import annotations

import re
import typing as tp

ROOT_TAG = "drupal"
VIEWS_TAG = "views"

# /jsonapi/{entity_type}/{bundle}[/{uuid}]
ENTITY_PATH_PATTERN = re.compile(r"/jsonapi/([^/]+)/([^/]+)(?:/([^/?]+))?")

# /jsonapi/views/{view_id}/{display_id}
VIEW_PATH_PATTERN = re.compile(r"/jsonapi/views/([^/]+)/([^/?]+)")


def build_entity_cache_tags(jsonapi_path: str) -> tp.List[str]:
    """
    Build cache tags for a JSON:API entity URL such as `/jsonapi/node/page/{uuid}`.

    Examples:
        >>> build_entity_cache_tags("/jsonapi/node/page")
        ['drupal', 'type:node--page', 'bundle:page']
        >>> build_entity_cache_tags("/about")
        ['drupal']
    """
    tags = [ROOT_TAG]

    match = ENTITY_PATH_PATTERN.search(jsonapi_path)
    if match is None:
        return tags

    entity_type, bundle, uuid = match.groups()
    tags.append(f"type:{entity_type}--{bundle}")
    tags.append(f"bundle:{bundle}")

    if uuid:
        tags.append(f"{entity_type}:{uuid}")
        tags.append(f"uuid:{uuid}")

    return tags


def build_view_cache_tags(data_url: str) -> tp.List[str]:
    """
    Build cache tags for a jsonapi_views URL such as `/jsonapi/views/blog/page_1`.
    """
    tags = [ROOT_TAG, VIEWS_TAG]

    match = VIEW_PATH_PATTERN.search(data_url)
    if match is None:
        return tags

    view_id, display_id = match.groups()
    tags.append(f"view:{view_id}")
    tags.append(f"view:{view_id}--{display_id}")

    return tags
