"""
Catalog package: the Open Library integration behind the book API.

It holds the upstream payload schemas, the normalisation helpers that
turn those payloads into ``Book`` objects, a short-lived cache, the
HTTP client that ties them together, and the routes that expose search
and detail lookups.
"""

from .router import router as catalog_router  # noqa: F401
