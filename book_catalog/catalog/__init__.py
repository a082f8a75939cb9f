"""
Catalog package for the book catalog API.

This package contains the response envelopes and the route definitions
that expose create, read, update and delete over a ``CatalogStore``.
The router reads the store from ``app.state`` so each application
instance owns its own catalogue.
"""

from .router import router as catalog_router  # noqa: F401
