"""
Book catalog service.

An in-memory book catalogue exposed as a JSON API with FastAPI, plus a
single-page frontend served from ``public/`` and a Python controller
(``client``) that drives the API the same way the page does.
"""

__version__ = "1.0.0"
