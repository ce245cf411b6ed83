"""Web adapter - the greeting handler as a Flask application."""

from __future__ import annotations

from .app import GREETING_CONTENT_TYPE, create_app, serve_greeting

__all__ = ["GREETING_CONTENT_TYPE", "create_app", "serve_greeting"]
