"""Flask application serving the fixed greeting line.

The handler ignores every request attribute: query strings, headers and
bodies never change the response. Verbs and routes other than ``GET`` on
the greeting route fall through to werkzeug's default 404/405 handling.
"""

from __future__ import annotations

import logging

from flask import Flask, Response

from hola_deploy.domain.behaviors import build_greeting, greeting_route

logger = logging.getLogger(__name__)

#: Content type written by the greeting handler, verbatim.
GREETING_CONTENT_TYPE = "text/plain; charset=UTF-8"


def create_app(app_name: str = "hola") -> Flask:
    """Build the Flask application exposing ``GET /<app_name>/``.

    Example:
        >>> client = create_app().test_client()
        >>> client.get("/hola/").get_data(as_text=True)
        'Hola desde Tomcat 10 (deploy automatizado)\\n'
    """
    app = Flask(__name__)
    body = f"{build_greeting()}\n".encode()

    @app.route(greeting_route(app_name), methods=["GET"])
    def greeting() -> Response:
        return Response(body, status=200, content_type=GREETING_CONTENT_TYPE)

    return app


def serve_greeting(*, host: str, port: int, app_name: str) -> None:
    """Serve the greeting handler with the Flask development server (blocking)."""
    logger.info("Serving greeting", extra={"host": host, "port": port, "route": greeting_route(app_name)})
    create_app(app_name).run(host=host, port=port)


__all__ = ["GREETING_CONTENT_TYPE", "create_app", "serve_greeting"]
