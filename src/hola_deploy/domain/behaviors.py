"""Pure domain functions with no I/O or framework dependencies."""

from __future__ import annotations

CANONICAL_GREETING = "Hola desde Tomcat 10 (deploy automatizado)"


def build_greeting() -> str:
    r"""Return the fixed greeting line served by the greeting endpoint.

    The endpoint writes this line followed by a single newline; the body
    never depends on the request.

    Returns:
        The canonical greeting string without trailing newline.

    Example:
        >>> build_greeting()
        'Hola desde Tomcat 10 (deploy automatizado)'
    """
    return CANONICAL_GREETING


def default_archive_name(app_name: str) -> str:
    """Return the deterministic archive file name for an application.

    Example:
        >>> default_archive_name("hola")
        'hola.war'
    """
    return f"{app_name}.war"


def default_health_url(app_name: str, *, host: str = "localhost", port: int = 8080) -> str:
    """Return the URL polled after a deployment.

    Example:
        >>> default_health_url("hola")
        'http://localhost:8080/hola/'
    """
    return f"http://{host}:{port}/{app_name}/"


def greeting_route(app_name: str) -> str:
    """Return the context path the greeting handler is mounted on.

    Example:
        >>> greeting_route("hola")
        '/hola/'
    """
    return f"/{app_name.strip('/')}/"


__all__ = [
    "CANONICAL_GREETING",
    "build_greeting",
    "default_archive_name",
    "default_health_url",
    "greeting_route",
]
