"""Wayfile exception hierarchy.

Shared across Router, constraints, analysis, and the CLI so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class WayfileError(Exception):
    """Base for all wayfile-specific errors."""


class ConfigurationError(WayfileError):
    """Raised when a route template or router configuration is invalid.

    Typically raised from ``Router.add()`` or, in strict mode, from
    ``Router.compile()`` at startup.
    """


class MissingArgumentError(WayfileError, ValueError):
    """A required argument was ``None``.

    Signals misuse by the router integration, never bad request data.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Argument {name!r} must not be None.")
        self.name = name


class URLBuildError(WayfileError, ValueError):
    """Raised when ``Router.url_for()`` cannot produce a URL."""


@dataclass(slots=True)
class HTTPError(WayfileError):
    """An error that maps directly to an HTTP status code.

    Raised by the router when no route accepts a request.
    Not frozen: raising and handling sets the traceback and notes on the
    instance.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string for developer visibility.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
