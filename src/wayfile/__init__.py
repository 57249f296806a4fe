"""Wayfile — tell file-name route values from page route values.

A small compiled path router whose parameters carry named constraints.
The built-in ``file`` and ``nonfile`` constraints classify the last
``/``-delimited segment of a value, so one URL space can be split
between static assets and dynamic pages.

Basic usage::

    from wayfile import Route, Router

    router = Router()
    router.add(Route("/{asset:path:file}", serve_static, frozenset({"GET"})))
    router.add(Route("/{page:path:nonfile}", render_page, frozenset({"GET"})))
    router.compile()

    router.match("GET", "/css/site.css").route.handler   # serve_static
    router.match("GET", "/docs/intro").route.handler     # render_page

The classifier on its own::

    from wayfile import is_file_name

    is_file_name("/a/b/c.txt")   # True
    is_file_name("/a/b.d/c")     # False
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FileNameConstraint",
    "HTTPError",
    "LiteralConstraint",
    "MethodNotAllowed",
    "MissingArgumentError",
    "NonFileNameConstraint",
    "NotFound",
    "Route",
    "RouteConstraint",
    "RouteDirection",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "URLBuildError",
    "WayfileError",
    "is_file_name",
]

_CONSTRAINT_NAMES = (
    "FileNameConstraint",
    "LiteralConstraint",
    "NonFileNameConstraint",
    "RouteConstraint",
    "RouteDirection",
    "is_file_name",
)

_ERROR_NAMES = (
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "MissingArgumentError",
    "NotFound",
    "URLBuildError",
    "WayfileError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wayfile`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from wayfile.routing.router import Router

        return Router

    if name == "RouterConfig":
        from wayfile.config import RouterConfig

        return RouterConfig

    if name in ("Route", "RouteMatch"):
        from wayfile.routing import route as _route

        return getattr(_route, name)

    if name in _CONSTRAINT_NAMES:
        from wayfile.routing import constraints as _constraints

        return getattr(_constraints, name)

    if name in _ERROR_NAMES:
        from wayfile import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
