"""Route, RouteMatch, and PathSegment frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:      ``/users``            (is_param=False)
    Param:       ``/{id}``             (is_param=True, param_name="id")
    Typed:       ``/{id:int}``         (is_param=True, param_name="id", param_type="int")
    Constrained: ``/{f:path:file}``    (..., param_type="path", constraints=("file",))
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    constraints: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during setup, compiled into the router at freeze time.
    ``defaults`` supply parameter values for ``Router.url_for()``.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    defaults: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``path_params`` holds the captured text, ``values`` the same
    parameters after converter coercion (``{id:int}`` -> ``int``).
    """

    route: Route
    path_params: dict[str, str]
    values: dict[str, Any] = field(default_factory=dict)
