"""Compiled router with trie-based path matching.

Routes are registered during setup and compiled into an immutable
lookup structure.  Parameter segments may name constraints that are
evaluated against the captured route values before a match is accepted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wayfile.config import RouterConfig
from wayfile.errors import ConfigurationError, MethodNotAllowed, NotFound, URLBuildError
from wayfile.routing.constraints import RouteConstraint, RouteDirection, to_invariant_str
from wayfile.routing.params import CONVERTERS, PATTERNS, accepts, convert_param
from wayfile.routing.route import PathSegment, Route, RouteMatch

if TYPE_CHECKING:
    from wayfile.routing.analysis import CheckResult

logger = logging.getLogger("wayfile.routing")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"              -> [PathSegment("users")]
        "/users/{id}"         -> [..., PathSegment("{id}", is_param=True, param_name="id")]
        "/users/{id:int}"     -> [..., PathSegment("{id:int}", ..., param_type="int")]
        "/{asset:path:file}"  -> [PathSegment(..., param_type="path", constraints=("file",))]

    Tokens after the parameter name are converters when they name one
    (``str``, ``int``, ``float``, ``path``) and constraint names otherwise.
    Constraint names are resolved later, by ``Router.add()``.
    """
    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if "<" in part and ">" in part:
            msg = (
                f"Route {path!r} uses <param> syntax. "
                "Wayfile expects {param} placeholders, e.g. '/files/{name:file}'."
            )
            raise ConfigurationError(msg)

        is_param = part.startswith("{") and part.endswith("}")
        if not is_param or "{" in part[1:-1] or "}" in part[1:-1]:
            if "{" in part or "}" in part:
                msg = f"Route {path!r} has a malformed parameter segment {part!r}."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part))
            continue

        param_name, *tokens = part[1:-1].split(":")
        if not param_name:
            msg = f"Route {path!r} has a parameter without a name: {part!r}."
            raise ConfigurationError(msg)

        param_type = "str"
        constraints: list[str] = []
        converter_seen = False
        for token in tokens:
            if token in CONVERTERS:
                if converter_seen:
                    msg = f"Route {path!r}: parameter {param_name!r} names two converters."
                    raise ConfigurationError(msg)
                param_type = token
                converter_seen = True
            elif token:
                constraints.append(token)
            else:
                msg = f"Route {path!r}: empty token in parameter {part!r}."
                raise ConfigurationError(msg)

        if param_type == "path" and index != len(parts) - 1:
            msg = f"Route {path!r}: path parameter {param_name!r} must be the last segment."
            raise ConfigurationError(msg)

        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
                constraints=tuple(constraints),
            )
        )
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_alls", "children", "params", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Parameter edges, tried in registration order
        self.params: list[_ParamEdge] = []
        # Catch-all edges (path converter), tried after params
        self.catch_alls: list[_CatchAllEdge] = []
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    constraints: tuple[tuple[str, RouteConstraint], ...]
    node: _TrieNode

    def same_as(self, seg: PathSegment) -> bool:
        return (
            self.param_name == seg.param_name
            and self.param_type == seg.param_type
            and tuple(name for name, _ in self.constraints) == seg.constraints
        )


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge — consumes remaining path."""

    param_name: str
    constraints: tuple[tuple[str, RouteConstraint], ...]
    route_by_method: dict[str, Route]

    def same_as(self, seg: PathSegment) -> bool:
        return self.param_name == seg.param_name and (
            tuple(name for name, _ in self.constraints) == seg.constraints
        )


_LOG_LEVELS = {"error": logging.ERROR, "warning": logging.WARNING, "info": logging.INFO}


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/{asset:path:file}", serve_static, frozenset({"GET"})))
        router.add(Route("/{page:path:nonfile}", render_page, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/css/site.css")   # -> serve_static
    """

    __slots__ = ("_compiled", "_config", "_named", "_root")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._root = _TrieNode()
        self._named: dict[str, Route] = {}
        self._compiled = False

    @property
    def config(self) -> RouterConfig:
        return self._config

    def constraint(self, name: str) -> RouteConstraint:
        """Return the constraint registered as *name*."""
        try:
            return self._config.constraints[name]
        except KeyError:
            known = ", ".join(sorted(self._config.constraints)) or "none"
            msg = f"Unknown route constraint {name!r}. Registered constraints: {known}."
            raise ConfigurationError(msg) from None

    def _resolve(self, seg: PathSegment) -> tuple[tuple[str, RouteConstraint], ...]:
        return tuple((name, self.constraint(name)) for name in seg.constraints)

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        segments = parse_path(route.path)
        resolved = [self._resolve(seg) for seg in segments]

        if route.name is not None:
            if route.name in self._named and self._named[route.name] is not route:
                msg = f"Duplicate route name {route.name!r} ({route.path!r})."
                raise ConfigurationError(msg)
            self._named[route.name] = route

        node = self._root

        for seg, constraints in zip(segments, resolved, strict=True):
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, parse_path keeps it last
                edge = next((e for e in node.catch_alls if e.same_as(seg)), None)
                if edge is None:
                    edge = _CatchAllEdge(
                        param_name=seg.param_name or "path",
                        constraints=constraints,
                        route_by_method={},
                    )
                    node.catch_alls.append(edge)
                for method in route.methods:
                    edge.route_by_method[method] = route
                return

            if seg.is_param:
                param = next((e for e in node.params if e.same_as(seg)), None)
                if param is None:
                    param = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=PATTERNS[seg.param_type],
                        constraints=constraints,
                        node=_TrieNode(),
                    )
                    node.params.append(param)
                node = param.node
            else:
                # Static segment
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        # Register methods at the terminal node
        for method in route.methods:
            node.routes_by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes.

        Traverses the trie to collect every unique Route object.
        Useful for introspection and route analysis.
        """
        seen: set[int] = set()
        result: list[Route] = []
        self._collect_routes(self._root, seen, result)
        return result

    def _collect_routes(
        self,
        node: _TrieNode,
        seen: set[int],
        result: list[Route],
    ) -> None:
        """Recursively collect routes from the trie."""
        candidates = list(node.routes_by_method.values())
        for edge in node.catch_alls:
            candidates.extend(edge.route_by_method.values())

        for route in candidates:
            route_id = id(route)
            if route_id not in seen:
                seen.add(route_id)
                result.append(route)

        for child in node.children.values():
            self._collect_routes(child, seen, result)

        for param in node.params:
            self._collect_routes(param.node, seen, result)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added.

        Runs route analysis when ``config.analyze_on_compile`` is set and
        logs every issue found.  In strict mode, analysis errors raise
        ``ConfigurationError``.
        """
        self._compiled = True
        if not self._config.analyze_on_compile:
            return

        result = self.check()
        for issue in result.issues:
            logger.log(
                _LOG_LEVELS[issue.severity.value],
                "%s: %s",
                issue.category,
                issue.message,
            )
        if self._config.strict and not result.ok:
            messages = "; ".join(issue.message for issue in result.errors)
            msg = f"Route analysis found {len(result.errors)} error(s): {messages}"
            raise ConfigurationError(msg)

    def check(self) -> CheckResult:
        """Analyse the registered route templates. See ``wayfile.routing.analysis``."""
        from wayfile.routing.analysis import check_routes

        return check_routes(self)

    def match(self, method: str, path: str, request: Any = None) -> RouteMatch:
        """Match a request path and method against compiled routes.

        *request* is handed to every constraint as-is.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        allowed: set[str] = set()
        result = self._match_node(self._root, parts, 0, {}, {}, request, method, allowed)

        if result is not None:
            route, params, values = result
            return RouteMatch(route=route, path_params=params, values=values)

        # Some route matched the path, none of them the method
        if allowed:
            raise MethodNotAllowed(frozenset(allowed))

        raise NotFound(f"No route matches {method} {path!r}")

    def _accepts(
        self,
        param_name: str,
        constraints: tuple[tuple[str, RouteConstraint], ...],
        values: dict[str, Any],
        request: Any,
        direction: RouteDirection = RouteDirection.INCOMING_REQUEST,
    ) -> bool:
        for constraint_name, constraint in constraints:
            if not constraint.match(request, self, param_name, values, direction):
                logger.debug(
                    "Constraint %r rejected %s=%r",
                    constraint_name,
                    param_name,
                    values.get(param_name),
                )
                return False
        return True

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
        values: dict[str, Any],
        request: Any,
        method: str,
        allowed: set[str],
    ) -> tuple[Route, dict[str, str], dict[str, Any]] | None:
        """Recursively match path parts against the trie.

        Constraints see the raw segment text in *params*; *values* carries
        the converted values handed back on ``RouteMatch``.  Candidates that
        match the path but not *method* add their methods to *allowed* and
        matching carries on with the next candidate.
        """
        # All parts consumed, the node must serve this method
        if index == len(parts):
            route = node.routes_by_method.get(method)
            if route is not None:
                return route, params, values
            allowed.update(node.routes_by_method)
            return None

        part = parts[index]

        # 1. Try static child first (exact match)
        if part in node.children:
            result = self._match_node(
                node.children[part], parts, index + 1, params, values, request, method, allowed
            )
            if result is not None:
                return result

        # 2. Try parameter edges
        for edge in node.params:
            if not edge.regex.fullmatch(part):
                continue
            new_params = {**params, edge.param_name: part}
            if not self._accepts(edge.param_name, edge.constraints, new_params, request):
                continue
            new_values = {**values, edge.param_name: convert_param(part, edge.param_type)}
            result = self._match_node(
                edge.node, parts, index + 1, new_params, new_values, request, method, allowed
            )
            if result is not None:
                return result

        # 3. Try catch-alls
        remaining = "/".join(parts[index:])
        for catch_all in node.catch_alls:
            new_params = {**params, catch_all.param_name: remaining}
            if not self._accepts(
                catch_all.param_name, catch_all.constraints, new_params, request
            ):
                continue
            route = catch_all.route_by_method.get(method)
            if route is None:
                allowed.update(catch_all.route_by_method)
                continue
            return route, new_params, {**values, catch_all.param_name: remaining}

        return None

    def url_for(self, name: str, /, **params: Any) -> str:
        """Build the path for the route registered as *name*.

        Missing parameters fall back to ``route.defaults``.  Every value is
        checked against its converter and constraints.

        Raises ``URLBuildError`` if the route is unknown, a parameter is
        missing or unexpected, or a value is rejected.
        """
        route = self._named.get(name)
        if route is None:
            raise URLBuildError(f"No route named {name!r}.")

        segments = parse_path(route.path)
        expected = {seg.param_name for seg in segments if seg.is_param}
        unknown = sorted(set(params) - expected)
        if unknown:
            msg = f"Unknown parameter(s) for route {name!r}: {', '.join(unknown)}."
            raise URLBuildError(msg)

        values: dict[str, Any] = {**route.defaults, **params}
        # Constraints judge the text that ends up in the path
        texts = {k: to_invariant_str(v) for k, v in values.items() if v is not None}
        parts: list[str] = []
        for seg in segments:
            if not seg.is_param:
                parts.append(seg.value)
                continue

            param_name = seg.param_name or ""
            if values.get(param_name) is None:
                raise URLBuildError(f"Missing parameter {param_name!r} for route {name!r}.")

            text = texts[param_name]
            if not accepts(text, seg.param_type):
                msg = f"Value {text!r} for {param_name!r} is not a valid {seg.param_type}."
                raise URLBuildError(msg)
            if not self._accepts(
                param_name,
                self._resolve(seg),
                texts,
                None,
                RouteDirection.URL_GENERATION,
            ):
                msg = (
                    f"Value {text!r} for {param_name!r} is rejected by "
                    f"constraint(s) {', '.join(seg.constraints)} on route {name!r}."
                )
                raise URLBuildError(msg)
            parts.append(text)

        return "/" + "/".join(parts)
