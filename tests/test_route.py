"""Tests for wayfile.routing.route — Route, RouteMatch, PathSegment."""

import pytest

from wayfile.routing.route import PathSegment, Route, RouteMatch


def _handler() -> str:
    return "ok"


class TestPathSegment:
    def test_static(self) -> None:
        seg = PathSegment(value="assets")
        assert seg.is_param is False
        assert seg.param_name is None
        assert seg.param_type == "str"
        assert seg.constraints == ()

    def test_constrained_param(self) -> None:
        seg = PathSegment(
            value="{asset:path:file}",
            is_param=True,
            param_name="asset",
            param_type="path",
            constraints=("file",),
        )
        assert seg.constraints == ("file",)

    def test_frozen(self) -> None:
        seg = PathSegment(value="users")
        with pytest.raises(AttributeError):
            seg.value = "other"  # type: ignore[misc]


class TestRoute:
    def test_creation(self) -> None:
        route = Route(path="/files/{name:file}", handler=_handler, methods=frozenset({"GET"}))
        assert route.handler is _handler
        assert route.name is None
        assert route.defaults == {}

    def test_defaults(self) -> None:
        route = Route(
            path="/docs/{page}",
            handler=_handler,
            methods=frozenset({"GET"}),
            name="docs",
            defaults={"page": "index"},
        )
        assert route.defaults == {"page": "index"}

    def test_frozen(self) -> None:
        route = Route(path="/", handler=_handler, methods=frozenset({"GET"}))
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]


class TestRouteMatch:
    def test_creation(self) -> None:
        route = Route(path="/users/{id:int}", handler=_handler, methods=frozenset({"GET"}))
        match = RouteMatch(route=route, path_params={"id": "42"}, values={"id": 42})
        assert match.route is route
        assert match.path_params == {"id": "42"}
        assert match.values == {"id": 42}

    def test_values_default_empty(self) -> None:
        route = Route(path="/", handler=_handler, methods=frozenset({"GET"}))
        assert RouteMatch(route=route, path_params={}).values == {}
