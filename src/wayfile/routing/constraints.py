"""Route constraints — per-parameter predicates evaluated during routing.

A constraint is referenced by a short name inside a route template::

    "/{asset:path:file}"      # only values whose last segment looks like a file
    "/{page:path:nonfile}"    # everything else

Every constraint implements ``RouteConstraint.match()``, called by the
router for each candidate match.  Constraints that can also judge a fixed
string implement ``LiteralConstraint.match_literal()``, which the static
route analysis uses at compile time.  Both entry points of the built-in
constraints share one classifier, so analysis and live matching agree.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from wayfile.errors import MissingArgumentError


class RouteDirection(Enum):
    """Why a constraint is being evaluated."""

    INCOMING_REQUEST = "incoming_request"
    URL_GENERATION = "url_generation"


@runtime_checkable
class RouteConstraint(Protocol):
    """Decides whether a route value is acceptable for a parameter."""

    def match(
        self,
        request: Any,
        router: Any,
        route_key: str,
        values: Mapping[str, Any],
        direction: RouteDirection,
    ) -> bool: ...


@runtime_checkable
class LiteralConstraint(Protocol):
    """A constraint that can be evaluated against a literal template segment."""

    def match_literal(self, parameter_name: str, literal: str) -> bool: ...


def is_file_name(value: str) -> bool:
    """Return True if the last ``/``-delimited segment of *value* looks like a file name.

    The last segment must contain a ``.`` followed, somewhere after it, by
    at least one character that is not ``.``.  Nothing is checked against
    the file system or against OS naming rules.

    Examples::

        is_file_name("/a/b/c.txt")        # True
        is_file_name(".gitignore")        # True
        is_file_name("foo..bar")          # True
        is_file_name("/a/b.d/c")          # False: dot only in an earlier segment
        is_file_name("/a/b.d/c/")         # False: last segment is empty
        is_file_name("foo..")             # False: only dots after the first dot
        is_file_name("")                  # False
    """
    if not value:
        return False

    # Last segment starts after the final slash (or at 0 when there is none)
    start = value.rfind("/") + 1

    dot = value.find(".", start)
    if dot == -1:
        return False

    for i in range(dot + 1, len(value)):
        if value[i] != ".":
            return True
    return False


def to_invariant_str(value: object) -> str:
    """Coerce a route value to text without consulting the locale."""
    if isinstance(value, str):
        return value
    return str(value)


def _require(route_key: str | None, values: Mapping[str, Any] | None) -> None:
    if route_key is None:
        raise MissingArgumentError("route_key")
    if values is None:
        raise MissingArgumentError("values")


class FileNameConstraint:
    """Accepts route values that look like file names.

    Useful to send requests for static assets and requests for dynamic
    pages to different handlers.  See ``is_file_name()`` for the rules.
    A missing or ``None`` value never matches.
    """

    __slots__ = ()

    def match(
        self,
        request: Any,
        router: Any,
        route_key: str,
        values: Mapping[str, Any],
        direction: RouteDirection,
    ) -> bool:
        _require(route_key, values)
        value = values.get(route_key)
        if value is None:
            return False
        return is_file_name(to_invariant_str(value))

    def match_literal(self, parameter_name: str, literal: str) -> bool:
        return is_file_name(literal)

    def __repr__(self) -> str:
        return "FileNameConstraint()"


class NonFileNameConstraint:
    """Accepts route values that do not look like file names.

    The inverse of ``FileNameConstraint``.  A missing or ``None`` value
    matches, since nothing resembling a file name is present.
    """

    __slots__ = ()

    def match(
        self,
        request: Any,
        router: Any,
        route_key: str,
        values: Mapping[str, Any],
        direction: RouteDirection,
    ) -> bool:
        _require(route_key, values)
        value = values.get(route_key)
        if value is None:
            return True
        return not is_file_name(to_invariant_str(value))

    def match_literal(self, parameter_name: str, literal: str) -> bool:
        return not is_file_name(literal)

    def __repr__(self) -> str:
        return "NonFileNameConstraint()"


# Registered under these names unless a RouterConfig overrides them
DEFAULT_CONSTRAINTS: Mapping[str, RouteConstraint] = {
    "file": FileNameConstraint(),
    "nonfile": NonFileNameConstraint(),
}
