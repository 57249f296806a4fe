"""Static route-template analysis — compile-time checks of constrained parameters.

Walks the compiled trie and asks constraints to judge literal text
through ``LiteralConstraint.match_literal()``.  This is the same
classification used during live matching, so the findings hold at
request time:

- **ambiguous** — a literal segment next to a constrained parameter is
  also accepted by that parameter's constraints.  The literal route
  always wins, which is usually intended but worth knowing.
- **dead-default** — a route default is rejected by its own parameter's
  converter or constraints, so ``url_for()`` can never fall back to it.
- **unused-default** — a default names no parameter of its route.
- **opaque** — a constraint has no ``match_literal()`` and cannot be
  analysed.

Usage::

    result = router.check()
    for issue in result.issues:
        print(f"{issue.severity.value}: {issue.message}")

    # Or via CLI:
    #   wayfile check myapp:router

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from wayfile.routing.constraints import LiteralConstraint, RouteConstraint, to_invariant_str
from wayfile.routing.params import accepts
from wayfile.routing.router import parse_path

if TYPE_CHECKING:
    from wayfile.routing.router import Router, _TrieNode
    from wayfile.routing.route import Route


class Severity(Enum):
    """Severity of a route analysis issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class RouteIssue:
    """A single issue found during route analysis."""

    severity: Severity
    category: str
    message: str
    route: str | None = None
    details: str | None = None


@dataclass(slots=True)
class CheckResult:
    """Result of a route analysis."""

    issues: list[RouteIssue] = field(default_factory=list)
    routes_checked: int = 0
    constrained_params: int = 0
    literals_checked: int = 0

    @property
    def errors(self) -> list[RouteIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[RouteIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checked {self.routes_checked} routes, "
            f"{self.constrained_params} constrained parameters, "
            f"{self.literals_checked} literal segments.",
        ]
        if self.ok and not self.warnings:
            lines.append("No issues found.")
        elif self.ok:
            lines.append(f"No errors. {len(self.warnings)} warning(s).")
        else:
            lines.append(f"{len(self.errors)} error(s), {len(self.warnings)} warning(s).")
        for issue in self.issues:
            prefix = issue.severity.value.upper()
            loc = f" in {issue.route}" if issue.route else ""
            lines.append(f"  [{prefix}] {issue.message}{loc}")
            if issue.details:
                lines.append(f"           {issue.details}")
        return "\n".join(lines)


def _label(
    param_name: str,
    param_type: str,
    constraints: tuple[tuple[str, RouteConstraint], ...],
) -> str:
    tokens = [param_name]
    if param_type != "str":
        tokens.append(param_type)
    tokens.extend(name for name, _ in constraints)
    return "{" + ":".join(tokens) + "}"


def _accepts_literal(
    param_name: str,
    constraints: tuple[tuple[str, RouteConstraint], ...],
    literal: str,
) -> bool:
    return all(
        constraint.match_literal(param_name, literal)  # type: ignore[union-attr]
        for _, constraint in constraints
    )


def _check_edge(
    node: _TrieNode,
    prefix: str,
    param_name: str,
    param_type: str,
    constraints: tuple[tuple[str, RouteConstraint], ...],
    result: CheckResult,
) -> None:
    """Compare one constrained edge against its sibling literal segments."""
    label = _label(param_name, param_type, constraints)
    result.constrained_params += 1

    opaque = [name for name, c in constraints if not isinstance(c, LiteralConstraint)]
    if opaque:
        result.issues.append(
            RouteIssue(
                severity=Severity.INFO,
                category="opaque",
                message=(
                    f"Constraint(s) {', '.join(opaque)} on {label} "
                    "cannot be checked against literal segments"
                ),
                route=f"{prefix}/{label}",
            )
        )
        return

    for literal in node.children:
        result.literals_checked += 1
        if not accepts(literal, param_type):
            continue
        if _accepts_literal(param_name, constraints, literal):
            result.issues.append(
                RouteIssue(
                    severity=Severity.WARNING,
                    category="ambiguous",
                    message=f"Literal segment {literal!r} also satisfies {label}",
                    route=f"{prefix}/{literal}",
                    details=(
                        f"Requests for {prefix}/{literal} are routed to the literal "
                        f"route first, not to {prefix}/{label}."
                    ),
                )
            )


def _walk(node: _TrieNode, prefix: str, result: CheckResult) -> None:
    for edge in node.params:
        if edge.constraints:
            _check_edge(
                node, prefix, edge.param_name, edge.param_type, edge.constraints, result
            )
    for catch_all in node.catch_alls:
        if catch_all.constraints:
            _check_edge(
                node, prefix, catch_all.param_name, "path", catch_all.constraints, result
            )

    for literal, child in node.children.items():
        _walk(child, f"{prefix}/{literal}", result)
    for edge in node.params:
        label = _label(edge.param_name, edge.param_type, edge.constraints)
        _walk(edge.node, f"{prefix}/{label}", result)


def _check_defaults(router: Router, route: Route, result: CheckResult) -> None:
    """Every default must survive its own parameter's converter and constraints."""
    segments = {seg.param_name: seg for seg in parse_path(route.path) if seg.is_param}

    for param_name, default in route.defaults.items():
        seg = segments.get(param_name)
        if seg is None:
            result.issues.append(
                RouteIssue(
                    severity=Severity.WARNING,
                    category="unused-default",
                    message=f"Default for {param_name!r} names no parameter of the route",
                    route=route.path,
                )
            )
            continue

        text = to_invariant_str(default)
        if not accepts(text, seg.param_type):
            result.issues.append(
                RouteIssue(
                    severity=Severity.ERROR,
                    category="dead-default",
                    message=f"Default {param_name}={text!r} is not a valid {seg.param_type}",
                    route=route.path,
                )
            )
            continue

        for name in seg.constraints:
            constraint = router.constraint(name)
            if not isinstance(constraint, LiteralConstraint):
                continue
            result.literals_checked += 1
            if not constraint.match_literal(param_name, text):
                result.issues.append(
                    RouteIssue(
                        severity=Severity.ERROR,
                        category="dead-default",
                        message=(
                            f"Default {param_name}={text!r} is rejected by "
                            f"constraint {name!r}"
                        ),
                        route=route.path,
                        details="url_for() can never build this route from its default.",
                    )
                )


def check_routes(router: Router) -> CheckResult:
    """Run every route analysis check against *router*.

    Safe to call before or after ``Router.compile()``.
    """
    routes = router.routes
    result = CheckResult(routes_checked=len(routes))
    _walk(router._root, "", result)
    for route in routes:
        _check_defaults(router, route, result)
    return result
