"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from wayfile.errors import ConfigurationError
from wayfile.routing.constraints import DEFAULT_CONSTRAINTS, RouteConstraint
from wayfile.routing.params import CONVERTERS


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(strict=True)
        config = RouterConfig().with_constraint("upper", UpperCaseConstraint())
    """

    # Raise ConfigurationError from compile() when analysis finds errors
    strict: bool = False

    # Run route-template analysis when the router compiles
    analyze_on_compile: bool = True

    # Constraint name -> implementation, referenced as {name:constraint}
    constraints: Mapping[str, RouteConstraint] = field(
        default_factory=lambda: dict(DEFAULT_CONSTRAINTS)
    )

    def __post_init__(self) -> None:
        for name, constraint in self.constraints.items():
            _check_constraint_name(name)
            _check_constraint(name, constraint)

    def with_constraint(self, name: str, constraint: RouteConstraint) -> "RouterConfig":
        """Return a copy of this config with *constraint* registered as *name*."""
        _check_constraint(name, constraint)
        return replace(self, constraints={**self.constraints, name: constraint})


def _check_constraint(name: str, constraint: object) -> None:
    if not isinstance(constraint, RouteConstraint):
        msg = f"Constraint {name!r} must implement match(), got {type(constraint).__name__}."
        raise ConfigurationError(msg)


def _check_constraint_name(name: str) -> None:
    if not name.isidentifier():
        msg = f"Constraint name {name!r} must be a valid identifier."
        raise ConfigurationError(msg)
    if name in CONVERTERS:
        msg = f"Constraint name {name!r} collides with the {name!r} converter."
        raise ConfigurationError(msg)
