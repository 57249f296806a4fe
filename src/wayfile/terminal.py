"""Terminal formatting for route analysis results.

Produces structured, colored output for ``wayfile check``.  Respects TTY
detection — no ANSI codes when piped or redirected.

Example output (with color)::

    ── wayfile check ───────────────────────────────────────────

      4 routes · 2 constrained params · 3 literals

      ▲  Literal segment 'robots.txt' also satisfies {asset:path:file}
         route /robots.txt
         Requests for /robots.txt are routed to the literal route first, ...

      ✓  No errors · 1 warning

    ─────────────────────────────────────────────────────────────

"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from wayfile.routing.analysis import Severity

if TYPE_CHECKING:
    from wayfile.routing.analysis import CheckResult, RouteIssue

_W = 65
_TITLE = "wayfile check"


def _use_color(stream: object | None = None) -> bool:
    """True if the output stream supports ANSI color."""
    s = stream or sys.stderr
    isatty = getattr(s, "isatty", None)
    return bool(isatty and isatty())


class _Palette:
    """ANSI escape sequences — empty strings when color is disabled."""

    __slots__ = ("bold", "cyan", "dim", "green", "red", "reset", "yellow")

    def __init__(self, *, enabled: bool) -> None:
        if enabled:
            self.reset = "\033[0m"
            self.bold = "\033[1m"
            self.dim = "\033[2m"
            self.red = "\033[31m"
            self.green = "\033[32m"
            self.yellow = "\033[33m"
            self.cyan = "\033[36m"
        else:
            self.reset = ""
            self.bold = ""
            self.dim = ""
            self.red = ""
            self.green = ""
            self.yellow = ""
            self.cyan = ""


def _severity_icon(severity: Severity, c: _Palette) -> str:
    """Colored icon for an issue severity."""
    match severity:
        case Severity.ERROR:
            return f"{c.red}{c.bold}✗{c.reset}"
        case Severity.WARNING:
            return f"{c.yellow}▲{c.reset}"
        case Severity.INFO:
            return f"{c.dim}·{c.reset}"


def _format_issue(issue: RouteIssue, c: _Palette) -> list[str]:
    """Format a single issue as indented lines."""
    icon = _severity_icon(issue.severity, c)
    lines = [f"  {icon}  {c.bold}{issue.message}{c.reset}"]
    if issue.route:
        lines.append(f"     {c.dim}route{c.reset} {c.cyan}{issue.route}{c.reset}")
    if issue.details:
        lines.append(f"     {c.dim}{issue.details}{c.reset}")
    return lines


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def format_check_result(
    result: CheckResult,
    *,
    color: bool | None = None,
) -> str:
    """Format a CheckResult for terminal display.

    Args:
        result: The check result to format.
        color: Force color on/off.  ``None`` auto-detects from stderr.

    Returns:
        Multi-line string ready for ``print()``.
    """
    use = color if color is not None else _use_color()
    c = _Palette(enabled=use)

    dash = "─"
    rule = f"{c.dim}{dash}{c.reset}" * _W
    pad = _W - len(_TITLE) - 4  # 4 = "── " + " "
    lines = [
        f"  {c.dim}{dash * 2}{c.reset} {c.bold}{_TITLE}{c.reset} "
        f"{c.dim}{dash * max(pad, 1)}{c.reset}",
        "",
    ]

    sep = f" {c.dim}·{c.reset} "
    stats = [
        f"{c.bold}{result.routes_checked}{c.reset} {c.dim}routes{c.reset}",
        f"{c.bold}{result.constrained_params}{c.reset} {c.dim}constrained params{c.reset}",
        f"{c.bold}{result.literals_checked}{c.reset} {c.dim}literals{c.reset}",
    ]
    lines.append(f"  {sep.join(stats)}")
    lines.append("")

    # Errors first, then warnings, then info
    for severity in (Severity.ERROR, Severity.WARNING, Severity.INFO):
        for issue in result.issues:
            if issue.severity == severity:
                lines.extend(_format_issue(issue, c))
                lines.append("")

    errors = result.errors
    warnings = result.warnings
    if not errors and not warnings:
        lines.append(f"  {c.green}{c.bold}✓{c.reset}  {c.green}All clear{c.reset}")
    elif not errors:
        lines.append(
            f"  {c.green}{c.bold}✓{c.reset}  {c.green}No errors{c.reset}"
            f"{sep}{c.yellow}{_plural(len(warnings), 'warning')}{c.reset}"
        )
    else:
        lines.append(
            f"  {c.red}{c.bold}✗{c.reset}  "
            f"{c.red}{_plural(len(errors), 'error')}{c.reset}"
            f"{sep}{c.yellow}{_plural(len(warnings), 'warning')}{c.reset}"
        )

    lines.append("")
    lines.append(f"  {rule}")
    lines.append("")
    return "\n".join(lines)
