"""Assets vs Pages — one URL space split by the ``file`` constraint.

Demonstrates:
- ``{asset:path:file}`` sends anything whose last segment looks like a
  file name to the static handler
- ``{page:path:nonfile}`` sends everything else to the page handler
- a literal ``/robots.txt`` route that takes precedence over the
  catch-all (reported as "ambiguous" by ``wayfile check``)

Run:
    python app.py /css/site.css /docs/intro /robots.txt
    wayfile check app:router
"""

import mimetypes
import sys
from pathlib import Path

from wayfile import NotFound, Route, Router

PUBLIC_DIR = Path(__file__).parent / "public"


def serve_static(asset: str) -> tuple[str, str]:
    """Return (content type, body) for a file under ``public/``."""
    target = (PUBLIC_DIR / asset).resolve()
    if not target.is_relative_to(PUBLIC_DIR.resolve()) or not target.is_file():
        raise NotFound(f"No such asset: {asset}")
    content_type, _ = mimetypes.guess_type(target.name)
    return content_type or "application/octet-stream", target.read_text()


def render_page(page: str) -> tuple[str, str]:
    title = page.replace("/", " / ").title()
    return "text/html", f"<h1>{title}</h1>"


def robots() -> tuple[str, str]:
    return "text/plain", "User-agent: *\nDisallow:\n"


router = Router()
router.add(Route("/robots.txt", robots, frozenset({"GET"}), name="robots"))
router.add(Route("/{asset:path:file}", serve_static, frozenset({"GET"}), name="asset"))
router.add(
    Route(
        "/{page:path:nonfile}",
        render_page,
        frozenset({"GET"}),
        name="page",
        defaults={"page": "home"},
    )
)
router.compile()


def handle(path: str) -> tuple[str, str]:
    """Dispatch a GET for *path* to whichever handler the router picks."""
    match = router.match("GET", path)
    return match.route.handler(**match.values)


if __name__ == "__main__":
    for requested in sys.argv[1:] or ["/css/site.css", "/docs/intro"]:
        content_type, body = handle(requested)
        print(f"{requested} -> {content_type}\n{body}\n")
