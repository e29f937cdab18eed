"""A small flat route set with HTML views, rendered by path."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from html import escape
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from .params import MaybeParam
from .paths import SegmentKind, parse_segments
from .routes import Routable, fallback, routable, route, route_table


@routable(view_prefix="", view_suffix="View", transition=False)
class AppRoutes(Routable):
    """The routes of the flat demo application."""


@route("/")
class Home(AppRoutes):
    """The landing page."""


@route("/contact")
class Contact(AppRoutes):
    """The contact page."""


@route("/asset")
class AssetList(AppRoutes):
    """The list of assets."""


@route("/asset/:id")
@dataclass(frozen=True)
class AssetDetails(AppRoutes):
    """One asset, with an optional action carried in the query."""

    id: int
    action: Optional[str] = None


@route("/profile")
class Profile(AppRoutes):
    """The user's profile."""


@fallback
@route("/404")
class NotFound(AppRoutes):
    """Shown when no route matches."""


def _link(target: Routable | str, css: str, text: str, *, disabled: bool = False) -> str:
    href = target if isinstance(target, str) else target.to_href()
    extra = " disabled" if disabled else ""
    return f'<a href="{escape(href)}" class="{css}"{extra}>{escape(text)}</a>'


def home_view() -> str:
    """Render the home page."""
    return (
        '<div class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">Welcome Home!</h1>'
        "<p>Explore the site using the navigation links below.</p>"
        "</div>"
    )


def contact_view() -> str:
    """Render the contact page."""
    return (
        '<div class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">Contact Us</h1>'
        "<p>Reach out at: hello@example.com</p>"
        "</div>"
    )


def asset_list_view() -> str:
    """Render the asset list with links to the other routes."""
    link_css = "inline-block px-4 py-2 bg-blue-500 text-white rounded"
    links = [
        _link(AppRoutes.Home(), "inline-block px-4 py-2 bg-green-500 text-white rounded", "→ Go Home"),
        _link(AppRoutes.Contact(), link_css, "→ Contact Page"),
        _link(AppRoutes.AssetDetails(id=123, action=None), link_css, "→ Asset 123 (no action)"),
        _link(AppRoutes.AssetDetails(id=456, action="edit"), link_css, "→ Asset 456 (edit action)"),
        _link(AppRoutes.Profile(), link_css, "→ Profile Page"),
        _link(AppRoutes.NotFound(), link_css, "→ 404 Page"),
    ]
    return (
        '<div class="p-4">'
        '<h1 class="text-2xl font-bold mb-4">Asset List</h1>'
        '<div class="space-y-4">'
        '<h2 class="text-xl">Test Navigation Links</h2>'
        '<div class="flex flex-col space-y-2">' + "".join(links) + "</div>"
        "</div></div>"
    )


def asset_details_view(params: Mapping[str, Any]) -> str:
    """Render one asset, with links to the previous and next asset."""
    asset_id = MaybeParam("id", params, int).ok() or 0
    prev_href = AppRoutes.AssetDetails(id=max(asset_id - 1, 0), action=None).to_href()
    next_href = AppRoutes.AssetDetails(id=asset_id + 1, action=None).to_href()
    return (
        '<div class="flex flex-col items-center p-4 space-y-4">'
        f'<h1 class="text-2xl font-bold">Asset ID: {asset_id}</h1>'
        '<div class="flex space-x-4">'
        + _link(AppRoutes.Home(), "px-4 py-2 bg-green-500 text-white rounded", "Home")
        + _link(
            prev_href,
            "px-4 py-2 bg-blue-500 text-white rounded disabled:opacity-50",
            "Previous",
            disabled=asset_id <= 1,
        )
        + _link(next_href, "px-4 py-2 bg-blue-500 text-white rounded", "Next")
        + "</div></div>"
    )


def profile_view() -> str:
    """Render the profile page."""
    return (
        '<div class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">User Profile</h1>'
        "<p>Name: John Doe</p>"
        "<p>Membership: Gold</p>"
        "<p>Email: john.doe@example.com</p>"
        + _link(AppRoutes.Home(), "inline-block px-4 py-2 mt-4 bg-green-500 text-white rounded", "Back Home")
        + "</div>"
    )


def not_found_view() -> str:
    """Render the page shown when no route matches."""
    return (
        '<div class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">404: Not Found</h1>'
        "<p>Sorry, we can&#x27;t find that page.</p>"
        + _link(AppRoutes.Home(), "inline-block px-4 py-2 bg-green-500 text-white rounded mt-4", "Go Home")
        + "</div>"
    )


_VIEWS: dict[str, Callable[[Mapping[str, str]], str]] = {
    "HomeView": lambda params: home_view(),
    "ContactView": lambda params: contact_view(),
    "AssetListView": lambda params: asset_list_view(),
    "AssetDetailsView": asset_details_view,
    "ProfileView": lambda params: profile_view(),
    "NotFoundView": lambda params: not_found_view(),
}


def _match(template: str, pathname: str) -> dict[str, str] | None:
    parts = iter(part for part in pathname.split("/") if part)
    params: dict[str, str] = {}
    for segment in parse_segments(template):
        part = next(parts, None)
        if segment.kind is SegmentKind.STATIC:
            if part != segment.value:
                return None
        elif segment.kind is SegmentKind.PARAM:
            if part is None:
                return None
            params[segment.value] = unquote(part)
        elif part is not None:
            params[segment.value] = unquote(part)
    if next(parts, None) is not None:
        return None
    return params


def _routed_view(pathname: str) -> str:
    table = route_table(AppRoutes)
    for child in table.children():
        params = _match(child.spec.path, pathname)
        if params is not None:
            return _VIEWS[child.view](params)
    return _VIEWS[table.fallback_view()]({})


def render(path: str) -> str:
    """Render the whole page for ``path``: navigation and the matched view."""
    pathname = urlsplit(path).path or "/"
    nav_css = "text-white px-3 py-1 bg-blue-600 rounded"
    nav = (
        '<nav class="flex space-x-4 p-4 bg-gray-900 text-white">'
        + _link(AppRoutes.Home(), "text-white px-3 py-1 bg-green-600 rounded", "Home")
        + _link(AppRoutes.Contact(), nav_css, "Contact")
        + _link(AppRoutes.AssetList(), nav_css, "Assets")
        + _link(AppRoutes.Profile(), nav_css, "Profile")
        + "</nav>"
    )
    return (
        '<html lang="en" dir="ltr"><head>'
        '<meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        "<title>Welcome</title></head><body>"
        '<main class="min-h-screen">' + nav + _routed_view(pathname) + "</main>"
        "</body></html>"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Print the page rendered for a path."""
    parser = argparse.ArgumentParser(description="Render a page of the flat demo routes.")
    parser.add_argument("path", nargs="?", default="/", help="the path to render")
    args = parser.parse_args(argv)
    print(render(args.path))
    return 0