"""A demo route set with nested and protected routes, rendered by path."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from html import escape
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from .params import MaybeParam
from .paths import SegmentKind, parse_segments
from .routes import (
    Routable,
    RouteKind,
    fallback,
    parent_route,
    protected_parent_route,
    protected_route,
    routable,
    route,
    route_table,
)


@dataclass
class AuthContext:
    """Whether the visitor is logged in."""

    logged_in: bool = False

    def login(self) -> str:
        """Log in and return the href to go to next."""
        self.logged_in = True
        return Profile().to_href()

    def logout(self) -> None:
        """Log out."""
        self.logged_in = False


def _auth_condition(auth: AuthContext) -> Optional[bool]:
    return auth.logged_in


def _auth_redirect_path() -> Routable:
    return Login()


# --------------------------------------------------------------------------
# Admin routes
# --------------------------------------------------------------------------


@routable(view_prefix="", view_suffix="View", transition=False)
class AdminRoutes(Routable):
    """The routes below the admin section."""


@route("/")
class AdminHome(AdminRoutes):
    """The admin dashboard."""


@route("/users")
class UserList(AdminRoutes):
    """The user management page."""


@fallback
class AdminNotFound(AdminRoutes):
    """Shown when no admin route matches."""


# --------------------------------------------------------------------------
# Dashboard routes
# --------------------------------------------------------------------------


@routable(transition=False)
class DashboardRoutes(Routable):
    """The routes below the dashboard section."""


@route("")
class DashboardHome(DashboardRoutes):
    """The dashboard landing page."""


@route("/settings")
class DashboardSettings(DashboardRoutes):
    """The dashboard settings."""


@route("/analytics")
class DashboardAnalytics(DashboardRoutes):
    """The dashboard analytics."""


@fallback
@route("/404")
class DashboardNotFound(DashboardRoutes):
    """Shown for the dashboard's not-found route."""


# --------------------------------------------------------------------------
# Application routes
# --------------------------------------------------------------------------


@routable(view_prefix="", view_suffix="View", transition=False)
class AppRoutes(Routable):
    """The routes of the nested demo application."""


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


@protected_route(
    "/profile",
    condition=_auth_condition,
    redirect_path=_auth_redirect_path,
    fallback="NotFoundView",
)
class Profile(AppRoutes):
    """The user's profile; only for logged-in visitors."""


@route("/login")
class Login(AppRoutes):
    """The login page."""


@parent_route("/dashboard")
@dataclass(frozen=True)
class Dashboard(AppRoutes):
    """The dashboard section, holding one dashboard route."""

    routes: DashboardRoutes


@protected_parent_route(
    "/admin",
    condition=_auth_condition,
    redirect_path=_auth_redirect_path,
    fallback="NotFoundView",
)
@dataclass(frozen=True)
class Admin(AppRoutes):
    """The admin section, holding one admin route; only for logged-in visitors."""

    routes: AdminRoutes


@fallback
@route("/404")
class NotFound(AppRoutes):
    """Shown when no route matches."""


# --------------------------------------------------------------------------
# Views
# --------------------------------------------------------------------------


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


def login_view(auth: AuthContext) -> str:
    """Render the login page for the current login state."""
    if auth.logged_in:
        body = (
            '<div class="space-y-4">'
            '<p class="text-green-600">You are logged in!</p>'
            '<button class="px-4 py-2 bg-red-500 text-white rounded" name="logout">Logout</button>'
            "</div>"
        )
    else:
        body = (
            '<div class="space-y-4">'
            '<p class="text-gray-600">You need to login to access protected routes.</p>'
            '<button class="px-4 py-2 bg-green-500 text-white rounded" name="login">Login</button>'
            "</div>"
        )
    return (
        '<div class="p-4 text-center">'
        '<h1 class="text-2xl font-bold mb-4">Login</h1>'
        + body
        + '<div class="mt-4">'
        + _link(Home(), "inline-block px-4 py-2 bg-blue-500 text-white rounded", "Back Home")
        + "</div></div>"
    )


def asset_list_view() -> str:
    """Render the asset list with links to the other routes."""
    link_css = "inline-block px-4 py-2 bg-blue-500 text-white rounded"
    dashboard_home = Dashboard(DashboardHome())
    links = [
        _link(Home(), "inline-block px-4 py-2 bg-green-500 text-white rounded", "→ Go Home"),
        _link(Contact(), link_css, "→ Contact Page"),
        _link(AssetDetails(id=123, action=None), link_css, "→ Asset 123 (no action)"),
        _link(AssetDetails(id=456, action="edit"), link_css, "→ Asset 456 (edit action)"),
        _link(Profile(), link_css, "→ Profile Page"),
        _link(dashboard_home, link_css, f"→ Dashboard Home: {dashboard_home}"),
        _link(Admin(AdminHome()), link_css, "→ Admin Dashboard"),
        _link(NotFound(), link_css, "→ 404 Page"),
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
    prev_href = AssetDetails(id=max(asset_id - 1, 0), action=None).to_href()
    next_href = AssetDetails(id=asset_id + 1, action=None).to_href()
    return (
        '<div class="flex flex-col items-center p-4 space-y-4">'
        f'<h1 class="text-2xl font-bold">Asset ID: {asset_id}</h1>'
        '<div class="flex space-x-4">'
        + _link(Home(), "px-4 py-2 bg-green-500 text-white rounded", "Home")
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
        + _link(Home(), "inline-block px-4 py-2 mt-4 bg-green-500 text-white rounded", "Back Home")
        + "</div>"
    )


def not_found_view() -> str:
    """Render the page shown when no route matches."""
    return (
        '<div class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">404: Not Found</h1>'
        f"<p>{escape('Sorry, we can' + chr(39) + 't find that page.')}</p>"
        + _link(Home(), "inline-block px-4 py-2 bg-green-500 text-white rounded mt-4", "Go Home")
        + "</div>"
    )


def dashboard_home_view() -> str:
    """Render the dashboard landing page."""
    css = "inline-block px-4 py-2 bg-blue-600 text-white rounded mt-2"
    return (
        '<section class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">Dashboard Home</h1>'
        "<p>Welcome to the Dashboard!</p>"
        + _link(Dashboard(DashboardSettings()), css, "Go to Settings")
        + _link(Dashboard(DashboardAnalytics()), css + " ml-2", "Go to Analytics")
        + "</section>"
    )


def dashboard_settings_view() -> str:
    """Render the dashboard settings page."""
    return (
        '<section class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">Dashboard Settings</h1>'
        "<p>Configure your dashboard settings here.</p>"
        + _link(
            Dashboard(DashboardHome()),
            "inline-block px-4 py-2 bg-green-600 text-white rounded mt-2",
            "Back Home",
        )
        + "</section>"
    )


def dashboard_analytics_view() -> str:
    """Render the dashboard analytics page."""
    return (
        '<section class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">Dashboard Analytics</h1>'
        "<p>Analytics overview.</p>"
        + _link(
            Dashboard(DashboardHome()),
            "inline-block px-4 py-2 bg-green-600 text-white rounded mt-2",
            "Back Home",
        )
        + "</section>"
    )


def dashboard_not_found_view(path: str) -> str:
    """Render the dashboard's not-found page for ``path``."""
    return (
        '<section class="p-4 text-center">'
        '<h1 class="text-2xl font-bold">Dashboard Route Not Found</h1>'
        f"<p>{escape(f'Path: {path}')}</p>"
        + _link(
            Dashboard(DashboardHome()),
            "inline-block px-4 py-2 bg-green-600 text-white rounded mt-2",
            "Go to Dashboard Home",
        )
        + "</section>"
    )


def admin_home_view() -> str:
    """Render the admin dashboard."""
    return (
        '<div class="p-4 text-center">'
        '<h2 class="text-2xl font-bold">Admin Dashboard</h2>'
        + _link(
            Admin(UserList()),
            "inline-block px-4 py-2 mt-4 bg-blue-500 text-white rounded",
            "Manage Users",
        )
        + "</div>"
    )


def user_list_view() -> str:
    """Render the user management page."""
    return (
        '<div class="p-4 text-center">'
        '<h2 class="text-2xl font-bold">User Management</h2>'
        "<p>List or manage users here.</p>"
        "</div>"
    )


def admin_not_found_view() -> str:
    """Render the admin section's not-found page."""
    return (
        '<div class="p-4 text-center">'
        '<h2 class="text-2xl font-bold">Admin 404: Not Found</h2>'
        f"<p>{escape('This admin page doesn' + chr(39) + 't exist.')}</p>"
        "</div>"
    )


# --------------------------------------------------------------------------
# Routing
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class _Request:
    auth: AuthContext
    pathname: str


_View = Callable[[_Request, Mapping[str, str], Optional[str]], str]

_VIEWS: dict[str, _View] = {
    "HomeView": lambda req, params, inner: home_view(),
    "ContactView": lambda req, params, inner: contact_view(),
    "AssetListView": lambda req, params, inner: asset_list_view(),
    "AssetDetailsView": lambda req, params, inner: asset_details_view(params),
    "ProfileView": lambda req, params, inner: profile_view(),
    "LoginView": lambda req, params, inner: login_view(req.auth),
    "DashboardView": lambda req, params, inner: inner or "",
    "AdminView": lambda req, params, inner: inner or "",
    "NotFoundView": lambda req, params, inner: not_found_view(),
    "DashboardHomeView": lambda req, params, inner: dashboard_home_view(),
    "DashboardSettingsView": lambda req, params, inner: dashboard_settings_view(),
    "DashboardAnalyticsView": lambda req, params, inner: dashboard_analytics_view(),
    "DashboardNotFoundView": lambda req, params, inner: dashboard_not_found_view(req.pathname),
    "AdminHomeView": lambda req, params, inner: admin_home_view(),
    "UserListView": lambda req, params, inner: user_list_view(),
    "AdminNotFoundView": lambda req, params, inner: admin_not_found_view(),
}

_PROTECTED = frozenset({RouteKind.PROTECTED_ROUTE, RouteKind.PROTECTED_PARENT_ROUTE})


def _match_prefix(template: str, parts: list[str]) -> tuple[dict[str, str], list[str]] | None:
    remaining = iter(parts)
    params: dict[str, str] = {}
    for segment in parse_segments(template):
        part = next(remaining, None)
        if segment.kind is SegmentKind.STATIC:
            if part != segment.value:
                return None
        elif segment.kind is SegmentKind.PARAM:
            if part is None:
                return None
            params[segment.value] = unquote(part)
        elif part is not None:
            params[segment.value] = unquote(part)
    return params, list(remaining)


def _route(routes_cls: type, parts: list[str], request: _Request) -> str | None:
    for child in route_table(routes_cls).children():
        matched = _match_prefix(child.spec.path, parts)
        if matched is None:
            continue
        params, rest = matched
        inner = None
        if child.nested is not None:
            inner = _route(child.nested, rest, request)
            if inner is None:
                continue
        elif rest:
            continue

        spec = child.spec
        if spec.kind in _PROTECTED:
            allowed = spec.condition(request.auth)
            if allowed is None:
                return _VIEWS[spec.fallback](request, {}, None)
            if not allowed:
                return _routed_view(spec.redirect_path().to_href(), request.auth)
        return _VIEWS[child.view](request, params, inner)
    return None


def _routed_view(pathname: str, auth: AuthContext) -> str:
    request = _Request(auth, pathname)
    parts = [part for part in pathname.split("/") if part]
    view = _route(AppRoutes, parts, request)
    if view is not None:
        return view
    return _VIEWS[route_table(AppRoutes).fallback_view()](request, {}, None)


def render(path: str, auth: AuthContext | None = None) -> str:
    """Render the whole page for ``path``: navigation and the matched view."""
    auth = auth if auth is not None else AuthContext()
    pathname = urlsplit(path).path or "/"
    nav_css = "text-white px-3 py-1 bg-blue-600 rounded"
    nav = (
        '<nav class="flex space-x-4 p-4 bg-gray-900 text-white">'
        + _link(Home(), "text-white px-3 py-1 bg-green-600 rounded", "Home")
        + _link(Contact(), nav_css, "Contact")
        + _link(AssetList(), nav_css, "Assets")
        + _link(Profile(), nav_css, "Profile")
        + _link(Dashboard(DashboardHome()), nav_css, "Dashboard")
        + _link(Admin(AdminHome()), nav_css, "Admin")
        + "</nav>"
    )
    return (
        '<html lang="en" dir="ltr"><head>'
        '<meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        "<title>Welcome</title></head><body>"
        '<main class="min-h-screen">' + nav + _routed_view(pathname, auth) + "</main>"
        "</body></html>"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Print the page rendered for a path."""
    parser = argparse.ArgumentParser(description="Render a page of the nested demo routes.")
    parser.add_argument("path", nargs="?", default="/", help="the path to render")
    parser.add_argument(
        "--logged-in", action="store_true", help="render as a logged-in visitor"
    )
    args = parser.parse_args(argv)
    print(render(args.path, AuthContext(logged_in=args.logged_in)))
    return 0