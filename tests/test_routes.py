from dataclasses import dataclass
from typing import Optional

import pytest

from routable.paths import PathError, combine_paths
from routable.routes import (
    RouteConfig,
    RouteKind,
    Routable,
    RoutableError,
    fallback,
    parent_route,
    protected_parent_route,
    protected_route,
    route,
    route_table,
    routable,
    variant_view_name,
)


def _allow():
    return True


def _redirect():
    return "/login"


@routable(view_prefix="", view_suffix="View", transition=False)
class FlatRoutes(Routable):
    pass


@route("/")
class Home(FlatRoutes):
    pass


@route("/asset/:id")
@dataclass(frozen=True)
class AssetDetails(FlatRoutes):
    id: int
    action: Optional[str] = None


@protected_route("/profile", condition=_allow, redirect_path=_redirect, fallback="NotFoundView")
class Profile(FlatRoutes):
    pass


@fallback
@route("/404")
class NotFound(FlatRoutes):
    pass


@routable()
class DashboardRoutes(Routable):
    pass


@route("")
class DashboardHome(DashboardRoutes):
    pass


@route("/settings")
class DashboardSettings(DashboardRoutes):
    pass


@fallback
@route("/404")
class DashboardNotFound(DashboardRoutes):
    pass


class AppRoutes(Routable):
    pass


@parent_route("/dashboard")
@dataclass(frozen=True)
class Dashboard(AppRoutes):
    inner: DashboardRoutes


@protected_parent_route(
    "/admin", condition=_allow, redirect_path=_redirect, fallback="NotFoundView"
)
@dataclass(frozen=True)
class Admin(AppRoutes):
    inner: DashboardRoutes


@dataclass(frozen=True)
class Wrapped(AppRoutes):
    inner: DashboardRoutes


@fallback
class AdminNotFound(AppRoutes):
    pass


def test_variant_view_name_defaults():
    assert variant_view_name("NotFound") == "NotFoundView"
    assert variant_view_name("Home", RouteConfig()) == "HomeView"


def test_variant_view_name_uses_prefix_and_suffix():
    config = RouteConfig(view_prefix="Page", view_suffix="Screen")
    name = variant_view_name("Home", config)
    assert name.startswith("Page")
    assert name.endswith("Screen")
    assert "Home" in name


def test_unit_variant_hrefs():
    assert Routable.to_href(FlatRoutes.Home()) == "/"
    assert Routable.to_href(FlatRoutes.NotFound()) == "/404"
    assert str(FlatRoutes.NotFound()) == "/404"


def test_variants_reachable_from_route_set():
    table = route_table(FlatRoutes)
    assert table.children()[0].variant is FlatRoutes.Home
    assert table.children()[1].variant is FlatRoutes.AssetDetails


def test_field_variant_href_and_query():
    assert Routable.to_href(AssetDetails(123)) == "/asset/123"
    assert Routable.to_href(AssetDetails(456, "edit")) == "/asset/456?action=edit"


def test_unit_variants_compare_equal():
    home_cls = route_table(FlatRoutes).children()[0].variant
    assert home_cls() == Home()
    assert hash(home_cls()) == hash(Home())
    assert (home_cls() == NotFound()) is False


def test_nested_parent_route_href():
    assert Routable.to_href(Dashboard(DashboardHome())) == "/dashboard"
    assert Routable.to_href(Dashboard(DashboardSettings())) == "/dashboard/settings"
    assert Routable.to_href(Admin(DashboardHome())) == "/admin"


def test_nested_href_combines_prefix_and_inner():
    inner = DashboardSettings()
    assert Routable.to_href(Admin(inner)) == combine_paths("/admin", Routable.to_href(inner))


def test_unrouted_wrapper_delegates_to_nested():
    inner = DashboardSettings()
    assert Routable.to_href(Wrapped(inner)) == "/settings"


def test_unrouted_unit_variant_is_root():
    assert Routable.to_href(AdminNotFound()) == "/"


def test_route_table_flat():
    table = route_table(FlatRoutes)
    assert table.fallback_view() == "NotFoundView"
    assert [c.view for c in table.children()] == [
        "HomeView",
        "AssetDetailsView",
        "ProfileView",
        "NotFoundView",
    ]
    assert table.config.transition is False
    profile = table.children()[2]
    assert profile.spec.kind is RouteKind.PROTECTED_ROUTE
    assert profile.spec.condition is _allow
    assert profile.spec.redirect_path is _redirect


def test_route_table_nested():
    table = route_table(AppRoutes)
    children = table.children()
    assert [c.variant for c in children] == [Dashboard, Admin]
    assert all(c.nested is DashboardRoutes for c in children)
    assert [c.spec.kind for c in children] == [
        RouteKind.PARENT_ROUTE,
        RouteKind.PROTECTED_PARENT_ROUTE,
    ]
    assert table.fallback_view() == "AdminNotFoundView"
    assert table.fallback_variant is AdminNotFound


def test_routable_config_is_applied():
    @routable(view_prefix="Page", view_suffix="Screen", transition=True)
    class Local(Routable):
        pass

    @fallback
    class Lost(Local):
        pass

    table = route_table(Local)
    assert table.config.transition is True
    assert table.fallback_view() == variant_view_name("Lost", table.config)
    assert table.children() == []


def test_multiple_route_decorators_rejected():
    class Local(Routable):
        pass

    with pytest.raises(RoutableError, match="Multiple route-like"):

        @route("/a")
        @route("/b")
        class Twice(Local):
            pass


def test_double_fallback_rejected():
    class Local(Routable):
        pass

    class Twice(Local):
        pass

    fallback(Twice)
    with pytest.raises(RoutableError, match="Multiple @fallback"):
        fallback(Twice)


def test_missing_fallback_rejected():
    class Local(Routable):
        pass

    @route("/only")
    class Only(Local):
        pass

    with pytest.raises(RoutableError, match="No variant is marked"):
        route_table(Local)


def test_route_table_needs_route_set():
    with pytest.raises(RoutableError):
        route_table(Home)
    with pytest.raises(RoutableError):
        route_table(int)


def test_decorators_need_variants():
    with pytest.raises(RoutableError):
        routable()(Home)
    with pytest.raises(RoutableError):
        route("/x")(FlatRoutes)
    with pytest.raises(RoutableError):
        fallback(int)


def test_unknown_path_param_rejected():
    class Local(Routable):
        pass

    @route("/item/:slug")
    @dataclass(frozen=True)
    class Item(Local):
        id: int

    @fallback
    class Gone(Local):
        pass

    with pytest.raises(PathError):
        route_table(Local)
    with pytest.raises(PathError):
        Routable.to_href(Item(1))


def test_required_field_outside_path_rejected():
    class Local(Routable):
        pass

    @route("/item")
    @dataclass(frozen=True)
    class Item(Local):
        id: int

    @fallback
    class Gone(Local):
        pass

    with pytest.raises(PathError, match="must be optional"):
        route_table(Local)


def test_optional_param_needs_optional_field():
    class Local(Routable):
        pass

    @route("/docs/:page?")
    @dataclass(frozen=True)
    class Docs(Local):
        page: str

    @fallback
    class Gone(Local):
        pass

    with pytest.raises(PathError):
        route_table(Local)


def test_optional_path_param_href():
    class Local(Routable):
        pass

    @route("/docs/:page?")
    @dataclass(frozen=True)
    class Docs(Local):
        page: Optional[str] = None

    @fallback
    class Gone(Local):
        pass

    with_page = Routable.to_href(Docs("intro"))
    without_page = Routable.to_href(Docs())
    assert with_page == without_page + "/intro"
    assert route_table(Local).children()[0].view == "DocsView"


def test_parent_route_needs_single_field():
    class Local(Routable):
        pass

    @parent_route("/nest")
    @dataclass(frozen=True)
    class Nest(Local):
        first: DashboardRoutes
        second: DashboardRoutes

    @fallback
    class Gone(Local):
        pass

    with pytest.raises(RoutableError, match="exactly 1"):
        route_table(Local)


def test_parent_route_needs_routable_field():
    class Local(Routable):
        pass

    @parent_route("/nest")
    @dataclass(frozen=True)
    class Nest(Local):
        count: int

    @fallback
    class Gone(Local):
        pass

    with pytest.raises(RoutableError):
        route_table(Local)
    with pytest.raises(RoutableError):
        Routable.to_href(Nest(3))