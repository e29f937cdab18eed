import pytest

from routable.demo_flat import (
    AppRoutes,
    asset_details_view,
    asset_list_view,
    contact_view,
    home_view,
    main,
    not_found_view,
    profile_view,
    render,
)
from routable.routes import route_table


def test_unit_route_hrefs():
    assert AppRoutes.Home().to_href() == "/"
    assert AppRoutes.Contact().to_href() == "/contact"
    assert AppRoutes.AssetList().to_href() == "/asset"
    assert AppRoutes.Profile().to_href() == "/profile"
    assert AppRoutes.NotFound().to_href() == "/404"


def test_asset_details_href_without_action():
    assert str(AppRoutes.AssetDetails(id=123, action=None)) == "/asset/123"


def test_asset_details_href_with_action_goes_to_query():
    assert AppRoutes.AssetDetails(id=456, action="edit").to_href() == "/asset/456?action=edit"


def test_route_table_views_and_fallback():
    table = route_table(AppRoutes)
    assert [child.view for child in table.children()] == [
        "HomeView",
        "ContactView",
        "AssetListView",
        "AssetDetailsView",
        "ProfileView",
        "NotFoundView",
    ]
    assert table.fallback_view() == "NotFoundView"


@pytest.mark.parametrize(
    "variant, view",
    [
        (AppRoutes.Home(), home_view),
        (AppRoutes.Contact(), contact_view),
        (AppRoutes.AssetList(), asset_list_view),
        (AppRoutes.Profile(), profile_view),
        (AppRoutes.NotFound(), not_found_view),
    ],
)
def test_render_round_trips_hrefs_to_views(variant, view):
    assert view() in render(variant.to_href())


def test_render_unknown_path_uses_fallback():
    page = render("/no/such/page")
    assert "404: Not Found" in page
    assert "Welcome Home!" not in page


def test_render_ignores_query_when_matching():
    assert "Contact Us" in render("/contact?from=nav")


def test_render_asset_details_round_trip():
    href = AppRoutes.AssetDetails(id=42, action="edit").to_href()
    assert asset_details_view({"id": "42"}) in render(href)


def test_asset_details_previous_saturates_and_disables():
    page = asset_details_view({"id": "0"})
    assert page.count(f'href="{AppRoutes.AssetDetails(id=0).to_href()}"') == 1
    assert " disabled" in page


def test_asset_details_invalid_id_defaults_to_zero():
    assert asset_details_view({"id": "abc"}) == asset_details_view({})


def test_asset_list_links_every_route():
    page = asset_list_view()
    for variant in (
        AppRoutes.Home(),
        AppRoutes.Contact(),
        AppRoutes.AssetDetails(id=123),
        AppRoutes.Profile(),
        AppRoutes.NotFound(),
    ):
        assert f'href="{variant.to_href()}"' in page


def test_render_has_navigation():
    page = render("/")
    assert f'href="{AppRoutes.AssetList().to_href()}"' in page
    assert "Welcome Home!" in page


def test_main_prints_rendered_page(capsys):
    assert main(["/contact"]) == 0
    out = capsys.readouterr().out
    assert "Contact Us" in out
    assert out.strip() == render("/contact")