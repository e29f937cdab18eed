# routable

You declare an application's routes once, as a class of route variants. From
that one declaration you get hrefs, a route table and typed path and query
parameters, so you never write a URL by hand.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Declaring routes

A class that derives directly from `Routable` is a *route set*. Each class
that derives from a route set is one of its *variants*. Variants are
registered in the order they are defined, and each one can also be reached as
an attribute of the set, for example `AppRoutes.Home`. A variant that has
fields is written as a dataclass.

```python
from dataclasses import dataclass
from typing import Optional

from routable.routes import Routable, fallback, parent_route, routable, route


@routable(view_suffix="View")
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


@routable(view_prefix="", view_suffix="View", transition=False)
class AppRoutes(Routable):
    pass


@route("/")
class Home(AppRoutes):
    pass


@route("/asset/:id")
@dataclass(frozen=True)
class AssetDetails(AppRoutes):
    id: int
    action: Optional[str] = None


@parent_route("/dashboard")
@dataclass(frozen=True)
class Dashboard(AppRoutes):
    routes: DashboardRoutes


@fallback
@route("/404")
class NotFound(AppRoutes):
    pass


str(Home())                                  # "/"
AssetDetails(id=123).to_href()               # "/asset/123"
AssetDetails(id=456, action="edit").to_href()  # "/asset/456?action=edit"
Dashboard(DashboardSettings()).to_href()     # "/dashboard/settings"
```

The decorators in `routable.routes` are:

- `route(path)`: a plain route.
- `parent_route(path, ssr=None)`: a route whose single field holds a variant
  of a nested route set.
- `protected_route(path, condition, redirect_path, fallback)`: a route with a
  guard.
- `protected_parent_route(path, condition, redirect_path, fallback, ssr=None)`:
  a nested route with a guard.
- `fallback`: marks the variant whose view is shown when no route matches.
- `routable(view_prefix="", view_suffix="View", transition=False)`: sets the
  route set's `RouteConfig`.

Each route decorator stores a `RouteSpec` on the variant. The spec holds a
`RouteKind`, the path, and the `condition`, `redirect_path`, `fallback` and
`ssr` values exactly as they were given. The package stores these values but
never calls or evaluates them. Deciding what a guard means is left to the
code that does the routing.

### Hrefs

`Routable.to_href()` builds a variant's href, and `str()` returns the same
string. The rules are:

- Path parameters (`:id`) are filled from fields of the same name.
- Optional path parameters (`:id?`) are left out when their value is `None`.
- Fields the path does not use become a query string, sorted by name. `None`
  values are dropped.
- A parent route's path and its nested variant's href are joined with
  `combine_paths`.
- A variant with no path whose single field holds a `Routable` takes that
  value's href.
- A variant with no path and no nested value gives `"/"`.

Variants compare equal when they are of the same class and hold equal field
values, and they can be hashed.

### Route tables and view names

`route_table(routes_cls)` checks a route set and returns a `RouteTable`:

- `children()` returns the routed variants in declaration order. Each entry
  has `variant`, `spec`, `view` (the view name) and `nested` (the nested route
  set, or `None`).
- `fallback_view()` returns the view name of the `@fallback` variant.

View names come from `variant_view_name(variant_name, config)`. The name is
the prefix, then the variant name, then the suffix, so `Home` becomes
`"HomeView"` by default.

### Errors

`RoutableError` is raised for wrong declarations:

- no `@fallback` variant;
- two route decorators on one variant, or `@fallback` applied twice;
- a decorator used on something that is not a variant;
- a parent route that does not have exactly one field holding a route set.

`PathError` is raised when a path and a variant's fields do not fit together:

- a path parameter has no matching field;
- an optional segment's field is not optional;
- a required field is not used by the path.

Both `RoutableError` and `PathError` are subclasses of `ValueError`.

## Path helpers (`routable.paths`)

```python
from routable.paths import build_href, combine_paths, parse_segments

combine_paths("/dashboard", "/settings")   # "/dashboard/settings"
combine_paths("/", "")                     # "/"

build_href("/asset/:id", {"id": 456, "action": "edit"})
# "/asset/456?action=edit"

parse_segments("/asset/:id/:tab?")
# [Segment(STATIC, "asset"), Segment(PARAM, "id"), Segment(OPTIONAL_PARAM, "tab")]
```

`validate_path_fields(route, fields, optional_fields, nested)` checks a path
against field names. It returns the sorted names of the fields that become
query parameters, and raises `PathError` on a mismatch. `build_href` also
raises `PathError` when a required path parameter has no value.

## Parameters (`routable.params`)

```python
from routable.params import MaybeParam, MaybeQuery, parse_param

value = parse_param("42", int)
value.ok()            # 42
value.unwrap_or(0)    # 42

parse_param("", int).ok()        # None: an empty value counts as missing
parse_param("abc", int).ok()     # None: the parse failed

asset_id = MaybeParam("id", {"id": "7"}, int)
asset_id.ok()                    # 7

tab = MaybeQuery("tab", "?tab=info&tab=other")
tab.get().value                  # "info": the first value wins
```

A `ParamValue` has a `state` (`ParamState.MISSING`, `PARSE_ERROR` or
`VALUE`), the parsed `value`, and the `raw` text when parsing failed.
`ParamValue.require(key)` returns the value. It raises `MissingParamError`
when the value is missing and `ParamParseError` when parsing failed. Both are
subclasses of `ParamError`.

`MaybeParam` and `MaybeQuery` are `TypedParam`s built from a key, a source
and a parser (default `str`). The source is a mapping, or a callable that
returns one. A `MaybeQuery` source may also be a query string. The parameter
is parsed again on every call to `get`, `ok`, `unwrap_or`, `is_missing`,
`is_parse_error` and `is_value`, so a callable source always gives the
current value.

## Demo applications

Two demo sites render whole pages as HTML text for a given path:

```
routable-demo-flat /asset/456
routable-demo-nested /dashboard/settings
routable-demo-nested /admin --logged-in
```

- `routable.demo_flat` is a flat site with home, contact, asset list, asset
  detail, profile and not-found pages.
- `routable.demo_nested` adds a dashboard section and an admin section. The
  admin section and the profile page are protected. A visitor who is not
  logged in is shown the login page instead. `AuthContext` holds the login
  state and has `login()` and `logout()` methods.

From Python, call `render(path)` (and `render(path, auth)` in the nested
demo) to get the page as a string.

## What this package does not do

- It does not serve HTTP and has no browser-side rendering or reactive
  updates.
- The route sets describe routes and build hrefs. Matching request paths to
  views is done only by the demo modules' own `render` functions.

## Running the tests

```
pip install ".[test]"
pytest
```