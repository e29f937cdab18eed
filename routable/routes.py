"""Declarative route sets: variants, route kinds, href building and route tables."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple, TypeVar, get_args

from .paths import (
    PathError,
    SegmentKind,
    build_href,
    combine_paths,
    parse_segments,
    validate_path_fields,
)

C = TypeVar("C", bound=type)


class RoutableError(ValueError):
    """Raised when a route set or one of its variants is declared wrongly."""


class RouteKind(Enum):
    """How a variant takes part in routing."""

    ROUTE = "route"
    PARENT_ROUTE = "parent_route"
    PROTECTED_ROUTE = "protected_route"
    PROTECTED_PARENT_ROUTE = "protected_parent_route"


_PARENT_KINDS = frozenset({RouteKind.PARENT_ROUTE, RouteKind.PROTECTED_PARENT_ROUTE})

# Route sets by class name, so string annotations can be resolved.
_ROUTE_SETS: dict[str, type] = {}


@dataclass(frozen=True)
class RouteSpec:
    """The routing declaration attached to one variant."""

    kind: RouteKind
    path: str
    condition: Any = None
    redirect_path: Any = None
    fallback: Any = None
    ssr: Any = None


@dataclass(frozen=True)
class RouteConfig:
    """Settings of a route set: view naming and transitions."""

    view_prefix: str = ""
    view_suffix: str = "View"
    transition: bool = False


class _Child(NamedTuple):
    variant: type
    spec: RouteSpec
    view: str
    nested: type | None


@dataclass(frozen=True)
class RouteTable:
    """The routes a route set declares, in declaration order."""

    name: str
    config: RouteConfig
    entries: tuple[_Child, ...]
    fallback_name: str
    fallback_variant: type

    def fallback_view(self) -> str:
        """Return the name of the view shown when no route matches."""
        return self.fallback_name

    def children(self) -> list[_Child]:
        """Return the routed variants with their specs, views and nested sets."""
        return list(self.entries)


def _field_values(obj: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(obj):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    return {}


def _variant_fields(cls: type) -> list[dataclasses.Field]:
    return list(dataclasses.fields(cls)) if dataclasses.is_dataclass(cls) else []


def _is_optional(f: dataclasses.Field) -> bool:
    hint = f.type
    if isinstance(hint, str):
        return bool(re.search(r"\bOptional\[|\bNone\b", hint))
    return type(None) in get_args(hint)


def _find_routes_class(name: str) -> type | None:
    """Find a route set by its class name among the registered route sets."""
    return _ROUTE_SETS.get(name)


def _nested_type(f: dataclasses.Field) -> type | None:
    hint = f.type
    if isinstance(hint, str):
        hint = _find_routes_class(hint.strip().strip("'\""))
    if isinstance(hint, type) and issubclass(hint, Routable):
        return hint
    return None


def _nested_value(values: dict[str, Any]) -> Routable | None:
    if len(values) != 1:
        return None
    (value,) = values.values()
    return value if isinstance(value, Routable) else None


def _is_routes_class(cls: Any) -> bool:
    return isinstance(cls, type) and "_route_variants" in vars(cls)


class Routable:
    """Base of a route set; direct subclasses of a route set are its variants.

    A class deriving directly from ``Routable`` is a route set. Each class
    deriving from a route set becomes one of its variants, registered in
    definition order and reachable as an attribute of the set.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if Routable in cls.__bases__:
            cls._route_variants = []
            _ROUTE_SETS[cls.__name__] = cls
            return
        for base in cls.__bases__:
            if _is_routes_class(base):
                base._route_variants.append(cls)
                setattr(base, cls.__name__, cls)
                break

    def to_href(self) -> str:
        """Return the href of this route, with path params and query filled in."""
        cls = type(self)
        spec: RouteSpec | None = vars(cls).get("_route_spec")
        values = _field_values(self)
        nested = _nested_value(values)

        if spec is None or not spec.path:
            return nested.to_href() if nested is not None else "/"

        if spec.kind in _PARENT_KINDS and nested is None:
            raise RoutableError(
                f"Variant `{cls.__name__}` must hold exactly one Routable for nested routing."
            )

        optional = {f.name for f in _variant_fields(cls) if _is_optional(f)}
        validate_path_fields(spec.path, list(values), optional, nested is not None)

        if nested is not None:
            params = {
                s.value for s in parse_segments(spec.path) if s.kind is not SegmentKind.STATIC
            }
            prefix = build_href(spec.path, {k: v for k, v in values.items() if k in params})
            return combine_paths(prefix, nested.to_href())
        return build_href(spec.path, values)

    def __str__(self) -> str:
        return self.to_href()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return _field_values(self) == _field_values(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(_field_values(self).items())))


def _require_variant(cls: Any, what: str) -> None:
    if (
        not (isinstance(cls, type) and issubclass(cls, Routable))
        or _is_routes_class(cls)
        or cls is Routable
    ):
        raise RoutableError(f"{what} can only be applied to a variant of a Routable class.")


def _attach(spec: RouteSpec) -> Callable[[C], C]:
    def decorate(cls: C) -> C:
        _require_variant(cls, f"@{spec.kind.value}")
        if "_route_spec" in vars(cls):
            raise RoutableError(
                "Multiple route-like attributes found. Only one of @route, @parent_route, "
                "@protected_route, or @protected_parent_route is allowed."
            )
        cls._route_spec = spec
        return cls

    return decorate


def route(path: str) -> Callable[[C], C]:
    """Declare a variant as a plain route at ``path``."""
    return _attach(RouteSpec(RouteKind.ROUTE, path))


def parent_route(path: str, ssr: Any = None) -> Callable[[C], C]:
    """Declare a variant as a parent route whose single field is a nested route set."""
    return _attach(RouteSpec(RouteKind.PARENT_ROUTE, path, ssr=ssr))


def protected_route(
    path: str, condition: Any, redirect_path: Any, fallback: Any
) -> Callable[[C], C]:
    """Declare a variant as a route guarded by ``condition``."""
    return _attach(
        RouteSpec(
            RouteKind.PROTECTED_ROUTE,
            path,
            condition=condition,
            redirect_path=redirect_path,
            fallback=fallback,
        )
    )


def protected_parent_route(
    path: str, condition: Any, redirect_path: Any, fallback: Any, ssr: Any = None
) -> Callable[[C], C]:
    """Declare a variant as a guarded parent route holding a nested route set."""
    return _attach(
        RouteSpec(
            RouteKind.PROTECTED_PARENT_ROUTE,
            path,
            condition=condition,
            redirect_path=redirect_path,
            fallback=fallback,
            ssr=ssr,
        )
    )


def fallback(cls: C) -> C:
    """Mark a variant as the one shown when no route matches."""
    _require_variant(cls, "@fallback")
    if vars(cls).get("_route_fallback"):
        raise RoutableError("Multiple @fallback markers found on the same variant.")
    cls._route_fallback = True
    return cls


def routable(
    view_prefix: str = "", view_suffix: str = "View", transition: bool = False
) -> Callable[[C], C]:
    """Set the view naming and transition settings of a route set."""
    config = RouteConfig(view_prefix, view_suffix, transition)

    def decorate(cls: C) -> C:
        if not _is_routes_class(cls):
            raise RoutableError("@routable can only be applied to a class deriving from Routable.")
        cls._route_config = config
        return cls

    return decorate


def variant_view_name(variant_name: str, config: RouteConfig | None = None) -> str:
    """Return the view name of a variant: prefix, variant name, suffix."""
    config = config or RouteConfig()
    return f"{config.view_prefix}{variant_name}{config.view_suffix}"


def _check_variant(cls: type, spec: RouteSpec, fields: list[dataclasses.Field]) -> None:
    if spec.kind in _PARENT_KINDS and len(fields) != 1:
        raise RoutableError(
            f"Variant `{cls.__name__}` has {len(fields)} fields, "
            "but exactly 1 is required for nested routing."
        )
    if not spec.path:
        return
    nested = spec.kind in _PARENT_KINDS or (
        len(fields) == 1 and _nested_type(fields[0]) is not None
    )
    optional = {f.name for f in fields if _is_optional(f)}
    try:
        validate_path_fields(spec.path, [f.name for f in fields], optional, nested)
    except PathError as err:
        raise PathError(f"{cls.__name__}: {err}") from err


def route_table(routes_cls: type) -> RouteTable:
    """Check a route set and collect its routes and fallback view."""
    if not _is_routes_class(routes_cls):
        raise RoutableError("route_table() needs a class deriving directly from Routable.")
    config: RouteConfig = vars(routes_cls).get("_route_config", RouteConfig())
    entries: list[_Child] = []
    fallback_variant: type | None = None

    for variant in routes_cls._route_variants:
        if vars(variant).get("_route_fallback"):
            fallback_variant = variant
        spec: RouteSpec | None = vars(variant).get("_route_spec")
        if spec is None:
            continue
        fields = _variant_fields(variant)
        _check_variant(variant, spec, fields)
        nested = None
        if spec.kind in _PARENT_KINDS:
            nested = _nested_type(fields[0])
            if nested is None:
                raise RoutableError(
                    f"Variant `{variant.__name__}` must hold a Routable for nested routing."
                )
        view = variant_view_name(variant.__name__, config)
        entries.append(_Child(variant, spec, view, nested))

    if fallback_variant is None:
        raise RoutableError("No variant is marked with @fallback. Exactly one is required.")

    return RouteTable(
        name=routes_cls.__name__,
        config=config,
        entries=tuple(entries),
        fallback_name=variant_view_name(fallback_variant.__name__, config),
        fallback_variant=fallback_variant,
    )