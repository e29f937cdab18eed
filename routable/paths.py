"""Route path templates: parsing, validation and href building."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SegmentKind(Enum):
    """The kind of one segment of a route template."""

    STATIC = "static"
    PARAM = "param"
    OPTIONAL_PARAM = "optional_param"


@dataclass(frozen=True)
class Segment:
    """One segment of a route template: literal text or a parameter name."""

    kind: SegmentKind
    value: str


class PathError(ValueError):
    """Raised when a route template and its fields do not fit together."""


def parse_segments(route: str) -> list[Segment]:
    """Split a route template such as ``/asset/:id/:tab?`` into segments."""
    segments = []
    for part in route.lstrip("/").split("/"):
        if part.startswith(":"):
            if part.endswith("?"):
                segments.append(Segment(SegmentKind.OPTIONAL_PARAM, part[:-1].lstrip(":")))
            else:
                segments.append(Segment(SegmentKind.PARAM, part.lstrip(":")))
        elif part:
            segments.append(Segment(SegmentKind.STATIC, part))
    return segments


def combine_paths(prefix: str, nested: str) -> str:
    """Join a parent route's path and a nested route's path with one slash."""
    prefix = prefix.rstrip("/")
    nested = nested.lstrip("/")
    prefix_is_root = prefix in ("", "/")
    nested_is_root = nested in ("", "/")

    if prefix_is_root and nested_is_root:
        return "/"
    if prefix_is_root:
        return f"/{nested}"
    if nested_is_root:
        return prefix
    return f"{prefix}/{nested}"


def validate_path_fields(
    route: str,
    fields: Iterable[str],
    optional_fields: Collection[str],
    nested: bool,
) -> list[str]:
    """Check that a route template matches a variant's fields.

    ``fields`` names every field of the variant and ``optional_fields`` those
    that may be absent. With ``nested`` set the variant wraps a single nested
    route and fields left out of the path are not checked. Returns the sorted
    names of the fields that are not in the path and so become query
    parameters.
    """
    field_names = list(fields)
    known = set(field_names)
    used: set[str] = set()

    for segment in parse_segments(route):
        if segment.kind is SegmentKind.PARAM:
            used.add(segment.value)
            if segment.value not in known:
                raise PathError(
                    f"Path param `:{segment.value}` not found in the fields of `{route}`."
                )
        elif segment.kind is SegmentKind.OPTIONAL_PARAM:
            used.add(segment.value)
            if segment.value not in known:
                raise PathError(
                    f"Optional param `:{segment.value}?` not found in the fields of `{route}`."
                )
            if segment.value not in optional_fields:
                raise PathError(
                    f"`:{segment.value}?` in route `{route}` requires an optional field."
                )

    leftover = sorted(name for name in field_names if name not in used)
    if nested:
        return []
    for name in leftover:
        if name not in optional_fields:
            raise PathError(
                f"Field `{name}` not used in path, so must be optional to appear as a query."
            )
    return leftover


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_href(route: str, values: Mapping[str, Any]) -> str:
    """Fill a route template with field values and return the href.

    Path parameters are substituted in place; optional ones are dropped when
    their value is ``None``. Any other non-``None`` value becomes a query
    parameter, with the query sorted by name.
    """
    path = ""
    used: set[str] = set()

    for segment in parse_segments(route):
        if segment.kind is SegmentKind.STATIC:
            if not path.endswith("/"):
                path += "/"
            path += segment.value
        elif segment.kind is SegmentKind.PARAM:
            used.add(segment.value)
            value = values.get(segment.value)
            if value is None:
                raise PathError(f"No value for path param `:{segment.value}` of `{route}`.")
            path += "/" + _format(value)
        else:
            used.add(segment.value)
            value = values.get(segment.value)
            if value is not None:
                path += "/" + _format(value)

    query = sorted(
        (name, _format(value))
        for name, value in values.items()
        if name not in used and value is not None
    )
    if query:
        path += "?" + "&".join(f"{name}={value}" for name, value in query)

    return path or "/"