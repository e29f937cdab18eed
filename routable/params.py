"""Typed route and query parameters."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union
from urllib.parse import parse_qsl

T = TypeVar("T")

Parser = Callable[[str], Any]


class ParamState(Enum):
    """Whether a parameter was missing, unparseable or parsed."""

    MISSING = "missing"
    PARSE_ERROR = "parse_error"
    VALUE = "value"


class ParamError(ValueError):
    """Base class for parameter errors."""


class MissingParamError(ParamError):
    """A parameter was missing or empty."""

    def __init__(self, key: str) -> None:
        super().__init__(f"missing param: {key}")
        self.key = key


class ParamParseError(ParamError):
    """A parameter was present but could not be parsed."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"failed to parse param: {raw}")
        self.raw = raw


@dataclass(frozen=True)
class ParamValue(Generic[T]):
    """The parsed state of a parameter.

    ``raw`` holds the original text when parsing failed; ``value`` holds the
    parsed value when it succeeded.
    """

    state: ParamState
    value: T | None = None
    raw: str | None = None

    def ok(self) -> T | None:
        """Return the parsed value, or ``None`` if missing or invalid."""
        return self.value if self.state is ParamState.VALUE else None

    def unwrap_or(self, default: T) -> T:
        """Return the parsed value, or ``default`` if missing or invalid."""
        return self.value if self.state is ParamState.VALUE else default  # type: ignore[return-value]

    def require(self, key: str) -> T:
        """Return the parsed value or raise the matching ``ParamError``."""
        if self.state is ParamState.MISSING:
            raise MissingParamError(key)
        if self.state is ParamState.PARSE_ERROR:
            raise ParamParseError(self.raw or "")
        return self.value  # type: ignore[return-value]


def parse_param(raw: str | None, parser: Parser = str) -> ParamValue[Any]:
    """Parse raw parameter text; ``None`` and empty text count as missing."""
    if raw is None or raw == "":
        return ParamValue(ParamState.MISSING)
    try:
        parsed = parser(raw)
    except (ValueError, TypeError, ArithmeticError):
        return ParamValue(ParamState.PARSE_ERROR, raw=raw)
    return ParamValue(ParamState.VALUE, value=parsed)


Source = Union[Mapping[str, Any], Callable[[], Mapping[str, Any]]]


class TypedParam(Generic[T]):
    """A parameter read by key from a source and parsed on every access.

    The source is a mapping or a callable returning one, so a callable source
    makes each read reflect the current state.
    """

    def __init__(self, key: str, source: Any, parser: Parser = str) -> None:
        self.key = key
        self._source = source
        self._parser = parser

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"

    def _mapping(self) -> Mapping[str, Any]:
        source = self._source() if callable(self._source) else self._source
        return source

    def _raw(self) -> str | None:
        value = self._mapping().get(self.key)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def get(self) -> ParamValue[T]:
        """Return the current parsed state of the parameter."""
        return parse_param(self._raw(), self._parser)

    def is_missing(self) -> bool:
        return self.get().state is ParamState.MISSING

    def is_parse_error(self) -> bool:
        return self.get().state is ParamState.PARSE_ERROR

    def is_value(self) -> bool:
        return self.get().state is ParamState.VALUE

    def ok(self) -> T | None:
        return self.get().ok()

    def unwrap_or(self, default: T) -> T:
        return self.get().unwrap_or(default)


class MaybeParam(TypedParam[T]):
    """A typed parameter taken from the matched route's path parameters."""


class MaybeQuery(TypedParam[T]):
    """A typed parameter taken from the query.

    Besides a mapping, the source may be a query string (or a callable
    returning one); the first value of a repeated key wins.
    """

    def _mapping(self) -> Mapping[str, Any]:
        source = self._source() if callable(self._source) else self._source
        if isinstance(source, str):
            pairs: dict[str, str] = {}
            for name, value in parse_qsl(source.lstrip("?"), keep_blank_values=True):
                pairs.setdefault(name, value)
            return pairs
        return source