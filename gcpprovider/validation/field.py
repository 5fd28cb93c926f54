"""Field paths and the validation errors reported against them."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorType(str, Enum):
    """The kind of problem a validation error reports."""

    REQUIRED = "Required value"
    INVALID = "Invalid value"
    NOT_SUPPORTED = "Unsupported value"
    FORBIDDEN = "Forbidden"
    DUPLICATE = "Duplicate value"

    def __str__(self) -> str:
        return self.value


_VALUELESS = frozenset({ErrorType.REQUIRED, ErrorType.FORBIDDEN})


class Path:
    """A path to a field inside a nested object.

    ``Path()`` is the empty path; ``Path("spec", "networking")`` is the path
    ``spec.networking``.
    """

    __slots__ = ("_parent", "_name", "_index")

    def __init__(self, *names: str) -> None:
        self._parent: Path | None = Path(*names[:-1]) if len(names) > 1 else None
        self._name: str = names[-1] if names else ""
        self._index: str | None = None

    @classmethod
    def _node(cls, parent: Path, name: str, index: str | None) -> Path:
        node = cls.__new__(cls)
        node._parent = parent
        node._name = name
        node._index = index
        return node

    def child(self, name: str, *args: str) -> Path:
        """Return the path of a named field below this one."""
        current = self
        for part in (name, *args):
            current = Path._node(current, part, None)
        return current

    def index(self, index: int | str) -> Path:
        """Return the path of an element of the list or map at this path."""
        return Path._node(self, "", str(index))

    def _chain(self) -> list[Path]:
        nodes = []
        node: Path | None = self
        while node is not None:
            nodes.append(node)
            node = node._parent
        return nodes[::-1]

    def __str__(self) -> str:
        out = ""
        for node in self._chain():
            if node._index is not None:
                out += f"[{node._index}]"
            elif node._name:
                if out:
                    out += "."
                out += node._name
        return out

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))


def path_string(path: Path | None) -> str:
    """Render a path, using ``<nil>`` for a missing one."""
    return "<nil>" if path is None else str(path)


def _format_value(value: Any) -> str:
    if value is None:
        return '"null"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum) and isinstance(value.value, str):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (int, float)):
        return str(value)
    return repr(value)


@dataclass(frozen=True)
class FieldError:
    """A validation problem found at a field."""

    type: ErrorType
    field: str
    bad_value: Any = None
    detail: str = ""

    def error_body(self) -> str:
        """Return the message without the field path."""
        if self.type in _VALUELESS:
            body = str(self.type)
        else:
            body = f"{self.type}: {_format_value(self.bad_value)}"
        if self.detail:
            body += f": {self.detail}"
        return body

    def __str__(self) -> str:
        return f"{self.field}: {self.error_body()}"


def required(path: Path | None, detail: str) -> FieldError:
    """A required value is missing."""
    return FieldError(ErrorType.REQUIRED, path_string(path), "", detail)


def invalid(path: Path | None, value: Any, detail: str) -> FieldError:
    """A value is syntactically or semantically invalid."""
    return FieldError(ErrorType.INVALID, path_string(path), value, detail)


def not_supported(path: Path | None, value: Any, valid_values: Iterable[str] | None) -> FieldError:
    """A value is not among the supported ones."""
    quoted = [json.dumps(str(item), ensure_ascii=False) for item in valid_values or ()]
    detail = "supported values: " + ", ".join(quoted) if quoted else ""
    return FieldError(ErrorType.NOT_SUPPORTED, path_string(path), value, detail)


def forbidden(path: Path | None, detail: str) -> FieldError:
    """A value is not allowed in this context."""
    return FieldError(ErrorType.FORBIDDEN, path_string(path), "", detail)


def duplicate(path: Path | None, value: Any) -> FieldError:
    """A value occurs more than once where it must be unique."""
    return FieldError(ErrorType.DUPLICATE, path_string(path), value, "")


def validate_immutable_field(new_value: Any, old_value: Any, path: Path | None) -> list[FieldError]:
    """Report an error if a field that must not change has changed."""
    if new_value != old_value:
        return [invalid(path, new_value, "field is immutable")]
    return []