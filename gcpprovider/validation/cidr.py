"""CIDR parsing and the checks that relate network ranges to each other."""

from __future__ import annotations

import ipaddress
import json
import re

from gcpprovider.validation.field import FieldError, Path, invalid, path_string

_PREFIX = re.compile(r"[0-9]+")

_Interface = ipaddress.IPv4Interface | ipaddress.IPv6Interface


def _parse(text: str) -> _Interface | None:
    address, sep, prefix = text.partition("/")
    if not sep or not _PREFIX.fullmatch(prefix) or "%" in address:
        return None
    try:
        return ipaddress.ip_interface(f"{address}/{int(prefix)}")
    except ValueError:
        return None


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class CIDR:
    """A CIDR string together with the field path it was read from."""

    def __init__(self, cidr: str, path: Path | None = None) -> None:
        self.cidr = cidr
        self.path = path
        parsed = _parse(cidr)
        self.network = parsed.network if parsed is not None else None

    def __repr__(self) -> str:
        return f"CIDR({self.cidr!r}, {self.path!r})"

    def _others(self, others: tuple[CIDR | None, ...]):
        for other in others:
            if other is None or other is self or other.network is None:
                continue
            yield other

    def validate_parse(self) -> list[FieldError]:
        """Report an error if the CIDR cannot be parsed."""
        if self.network is None:
            return [invalid(self.path, self.cidr, "invalid CIDR address: " + self.cidr)]
        return []

    def validate_not_overlap(self, *args: CIDR | None) -> list[FieldError]:
        """Report every given CIDR that overlaps with this one."""
        if self.network is None:
            return []
        detail = f"must not overlap with {_quote(path_string(self.path))} ({_quote(self.cidr)})"
        return [
            invalid(other.path, other.cidr, detail)
            for other in self._others(args)
            if other.network.network_address in self.network
            or self.network.network_address in other.network
        ]

    def validate_subset(self, *args: CIDR | None) -> list[FieldError]:
        """Report every given CIDR that does not start inside this one."""
        if self.network is None:
            return []
        detail = f"must be a subset of {_quote(path_string(self.path))} ({_quote(self.cidr)})"
        return [
            invalid(other.path, other.cidr, detail)
            for other in self._others(args)
            if other.network.network_address not in self.network
        ]


def validate_cidr_is_canonical(path: Path | None, cidr: str) -> list[FieldError]:
    """Report an error if a parsable CIDR has host bits set."""
    if not cidr:
        return []
    parsed = _parse(cidr)
    if parsed is not None and parsed.ip != parsed.network.network_address:
        return [invalid(path, cidr, "must be valid canonical CIDR")]
    return []