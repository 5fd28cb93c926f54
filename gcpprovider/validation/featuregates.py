"""Validation of Kubernetes feature gates against a Kubernetes version."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import NamedTuple

from gcpprovider.validation.field import FieldError, Path, forbidden, invalid

_VERSION = re.compile(
    r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


class _VersionRange(NamedTuple):
    added_in: str = ""
    removed_in: str = ""


# Known feature gates and the Kubernetes versions that support them.
_FEATURE_GATES: dict[str, _VersionRange] = {
    "AnyVolumeDataSource": _VersionRange(added_in="1.18"),
    "CSIMigration": _VersionRange(added_in="1.14"),
    "CSIMigrationGCE": _VersionRange(added_in="1.14"),
    "CustomResourcePublishOpenAPI": _VersionRange(removed_in="1.18"),
    "CustomResourceSubresources": _VersionRange(removed_in="1.18"),
    "CustomResourceValidation": _VersionRange(removed_in="1.18"),
    "CustomResourceWebhookConversion": _VersionRange(removed_in="1.18"),
    "EndpointSlice": _VersionRange(added_in="1.16"),
    "EphemeralContainers": _VersionRange(added_in="1.16"),
    "GenericEphemeralVolume": _VersionRange(added_in="1.19"),
    "InTreePluginGCEUnregister": _VersionRange(added_in="1.21"),
    "IPv6DualStack": _VersionRange(added_in="1.16"),
    "TTLAfterFinished": _VersionRange(added_in="1.12"),
}


def _parse_version(version: str) -> tuple[int, int, int]:
    match = _VERSION.match(version)
    if match is None:
        raise ValueError("Invalid Semantic Version")
    return tuple(int(part) if part else 0 for part in match.groups())  # type: ignore[return-value]


def _is_supported(feature_gate: str, version: str) -> bool:
    versions = _FEATURE_GATES.get(feature_gate)
    if versions is None:
        raise ValueError(f"unknown feature gate {feature_gate}")
    current = _parse_version(version)
    if versions.added_in and current < _parse_version(versions.added_in):
        return False
    if versions.removed_in and current >= _parse_version(versions.removed_in):
        return False
    return True


def validate_feature_gates(
    feature_gates: Mapping[str, bool] | None, version: str, path: Path | None
) -> list[FieldError]:
    """Check that every feature gate is known and supported in the given version."""
    path = path if path is not None else Path()
    errors: list[FieldError] = []
    for feature_gate in feature_gates or {}:
        try:
            supported = _is_supported(feature_gate, version)
        except ValueError as err:
            errors.append(invalid(path.child(feature_gate), feature_gate, str(err)))
            continue
        if not supported:
            errors.append(
                forbidden(path.child(feature_gate), f"not supported in Kubernetes version {version}")
            )
    return errors