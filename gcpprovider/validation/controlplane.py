"""Validation of the control plane provider configuration."""

from __future__ import annotations

from collections.abc import Collection

from gcpprovider.api import ControlPlaneConfig
from gcpprovider.validation.featuregates import validate_feature_gates
from gcpprovider.validation.field import (
    FieldError,
    Path,
    invalid,
    not_supported,
    required,
    validate_immutable_field,
)


def validate_control_plane_config(
    control_plane_config: ControlPlaneConfig,
    allowed_zones: Collection[str],
    worker_zones: Collection[str],
    version: str,
    path: Path | None,
) -> list[FieldError]:
    """Check the zone and the cloud-controller-manager feature gates."""
    path = path if path is not None else Path()
    zone = control_plane_config.zone
    errors: list[FieldError] = []

    if not zone:
        errors.append(required(path.child("zone"), "must provide the name of a zone in this region"))
    elif zone not in allowed_zones:
        errors.append(not_supported(path.child("zone"), zone, sorted(allowed_zones)))

    if zone not in worker_zones:
        errors.append(invalid(path.child("zone"), zone, "must be part of at least one worker zone"))

    ccm = control_plane_config.cloud_controller_manager
    if ccm is not None:
        errors.extend(
            validate_feature_gates(
                ccm.feature_gates, version, path.child("cloudControllerManager", "featureGates")
            )
        )
    return errors


def validate_control_plane_config_update(
    old_config: ControlPlaneConfig, new_config: ControlPlaneConfig, path: Path | None
) -> list[FieldError]:
    """Check that the zone has not changed."""
    path = path if path is not None else Path()
    return validate_immutable_field(new_config.zone, old_config.zone, path.child("zone"))