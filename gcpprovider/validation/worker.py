"""Validation of the worker provider configuration."""

from __future__ import annotations

from gcpprovider.api import ServiceAccount, WorkerConfig
from gcpprovider.validation.field import (
    FieldError,
    Path,
    duplicate,
    not_supported,
    required,
)

VALID_LOCAL_SSD_INTERFACES = frozenset({"NVME", "SCSI"})


def validate_worker_config(worker_config: WorkerConfig | None, volume_type: str | None) -> list[FieldError]:
    """Check the local SSD interface for scratch volumes and the service account."""
    errors: list[FieldError] = []

    if volume_type == "SCRATCH":
        interface_path = Path("volume", "localSSDInterface")
        volume = worker_config.volume if worker_config is not None else None
        if volume is None or volume.local_ssd_interface is None:
            errors.append(required(interface_path, "must be set when using SCRATCH volumes"))
        elif volume.local_ssd_interface not in VALID_LOCAL_SSD_INTERFACES:
            errors.append(
                not_supported(
                    interface_path, volume.local_ssd_interface, sorted(VALID_LOCAL_SSD_INTERFACES)
                )
            )

    if worker_config is not None:
        errors.extend(_validate_service_account(worker_config.service_account, Path("serviceAccount")))

    return errors


def _validate_service_account(account: ServiceAccount | None, path: Path) -> list[FieldError]:
    if account is None:
        return []

    errors: list[FieldError] = []
    if account.email == "":
        errors.append(required(path.child("email"), "must be set when providing service account"))

    if not account.scopes:
        errors.append(required(path.child("scopes"), "must have at least one scope"))
        return errors

    seen: set[str] = set()
    for position, scope in enumerate(account.scopes):
        scope_path = path.child("scopes").index(position)
        if scope == "":
            errors.append(required(scope_path, "must not be empty"))
        elif scope in seen:
            errors.append(duplicate(scope_path, scope))
        else:
            seen.add(scope)
    return errors