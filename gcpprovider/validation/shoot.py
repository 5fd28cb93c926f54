"""Validation of the GCP-specific constraints on a shoot's networking and workers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from gcpprovider.validation.core import Networking, Worker, WorkerVolume, find_worker_by_name
from gcpprovider.validation.field import (
    FieldError,
    Path,
    forbidden,
    required,
    validate_immutable_field,
)


def validate_networking(networking: Networking, path: Path | None) -> list[FieldError]:
    """Check that a nodes CIDR is given."""
    path = path if path is not None else Path()
    if networking.nodes is None:
        return [required(path.child("nodes"), "a nodes CIDR must be provided for GCP shoots")]
    return []


def validate_workers(workers: Iterable[Worker], path: Path | None) -> list[FieldError]:
    """Check volumes, zones and scaling limits of each worker pool."""
    path = path if path is not None else Path()
    errors: list[FieldError] = []

    for position, worker in enumerate(workers):
        worker_path = path.index(position)
        if worker.volume is None:
            errors.append(required(worker_path.child("volume"), "must not be nil"))
        else:
            errors.extend(_validate_volume(worker.volume, worker_path.child("volume")))

        if not worker.zones:
            errors.append(required(worker_path.child("zones"), "at least one zone must be configured"))
            continue

        if worker.maximum != 0 and worker.minimum == 0:
            errors.append(
                forbidden(
                    worker_path.child("minimum"),
                    "minimum value must be > 0 if maximum value > 0 "
                    "(auto scaling to 0 is not supported)",
                )
            )
    return errors


def validate_worker_auto_scaling(worker: Worker, path: str) -> None:
    """Raise ValueError if a scalable pool's minimum is below its number of zones.

    Auto scaling to and from zero is not supported on GCP.
    """
    zone_count = len(worker.zones)
    if worker.maximum > 0 and worker.minimum < zone_count:
        raise ValueError(
            f"{path} value must be >= {zone_count} (number of zones) if maximum value > 0 "
            "(auto scaling to 0 & from 0 is not supported)"
        )


def _validate_volume(volume: WorkerVolume, path: Path) -> list[FieldError]:
    errors: list[FieldError] = []
    if volume.type is None:
        errors.append(required(path.child("type"), "must not be empty"))
    if volume.volume_size == "":
        errors.append(required(path.child("size"), "must not be empty"))
    return errors


def _should_enforce_immutability(new: Sequence[str], old: Sequence[str]) -> bool:
    """Zones may only be appended; any other change must be rejected."""
    for position, zone in enumerate(new):
        if position >= len(old):
            return False
        if zone != old[position]:
            return True
    return len(old) > len(new)


def validate_workers_update(
    old_workers: Iterable[Worker], new_workers: Iterable[Worker], path: Path | None
) -> list[FieldError]:
    """Check zone immutability and auto scaling limits of changed worker pools."""
    path = path if path is not None else Path()
    old_workers = list(old_workers or ())
    errors: list[FieldError] = []

    for position, new_worker in enumerate(new_workers):
        worker_path = path.index(position)
        old_worker = find_worker_by_name(old_workers, new_worker.name)

        if old_worker is not None and _should_enforce_immutability(new_worker.zones, old_worker.zones):
            errors.extend(
                validate_immutable_field(new_worker.zones, old_worker.zones, worker_path.child("zones"))
            )

        if new_worker != old_worker:
            minimum_path = worker_path.child("minimum")
            try:
                validate_worker_auto_scaling(new_worker, str(minimum_path))
            except ValueError as err:
                errors.append(forbidden(minimum_path, str(err)))
    return errors