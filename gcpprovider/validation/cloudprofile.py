"""Validation of the provider section of a cloud profile."""

from __future__ import annotations

from collections.abc import Iterable

from gcpprovider.api import CloudProfileConfig, MachineImageVersion
from gcpprovider.validation.core import CoreMachineImage, ExpirableVersion
from gcpprovider.validation.field import FieldError, Path, required


def validate_cloud_profile_config(
    cp_config: CloudProfileConfig,
    machine_images: Iterable[CoreMachineImage],
    path: Path | None,
) -> list[FieldError]:
    """Check that every offered image version has a provider image mapping."""
    path = path if path is not None else Path()
    machine_images_path = path.child("machineImages")
    errors: list[FieldError] = []

    for image in machine_images:
        for position, image_config in enumerate(cp_config.machine_images):
            if image.name == image_config.name:
                errors.extend(
                    _validate_versions(
                        image_config.versions,
                        image.versions,
                        machine_images_path.index(position).child("versions"),
                    )
                )
                break
        else:
            if image.versions:
                errors.append(
                    required(
                        machine_images_path,
                        f'must provide an image mapping for image "{image.name}"',
                    )
                )
    return errors


def _validate_versions(
    versions_config: list[MachineImageVersion],
    versions: Iterable[ExpirableVersion],
    path: Path,
) -> list[FieldError]:
    errors: list[FieldError] = []
    for version in versions:
        for position, version_config in enumerate(versions_config):
            if version.version == version_config.version:
                if not version_config.image:
                    errors.append(required(path.index(position).child("image"), "must provide an image"))
                break
        else:
            errors.append(
                required(path, f'must provide an image mapping for version "{version.version}"')
            )
    return errors