"""Lookups over provider API objects."""

from __future__ import annotations

import copy
from collections.abc import Iterable

from gcpprovider.api import CloudProfileConfig, MachineImage, Subnet, SubnetPurpose


class NotFoundError(LookupError):
    """Raised when a requested entry does not exist."""


def find_subnet_by_purpose(subnets: Iterable[Subnet] | None, purpose: SubnetPurpose | str) -> Subnet:
    """Return a copy of the first subnet with the given purpose."""
    for subnet in subnets or ():
        if subnet.purpose == purpose:
            return copy.copy(subnet)
    raise NotFoundError(f'cannot find subnet with purpose "{purpose}"')


def find_machine_image(
    machine_images: Iterable[MachineImage] | None, name: str, version: str
) -> MachineImage:
    """Return a copy of the first machine image with the given name and version."""
    for machine_image in machine_images or ():
        if machine_image.name == name and machine_image.version == version:
            return copy.copy(machine_image)
    raise NotFoundError(f'no machine image with name "{name}", version "{version}" found')


def find_image_from_cloud_profile(
    cloud_profile_config: CloudProfileConfig | None, image_name: str, image_version: str
) -> str:
    """Return the image path for a name and version from a cloud profile config."""
    if cloud_profile_config is not None:
        for machine_image in cloud_profile_config.machine_images:
            if machine_image.name != image_name:
                continue
            for version in machine_image.versions:
                if version.version == image_version:
                    return version.image
    raise NotFoundError(
        f'could not find an image for name "{image_name}" in version "{image_version}"'
    )