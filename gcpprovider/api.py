"""Internal types of the GCP provider API group.

These are the version-independent representations of the provider
configuration and status objects that are embedded into the generic
extension resources.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

GROUP_NAME = "gcp.provider.extensions.gardener.cloud"
INTERNAL_VERSION = "__internal"


class GroupKind(NamedTuple):
    """A kind qualified by its API group."""

    group: str
    kind: str


class GroupResource(NamedTuple):
    """A resource qualified by its API group."""

    group: str
    resource: str


def kind(kind: str) -> GroupKind:
    """Return the group-qualified form of an unqualified kind."""
    return GroupKind(GROUP_NAME, kind)


def resource(resource: str) -> GroupResource:
    """Return the group-qualified form of an unqualified resource."""
    return GroupResource(GROUP_NAME, resource)


# Cloud profile ------------------------------------------------------------


@dataclass
class MachineImageVersion:
    """A version of a machine image and its provider-specific image path."""

    version: str = ""
    image: str = ""


@dataclass
class MachineImages:
    """Maps a logical image name and its versions to provider identifiers."""

    name: str = ""
    versions: list[MachineImageVersion] = field(default_factory=list)


@dataclass
class CloudProfileConfig:
    """Provider-specific configuration embedded into a cloud profile."""

    machine_images: list[MachineImages] = field(default_factory=list)


# Control plane ------------------------------------------------------------


@dataclass
class CloudControllerManagerConfig:
    """Settings for the cloud-controller-manager."""

    feature_gates: dict[str, bool] | None = None


@dataclass
class ControlPlaneConfig:
    """Settings for the control plane."""

    zone: str = ""
    cloud_controller_manager: CloudControllerManagerConfig | None = None


# Infrastructure -----------------------------------------------------------


class SubnetPurpose(str, Enum):
    """The purpose a subnet was created for."""

    NODES = "nodes"
    INTERNAL = "internal"

    def __str__(self) -> str:
        return self.value


@dataclass
class CloudRouter:
    """Configuration of a cloud router."""

    name: str = ""


@dataclass
class VPC:
    """A VPC and related resources."""

    name: str = ""
    cloud_router: CloudRouter | None = None


@dataclass
class NatIPName:
    """Name of a user-provided external address usable by the NAT gateway."""

    name: str = ""


@dataclass
class NatIP:
    """A user-provided external address usable by the NAT gateway."""

    ip: str = ""


@dataclass
class CloudNAT:
    """Configuration of the cloud NAT resource."""

    min_ports_per_vm: int | None = None
    nat_ip_names: list[NatIPName] = field(default_factory=list)


@dataclass
class FlowLogs:
    """Configuration of VPC flow logs."""

    aggregation_interval: str | None = None
    flow_sampling: float | None = None
    metadata: str | None = None


@dataclass
class NetworkConfig:
    """Kubernetes and infrastructure network configuration."""

    vpc: VPC | None = None
    cloud_nat: CloudNAT | None = None
    internal: str | None = None
    worker: str = ""
    workers: str = ""
    flow_logs: FlowLogs | None = None


@dataclass
class InfrastructureConfig:
    """Infrastructure configuration resource."""

    networks: NetworkConfig = field(default_factory=NetworkConfig)


@dataclass
class Subnet:
    """A subnet that was created."""

    name: str = ""
    purpose: SubnetPurpose | str = ""


@dataclass
class NetworkStatus:
    """Current status of the infrastructure networks."""

    vpc: VPC = field(default_factory=VPC)
    subnets: list[Subnet] = field(default_factory=list)
    nat_ips: list[NatIP] = field(default_factory=list)


@dataclass
class InfrastructureStatus:
    """Information about created infrastructure resources."""

    networks: NetworkStatus = field(default_factory=NetworkStatus)
    service_account_email: str = ""


# Worker -------------------------------------------------------------------


@dataclass
class Volume:
    """Configuration for additional disks attached to VMs."""

    local_ssd_interface: str | None = None


@dataclass
class ServiceAccount:
    """A service account and the scopes made available to it."""

    email: str = ""
    scopes: list[str] = field(default_factory=list)


@dataclass
class WorkerConfig:
    """Settings for the worker nodes."""

    volume: Volume | None = None
    service_account: ServiceAccount | None = None


@dataclass
class MachineImage:
    """Maps a logical image name and version to a provider image path."""

    name: str = ""
    version: str = ""
    image: str = ""


@dataclass
class WorkerStatus:
    """Information about created worker resources."""

    machine_images: list[MachineImage] = field(default_factory=list)


KNOWN_TYPES: tuple[type, ...] = (
    CloudProfileConfig,
    InfrastructureConfig,
    InfrastructureStatus,
    ControlPlaneConfig,
    WorkerStatus,
    WorkerConfig,
)