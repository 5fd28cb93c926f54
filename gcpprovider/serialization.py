"""Decoding and encoding of the versioned GCP provider API objects.

Objects travel in the ``v1alpha1`` version of the API group as JSON or
YAML documents carrying ``apiVersion`` and ``kind``. Decoding is strict:
unknown fields, wrong value types and unregistered kinds are rejected.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import yaml

from gcpprovider.api import (
    GROUP_NAME,
    KNOWN_TYPES,
    VPC,
    CloudControllerManagerConfig,
    CloudNAT,
    CloudProfileConfig,
    CloudRouter,
    ControlPlaneConfig,
    FlowLogs,
    InfrastructureConfig,
    InfrastructureStatus,
    MachineImage,
    MachineImages,
    MachineImageVersion,
    NatIP,
    NatIPName,
    NetworkConfig,
    NetworkStatus,
    ServiceAccount,
    Subnet,
    SubnetPurpose,
    Volume,
    WorkerConfig,
    WorkerStatus,
)

VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class DecodeError(ValueError):
    """Raised when a document cannot be decoded into a provider object."""


def _where(path: str) -> str:
    return path.lstrip(".") or "<root>"


# Codecs -------------------------------------------------------------------


@dataclass(frozen=True)
class _String:
    def decode(self, value: Any, path: str) -> str:
        if not isinstance(value, str):
            raise DecodeError(f"{_where(path)}: expected string, got {type(value).__name__}")
        return value

    def encode(self, value: Any) -> Any:
        return str(value)


@dataclass(frozen=True)
class _Bool:
    def decode(self, value: Any, path: str) -> bool:
        if not isinstance(value, bool):
            raise DecodeError(f"{_where(path)}: expected boolean, got {type(value).__name__}")
        return value

    def encode(self, value: Any) -> Any:
        return bool(value)


@dataclass(frozen=True)
class _Int32:
    def decode(self, value: Any, path: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"{_where(path)}: expected integer, got {type(value).__name__}")
        if not _INT32_MIN <= value <= _INT32_MAX:
            raise DecodeError(f"{_where(path)}: value {value} overflows int32")
        return value

    def encode(self, value: Any) -> Any:
        return int(value)


@dataclass(frozen=True)
class _Float:
    def decode(self, value: Any, path: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError(f"{_where(path)}: expected number, got {type(value).__name__}")
        return float(value)

    def encode(self, value: Any) -> Any:
        return float(value)


@dataclass(frozen=True)
class _Purpose:
    def decode(self, value: Any, path: str) -> SubnetPurpose | str:
        text = _String().decode(value, path)
        try:
            return SubnetPurpose(text)
        except ValueError:
            return text

    def encode(self, value: Any) -> Any:
        return value.value if isinstance(value, Enum) else str(value)


@dataclass(frozen=True)
class _List:
    item: Any

    def decode(self, value: Any, path: str) -> list:
        if not isinstance(value, list):
            raise DecodeError(f"{_where(path)}: expected list, got {type(value).__name__}")
        return [self.item.decode(entry, f"{path}[{pos}]") for pos, entry in enumerate(value)]

    def encode(self, value: Any) -> Any:
        return [self.item.encode(entry) for entry in value]


@dataclass(frozen=True)
class _Map:
    value: Any

    def decode(self, value: Any, path: str) -> dict:
        if not isinstance(value, dict):
            raise DecodeError(f"{_where(path)}: expected object, got {type(value).__name__}")
        result = {}
        for key, entry in value.items():
            if not isinstance(key, str):
                raise DecodeError(f"{_where(path)}: map keys must be strings")
            result[key] = self.value.decode(entry, f"{path}.{key}")
        return result

    def encode(self, value: Any) -> Any:
        return {key: self.value.encode(entry) for key, entry in value.items()}


@dataclass(frozen=True)
class _Object:
    cls: type

    def decode(self, value: Any, path: str) -> Any:
        if not isinstance(value, dict):
            raise DecodeError(f"{_where(path)}: expected object, got {type(value).__name__}")
        fields = _SCHEMAS[self.cls]
        by_name = {spec.json: spec for spec in fields}
        unknown = [key for key in value if key not in by_name]
        if unknown:
            raise DecodeError(f'{_where(path)}: unknown field "{unknown[0]}"')
        kwargs = {}
        for key, entry in value.items():
            if entry is None:
                continue
            spec = by_name[key]
            kwargs[spec.attr] = spec.codec.decode(entry, f"{path}.{key}")
        return self.cls(**kwargs)

    def encode(self, value: Any) -> dict:
        out: dict[str, Any] = {}
        for spec in _SCHEMAS[self.cls]:
            current = getattr(value, spec.attr)
            if spec.omit == "nil" and current is None:
                continue
            if spec.omit == "empty" and (
                current is None or (isinstance(current, (str, list, dict)) and not current)
            ):
                continue
            out[spec.json] = None if current is None else spec.codec.encode(current)
        return out


@dataclass(frozen=True)
class _Field:
    json: str
    attr: str
    codec: Any
    omit: str = "never"  # "never", "nil" (pointer fields) or "empty"


_SCHEMAS: dict[type, tuple[_Field, ...]] = {
    MachineImageVersion: (
        _Field("version", "version", _String()),
        _Field("image", "image", _String()),
    ),
    MachineImages: (
        _Field("name", "name", _String()),
        _Field("versions", "versions", _List(_Object(MachineImageVersion))),
    ),
    CloudProfileConfig: (
        _Field("machineImages", "machine_images", _List(_Object(MachineImages))),
    ),
    CloudControllerManagerConfig: (
        _Field("featureGates", "feature_gates", _Map(_Bool()), "empty"),
    ),
    ControlPlaneConfig: (
        _Field("zone", "zone", _String()),
        _Field(
            "cloudControllerManager",
            "cloud_controller_manager",
            _Object(CloudControllerManagerConfig),
            "nil",
        ),
    ),
    CloudRouter: (_Field("name", "name", _String(), "empty"),),
    VPC: (
        _Field("name", "name", _String(), "empty"),
        _Field("cloudRouter", "cloud_router", _Object(CloudRouter), "nil"),
    ),
    NatIPName: (_Field("name", "name", _String()),),
    NatIP: (_Field("ip", "ip", _String()),),
    CloudNAT: (
        _Field("minPortsPerVM", "min_ports_per_vm", _Int32(), "nil"),
        _Field("natIPNames", "nat_ip_names", _List(_Object(NatIPName)), "empty"),
    ),
    FlowLogs: (
        _Field("aggregationInterval", "aggregation_interval", _String(), "nil"),
        _Field("flowSampling", "flow_sampling", _Float(), "nil"),
        _Field("metadata", "metadata", _String(), "nil"),
    ),
    NetworkConfig: (
        _Field("vpc", "vpc", _Object(VPC), "nil"),
        _Field("cloudNAT", "cloud_nat", _Object(CloudNAT), "nil"),
        _Field("internal", "internal", _String(), "nil"),
        _Field("worker", "worker", _String()),
        _Field("workers", "workers", _String()),
        _Field("flowLogs", "flow_logs", _Object(FlowLogs), "nil"),
    ),
    InfrastructureConfig: (_Field("networks", "networks", _Object(NetworkConfig)),),
    Subnet: (
        _Field("name", "name", _String()),
        _Field("purpose", "purpose", _Purpose()),
    ),
    NetworkStatus: (
        _Field("vpc", "vpc", _Object(VPC)),
        _Field("subnets", "subnets", _List(_Object(Subnet))),
        _Field("natIPs", "nat_ips", _List(_Object(NatIP)), "empty"),
    ),
    InfrastructureStatus: (
        _Field("networks", "networks", _Object(NetworkStatus)),
        _Field("serviceAccountEmail", "service_account_email", _String()),
    ),
    Volume: (_Field("interface", "local_ssd_interface", _String(), "nil"),),
    ServiceAccount: (
        _Field("email", "email", _String()),
        _Field("scopes", "scopes", _List(_String())),
    ),
    WorkerConfig: (
        _Field("volume", "volume", _Object(Volume), "nil"),
        _Field("serviceAccount", "service_account", _Object(ServiceAccount), "nil"),
    ),
    MachineImage: (
        _Field("name", "name", _String()),
        _Field("version", "version", _String()),
        _Field("image", "image", _String()),
    ),
    WorkerStatus: (
        _Field("machineImages", "machine_images", _List(_Object(MachineImage)), "empty"),
    ),
}

_KINDS: dict[str, type] = {cls.__name__: cls for cls in KNOWN_TYPES}


# Public interface ---------------------------------------------------------


def decode(data: bytes | str, into: Any = None) -> Any:
    """Decode a versioned JSON or YAML document into a provider object.

    ``into`` names the expected type (a class or an instance of one); when
    given, the document's kind must match it.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as err:
            raise DecodeError(f"document is not valid UTF-8: {err}") from err
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as err:
        raise DecodeError(f"cannot parse document: {err}") from err
    if not isinstance(document, dict):
        raise DecodeError("document must be an object")

    kind_name = document.get("kind")
    api_version = document.get("apiVersion")
    if not kind_name:
        raise DecodeError("Object 'Kind' is missing in document")
    if not api_version:
        raise DecodeError("Object 'apiVersion' is missing in document")
    if api_version != API_VERSION or kind_name not in _KINDS:
        raise DecodeError(f'no kind "{kind_name}" is registered for version "{api_version}"')

    target = _KINDS[kind_name]
    if into is not None:
        expected = into if isinstance(into, type) else type(into)
        if expected is not target:
            raise DecodeError(f"cannot convert {kind_name} into {expected.__name__}")

    body = {key: value for key, value in document.items() if key not in ("kind", "apiVersion")}
    return _Object(target).decode(body, "")


def encode(obj: Any) -> bytes:
    """Encode a provider object as a versioned JSON document."""
    cls = type(obj)
    if cls not in KNOWN_TYPES:
        raise TypeError(f"{cls.__name__} is not a registered provider type")
    document = {"kind": cls.__name__, "apiVersion": API_VERSION}
    document.update(_Object(cls).encode(obj))
    return json.dumps(document).encode("utf-8")


def infrastructure_config_from_infrastructure(provider_config: bytes | str | None) -> InfrastructureConfig:
    """Decode the provider config section of an Infrastructure resource."""
    if provider_config is None:
        raise DecodeError("provider config is not set on the infrastructure resource")
    return decode(provider_config, InfrastructureConfig)


def cloud_profile_config_from_cluster(
    provider_config: bytes | str | None, cloud_profile_name: str
) -> CloudProfileConfig | None:
    """Decode the provider config of a cluster's cloud profile, if it has one."""
    if provider_config is None:
        return None
    try:
        return decode(provider_config, CloudProfileConfig)
    except DecodeError as err:
        raise DecodeError(
            f"could not decode providerConfig of cloudProfile for '{cloud_profile_name}': {err}"
        ) from err