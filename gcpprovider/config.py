"""Controller configuration of the GCP provider and its loader.

The configuration is read from a YAML or JSON document in the ``v1alpha1``
version of the configuration API group. Unknown fields are ignored, but
fields of the wrong type and unregistered kinds are rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from os import PathLike
from typing import Any

import yaml

GROUP_NAME = "gcp.provider.extensions.config.gardener.cloud"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"
KIND = "ControllerConfiguration"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_QUANTITY = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([KMGTPE]i|[numkMGTPE]|[eE][+-]?\d+)?$")
_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


class ConfigError(ValueError):
    """Raised when a controller configuration cannot be loaded."""


@dataclass
class ClientConnectionConfiguration:
    """Settings for the connection to the API server."""

    kubeconfig: str = ""
    accept_content_types: str = ""
    content_type: str = ""
    qps: float = 0.0
    burst: int = 0


@dataclass
class HealthCheckConfig:
    """Settings for the health check controller."""

    sync_period: timedelta = field(default_factory=timedelta)


@dataclass
class ETCDStorage:
    """Storage settings for etcd-main volume claims."""

    class_name: str | None = None
    capacity: str | None = None


@dataclass
class ETCDBackup:
    """Backup settings for etcd."""

    schedule: str | None = None


@dataclass
class ETCD:
    """Settings for etcd."""

    storage: ETCDStorage = field(default_factory=ETCDStorage)
    backup: ETCDBackup = field(default_factory=ETCDBackup)


@dataclass
class ControllerConfiguration:
    """Configuration of the GCP provider controllers."""

    client_connection: ClientConnectionConfiguration | None = None
    etcd: ETCD = field(default_factory=ETCD)
    health_check_config: HealthCheckConfig | None = None


# Value decoding -----------------------------------------------------------


def _where(path: str) -> str:
    return path.lstrip(".") or "<root>"


def _object(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise ConfigError(f"{_where(path)}: expected object, got {type(value).__name__}")
    return value


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{_where(path)}: expected string, got {type(value).__name__}")
    return value


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{_where(path)}: expected number, got {type(value).__name__}")
    return float(value)


def _int32(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{_where(path)}: expected integer, got {type(value).__name__}")
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ConfigError(f"{_where(path)}: value {value} overflows int32")
    return value


def _quantity(value: Any, path: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"{_where(path)}: expected quantity, got {type(value).__name__}")
    text = str(value)
    if not _QUANTITY.match(text):
        raise ConfigError(f"{_where(path)}: quantities must match the regular expression")
    return text


def _duration(value: Any, path: str) -> timedelta:
    text = _string(value, path)
    body = text
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ConfigError(f'{_where(path)}: invalid duration "{text}"')
    seconds = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(body):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * _DURATION_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(body):
        raise ConfigError(f'{_where(path)}: invalid duration "{text}"')
    return timedelta(seconds=sign * seconds)


def _optional(obj: dict, key: str, decoder, path: str):
    value = obj.get(key)
    return None if value is None else decoder(value, f"{path}.{key}")


def _client_connection(value: Any, path: str) -> ClientConnectionConfiguration:
    obj = _object(value, path)
    result = ClientConnectionConfiguration()
    if (kubeconfig := _optional(obj, "kubeconfig", _string, path)) is not None:
        result.kubeconfig = kubeconfig
    if (accept := _optional(obj, "acceptContentTypes", _string, path)) is not None:
        result.accept_content_types = accept
    if (content_type := _optional(obj, "contentType", _string, path)) is not None:
        result.content_type = content_type
    if (qps := _optional(obj, "qps", _number, path)) is not None:
        result.qps = qps
    if (burst := _optional(obj, "burst", _int32, path)) is not None:
        result.burst = burst
    return result


def _health_check(value: Any, path: str) -> HealthCheckConfig:
    obj = _object(value, path)
    result = HealthCheckConfig()
    if (period := _optional(obj, "syncPeriod", _duration, path)) is not None:
        result.sync_period = period
    return result


def _storage(value: Any, path: str) -> ETCDStorage:
    obj = _object(value, path)
    return ETCDStorage(
        class_name=_optional(obj, "className", _string, path),
        capacity=_optional(obj, "capacity", _quantity, path),
    )


def _backup(value: Any, path: str) -> ETCDBackup:
    obj = _object(value, path)
    return ETCDBackup(schedule=_optional(obj, "schedule", _string, path))


def _etcd(value: Any, path: str) -> ETCD:
    obj = _object(value, path)
    result = ETCD()
    if (storage := _optional(obj, "storage", _storage, path)) is not None:
        result.storage = storage
    if (backup := _optional(obj, "backup", _backup, path)) is not None:
        result.backup = backup
    return result


# Public interface ---------------------------------------------------------


def load(data: bytes | str) -> ControllerConfiguration:
    """Decode a configuration document; empty input yields an empty configuration."""
    if len(data) == 0:
        return ControllerConfiguration()
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as err:
            raise ConfigError(f"document is not valid UTF-8: {err}") from err
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as err:
        raise ConfigError(f"cannot parse document: {err}") from err
    if not isinstance(document, dict):
        raise ConfigError("Object 'Kind' is missing in document")

    kind_name = document.get("kind") or "Config"
    api_version = document.get("apiVersion") or VERSION
    if api_version != API_VERSION or kind_name != KIND:
        raise ConfigError(f'no kind "{kind_name}" is registered for version "{api_version}"')

    result = ControllerConfiguration()
    if (conn := _optional(document, "clientConnection", _client_connection, "")) is not None:
        result.client_connection = conn
    if (etcd := _optional(document, "etcd", _etcd, "")) is not None:
        result.etcd = etcd
    if (health := _optional(document, "healthCheckConfig", _health_check, "")) is not None:
        result.health_check_config = health
    return result


def load_from_file(filename: str | PathLike) -> ControllerConfiguration:
    """Read a file and decode its contents as a configuration document."""
    with open(filename, "rb") as handle:
        return load(handle.read())