"""The parts of the generic shoot and cloud profile objects that validation needs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class ExpirableVersion:
    """A version that may carry an expiration date and a classification."""

    version: str = ""
    expiration_date: str | None = None
    classification: str | None = None


@dataclass
class CoreMachineImage:
    """A machine image offered by a cloud profile."""

    name: str = ""
    versions: list[ExpirableVersion] = field(default_factory=list)


@dataclass
class Networking:
    """Network settings of a shoot."""

    type: str = ""
    nodes: str | None = None
    pods: str | None = None
    services: str | None = None


@dataclass
class ShootMachineImage:
    """The machine image a worker pool uses."""

    name: str = ""
    version: str | None = None


@dataclass
class Machine:
    """The machine type and image of a worker pool."""

    type: str = ""
    image: ShootMachineImage | None = None


@dataclass
class WorkerVolume:
    """The root volume of the machines in a worker pool."""

    name: str | None = None
    type: str | None = None
    volume_size: str = ""
    encrypted: bool | None = None


@dataclass
class DataVolume:
    """An additional volume attached to the machines in a worker pool."""

    name: str = ""
    type: str | None = None
    volume_size: str = ""
    encrypted: bool | None = None


@dataclass
class Worker:
    """A worker pool of a shoot."""

    name: str = ""
    machine: Machine = field(default_factory=Machine)
    minimum: int = 0
    maximum: int = 0
    zones: list[str] = field(default_factory=list)
    volume: WorkerVolume | None = None
    data_volumes: list[DataVolume] = field(default_factory=list)


def find_worker_by_name(workers: Iterable[Worker] | None, name: str) -> Worker | None:
    """Return the first worker pool with the given name, or None."""
    return next((worker for worker in workers or () if worker.name == name), None)