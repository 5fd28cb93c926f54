import pytest

from gcpprovider.api import ServiceAccount, Volume, WorkerConfig
from gcpprovider.validation.core import DataVolume, Worker, WorkerVolume
from gcpprovider.validation.field import ErrorType
from gcpprovider.validation.worker import validate_worker_config


def _summary(errors):
    return sorted((e.type, e.field) for e in errors)


@pytest.fixture
def workers():
    return [
        Worker(
            volume=WorkerVolume(type="Volume", volume_size="30G"),
            minimum=2,
            zones=["zone1", "zone2"],
            data_volumes=[DataVolume(type="Volume", volume_size="30G")],
        ),
        Worker(
            volume=WorkerVolume(type="Volume", volume_size="20G"),
            minimum=2,
            zones=["zone1", "zone2"],
            data_volumes=[DataVolume(type="SCRATCH", volume_size="30G")],
        ),
    ]


def _validate_all(workers, worker_config):
    return [
        error
        for worker in workers
        for volume in worker.data_volumes
        for error in validate_worker_config(worker_config, volume.type)
    ]


def test_valid_local_ssd_interface(workers):
    config = WorkerConfig(volume=Volume(local_ssd_interface="NVME"))
    assert _validate_all(workers, config) == []


def test_unsupported_local_ssd_interface(workers):
    config = WorkerConfig(volume=Volume(local_ssd_interface="Interface"))
    errors = _validate_all(workers, config)
    assert _summary(errors) == [(ErrorType.NOT_SUPPORTED, "volume.localSSDInterface")]
    assert errors[0].detail == 'supported values: "NVME", "SCSI"'


def test_missing_local_ssd_interface(workers):
    errors = _validate_all(workers, None)
    assert _summary(errors) == [(ErrorType.REQUIRED, "volume.localSSDInterface")]


def test_non_scratch_volume_needs_no_interface():
    assert validate_worker_config(None, "pd-standard") == []


def test_service_account_email_empty():
    config = WorkerConfig(service_account=ServiceAccount(email="", scopes=["scope-1"]))
    errors = validate_worker_config(config, None)
    assert _summary(errors) == [(ErrorType.REQUIRED, "serviceAccount.email")]


def test_service_account_scopes_empty():
    config = WorkerConfig(service_account=ServiceAccount(email="foo", scopes=[]))
    errors = validate_worker_config(config, None)
    assert _summary(errors) == [(ErrorType.REQUIRED, "serviceAccount.scopes")]


def test_service_account_scope_empty_string():
    config = WorkerConfig(service_account=ServiceAccount(email="foo", scopes=["baz", ""]))
    errors = validate_worker_config(config, None)
    assert _summary(errors) == [(ErrorType.REQUIRED, "serviceAccount.scopes[1]")]


def test_service_account_scopes_duplicated():
    config = WorkerConfig(service_account=ServiceAccount(email="foo", scopes=["baz", "bar", "baz"]))
    errors = validate_worker_config(config, None)
    assert _summary(errors) == [(ErrorType.DUPLICATE, "serviceAccount.scopes[2]")]
    assert errors[0].bad_value == "baz"


def test_valid_service_account():
    config = WorkerConfig(service_account=ServiceAccount(email="foo", scopes=["baz"]))
    assert validate_worker_config(config, None) == []