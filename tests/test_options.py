import argparse
from datetime import timedelta

import pytest

from gcpprovider.config import ConfigError, HealthCheckConfig, load
from gcpprovider.options import Config, ConfigOptions

SAMPLE = """\
apiVersion: gcp.provider.extensions.config.gardener.cloud/v1alpha1
kind: ControllerConfiguration
etcd:
  storage:
    className: gardener.cloud-fast
    capacity: 25Gi
  backup:
    schedule: "0 */24 * * *"
healthCheckConfig:
  syncPeriod: 30s
"""

NO_HEALTH = """\
apiVersion: gcp.provider.extensions.config.gardener.cloud/v1alpha1
kind: ControllerConfiguration
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE)
    return path


def test_complete_without_path_fails():
    opts = ConfigOptions()
    with pytest.raises(ConfigError, match="config file path not set"):
        opts.complete()
    assert opts.completed() is None


def test_complete_loads_file(config_file):
    opts = ConfigOptions(str(config_file))
    opts.complete()
    assert opts.completed() == Config(load(SAMPLE))


def test_complete_with_missing_file_fails(tmp_path):
    opts = ConfigOptions(str(tmp_path / "absent.yaml"))
    with pytest.raises(FileNotFoundError):
        opts.complete()
    assert opts.completed() is None


def test_options_returns_independent_copy():
    cfg = Config(load(SAMPLE))
    copied = cfg.options()
    assert copied == cfg.config
    copied.etcd.storage.class_name = "changed"
    assert cfg.config.etcd.storage.class_name == "gardener.cloud-fast"


def test_etcd_storage_and_backup():
    cfg = Config(load(SAMPLE))
    assert cfg.etcd_storage().class_name == "gardener.cloud-fast"
    assert cfg.etcd_storage().capacity == "25Gi"
    assert cfg.etcd_backup().schedule == "0 */24 * * *"


def test_health_check_config_configured():
    cfg = Config(load(SAMPLE))
    default = HealthCheckConfig(sync_period=timedelta(seconds=5))
    assert cfg.health_check_config(default) == HealthCheckConfig(sync_period=timedelta(seconds=30))


def test_health_check_config_falls_back_to_default():
    cfg = Config(load(NO_HEALTH))
    default = HealthCheckConfig(sync_period=timedelta(seconds=5))
    assert cfg.health_check_config(default) is default


def test_add_flags_sets_path(config_file):
    opts = ConfigOptions()
    parser = argparse.ArgumentParser()
    opts.add_flags(parser)
    namespace = parser.parse_args(["--config-file", str(config_file)])
    assert opts.config_file_path == str(config_file)
    assert namespace.config_file == str(config_file)
    opts.complete()
    assert opts.completed().etcd_backup().schedule == "0 */24 * * *"


def test_add_flags_default_is_empty():
    opts = ConfigOptions()
    parser = argparse.ArgumentParser()
    opts.add_flags(parser)
    namespace = parser.parse_args([])
    assert namespace.config_file == ""
    assert opts.config_file_path == ""
    with pytest.raises(ConfigError):
        opts.complete()