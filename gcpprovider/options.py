"""Command line options that produce a completed controller configuration."""

from __future__ import annotations

import argparse
import copy
from dataclasses import dataclass
from typing import Any

from gcpprovider.config import (
    ConfigError,
    ControllerConfiguration,
    ETCDBackup,
    ETCDStorage,
    HealthCheckConfig,
    load_from_file,
)


@dataclass
class Config:
    """A completed controller configuration."""

    config: ControllerConfiguration

    def options(self) -> ControllerConfiguration:
        """Return a copy of the controller configuration."""
        return copy.deepcopy(self.config)

    def etcd_storage(self) -> ETCDStorage:
        """Return a copy of the etcd storage settings."""
        return copy.deepcopy(self.config.etcd.storage)

    def etcd_backup(self) -> ETCDBackup:
        """Return a copy of the etcd backup settings."""
        return copy.deepcopy(self.config.etcd.backup)

    def health_check_config(self, default: HealthCheckConfig | None = None) -> HealthCheckConfig | None:
        """Return the configured health check settings, or ``default`` if none are set."""
        if self.config.health_check_config is not None:
            return copy.deepcopy(self.config.health_check_config)
        return default


class _StoreOnOptions(argparse.Action):
    def __init__(self, option_strings, dest, target: "ConfigOptions", **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self._target = target

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        setattr(namespace, self.dest, values)
        self._target.config_file_path = values


class ConfigOptions:
    """Options naming the file the controller configuration is read from."""

    def __init__(self, config_file_path: str = "") -> None:
        self.config_file_path = config_file_path
        self._config: Config | None = None

    def complete(self) -> None:
        """Load the configuration file; raise ConfigError if no path is set."""
        if not self.config_file_path:
            raise ConfigError("config file path not set")
        self._config = Config(load_from_file(self.config_file_path))

    def completed(self) -> Config | None:
        """Return the completed configuration, or None before a successful complete()."""
        return self._config

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        """Register the ``--config-file`` flag on an argument parser."""
        parser.add_argument(
            "--config-file",
            dest="config_file",
            default="",
            action=_StoreOnOptions,
            target=self,
            help="path to the controller manager configuration file",
        )