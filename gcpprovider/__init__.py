"""GCP provider API types, serialization, controller configuration loading and validation."""

__version__ = "0.1.0"