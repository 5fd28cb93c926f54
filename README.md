# gcpprovider

API types for a GCP infrastructure provider used in cluster management.
The package also loads the provider's controller configuration and checks
provider, shoot and cloud profile settings before they are applied.

## Modules

- `gcpprovider.api` has dataclasses for the provider's internal API:
  `InfrastructureConfig`, `InfrastructureStatus`, `ControlPlaneConfig`,
  `WorkerConfig`, `WorkerStatus` and `CloudProfileConfig`, along with the
  types nested inside them (`NetworkConfig`, `VPC`, `CloudRouter`,
  `CloudNAT`, `FlowLogs`, `Subnet`, `SubnetPurpose` and others). `kind()`
  and `resource()` qualify a name with the API group.
- `gcpprovider.serialization`:
  - `decode(data, into)` reads a `v1alpha1` JSON or YAML document that
    carries `apiVersion` and `kind` and returns one of the types above.
  - Decoding is strict. An unknown field, a value of the wrong type or an
    unregistered kind raises `DecodeError`.
  - `encode(obj)` writes an object back as a versioned JSON document.
  - `infrastructure_config_from_infrastructure()` and
    `cloud_profile_config_from_cluster()` decode raw provider config sections.
- `gcpprovider.helper` has `find_subnet_by_purpose`, `find_machine_image`
  and `find_image_from_cloud_profile`. Each raises `NotFoundError` when there
  is no match.
- `gcpprovider.config` has the `ControllerConfiguration` dataclasses, plus
  `load(data)` and `load_from_file(filename)`.
  - Empty input gives an empty configuration.
  - Unknown fields are ignored.
  - A field of the wrong type or a wrong kind raises `ConfigError`.
- `gcpprovider.options`:
  - `ConfigOptions.add_flags(parser)` adds a `--config-file` option to an
    `argparse` parser.
  - `complete()` loads that file.
  - `completed()` returns a `Config` with `options()`, `etcd_storage()`,
    `etcd_backup()` and `health_check_config(default)`.
- `gcpprovider.validation`:
  - `field` has `Path`, `FieldError` and `ErrorType`.
  - `cidr` has `CIDR`, with parse, overlap and subset checks.
  - `featuregates`.
  - `core` has the shoot and cloud profile types that validation needs:
    `Worker`, `Networking`, `CoreMachineImage` and others.
  - Validators: `infrastructure`, `controlplane`, `worker`, `shoot`,
    `cloudprofile` and `secret`.

Most validators return a list of `FieldError`. Two raise instead:

- `validate_cloud_provider_secret` raises `InvalidSecretError`.
- `validate_worker_auto_scaling` raises `ValueError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from gcpprovider.api import InfrastructureConfig
from gcpprovider.serialization import decode
from gcpprovider.validation.infrastructure import validate_infrastructure_config

raw = b"""
apiVersion: gcp.provider.extensions.gardener.cloud/v1alpha1
kind: InfrastructureConfig
networks:
  workers: 10.250.0.0/16
"""
infra = decode(raw, InfrastructureConfig)
errors = validate_infrastructure_config(infra, "10.250.0.0/16", None, None, None)
for error in errors:
    print(error)
```

Each `FieldError` has three parts:

- a `type`, an `ErrorType` of `REQUIRED`, `INVALID`, `NOT_SUPPORTED`,
  `FORBIDDEN` or `DUPLICATE`;
- a `field` path such as `networks.workers`;
- a `detail` message.

`str(error)` renders all three as one line.

## What it does not do

This package only works with data. It has:

- no controllers or reconcilers;
- no webhook or admission server;
- no command-line program;
- no client for the cloud provider's or the cluster's APIs.

It creates no buckets, networks or machines. `--config-file` is an option
you add to your own `argparse` parser. The package does not run a
controller manager on its own.