import copy

import pytest

from gcpprovider.api import (
    VPC,
    CloudNAT,
    CloudRouter,
    FlowLogs,
    InfrastructureConfig,
    NatIPName,
    NetworkConfig,
)
from gcpprovider.validation.field import ErrorType
from gcpprovider.validation.infrastructure import (
    validate_infrastructure_config,
    validate_infrastructure_config_update,
)

PODS = "100.96.0.0/11"
SERVICES = "100.64.0.0/13"
NODES = "10.250.0.0/16"
INTERNAL = "10.10.0.0/24"
INVALID_CIDR = "invalid-cidr"


@pytest.fixture
def infra():
    return InfrastructureConfig(
        networks=NetworkConfig(
            vpc=VPC(name="hugo", cloud_router=CloudRouter(name="hugo-cr")),
            cloud_nat=CloudNAT(min_ports_per_vm=20, nat_ip_names=[NatIPName(name="test")]),
            flow_logs=FlowLogs(
                aggregation_interval="INTERVAL_5_SEC",
                metadata="INCLUDE_ALL_METADATA",
                flow_sampling=0.4,
            ),
            internal=INTERNAL,
            workers="10.250.0.0/16",
            worker="10.250.0.0/16",
        )
    )


@pytest.fixture
def vpc_infra():
    return InfrastructureConfig(networks=NetworkConfig(internal=INTERNAL, workers="10.250.0.0/16"))


def _details(errors):
    return sorted((e.type, e.field, e.detail) for e in errors)


def _fields(errors):
    return sorted((e.type, e.field) for e in errors)


def test_forbid_invalid_worker_cidr(infra):
    infra.networks.workers = INVALID_CIDR
    errors = validate_infrastructure_config(infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (ErrorType.INVALID, "networks.workers", "invalid CIDR address: invalid-cidr")
    ]


def test_forbid_invalid_internal_cidr(infra):
    infra.networks.internal = INVALID_CIDR
    errors = validate_infrastructure_config(infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (ErrorType.INVALID, "networks.internal", "invalid CIDR address: invalid-cidr")
    ]


def test_forbid_workers_not_in_nodes(infra):
    infra.networks.workers = "1.1.1.1/32"
    errors = validate_infrastructure_config(infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (ErrorType.INVALID, "networks.workers", 'must be a subset of "<nil>" ("10.250.0.0/16")')
    ]


def test_forbid_internal_overlapping_nodes_and_workers(infra):
    overlapping = "10.250.1.0/30"
    infra.networks.internal = overlapping
    infra.networks.workers = overlapping
    errors = validate_infrastructure_config(infra, overlapping, PODS, SERVICES, None)
    assert _details(errors) == sorted(
        [
            (ErrorType.INVALID, "networks.internal", 'must not overlap with "<nil>" ("10.250.1.0/30")'),
            (
                ErrorType.INVALID,
                "networks.internal",
                'must not overlap with "networks.workers" ("10.250.1.0/30")',
            ),
        ]
    )


def test_forbid_non_canonical_cidrs(infra):
    infra.networks.internal = "10.10.0.4/24"
    infra.networks.workers = "10.250.3.8/24"
    errors = validate_infrastructure_config(
        infra, "10.250.0.3/16", "100.96.0.4/11", "100.64.0.5/13", None
    )
    assert len(errors) == 2
    assert _details(errors) == [
        (ErrorType.INVALID, "networks.internal", "must be valid canonical CIDR"),
        (ErrorType.INVALID, "networks.workers", "must be valid canonical CIDR"),
    ]


def test_allow_valid_config(infra):
    assert validate_infrastructure_config(infra, NODES, PODS, SERVICES, None) == []


def test_allow_valid_config_without_pods_and_services(infra):
    assert validate_infrastructure_config(infra, NODES, None, None, None) == []


def test_require_worker_range():
    config = InfrastructureConfig(networks=NetworkConfig())
    errors = validate_infrastructure_config(config, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (
            ErrorType.REQUIRED,
            "networks.workers",
            "must specify the network range for the worker network",
        )
    ]


def test_forbid_cloud_router_without_vpc_name(vpc_infra):
    vpc_infra.networks.vpc = VPC(cloud_router=CloudRouter())
    errors = validate_infrastructure_config(vpc_infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == sorted(
        [
            (
                ErrorType.INVALID,
                "networks.vpc.cloudRouter",
                "cloud router can not be configured when the VPC name is not specified",
            ),
            (
                ErrorType.INVALID,
                "networks.vpc.name",
                "vpc name must not be empty when vpc key is provided",
            ),
        ]
    )


def test_forbid_empty_flow_log_config(infra):
    infra.networks.flow_logs = FlowLogs()
    errors = validate_infrastructure_config(infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (
            ErrorType.REQUIRED,
            "networks.flowLogs",
            "at least one VPC flow log parameter must be specified when VPC flow log section is provided",
        )
    ]


def test_forbid_wrong_flow_log_config(infra):
    infra.networks.flow_logs = FlowLogs(
        aggregation_interval="foo", flow_sampling=1.2, metadata="foo"
    )
    errors = validate_infrastructure_config(infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == sorted(
        [
            (
                ErrorType.NOT_SUPPORTED,
                "networks.flowLogs.aggregationInterval",
                'supported values: "INTERVAL_5_SEC", "INTERVAL_30_SEC", "INTERVAL_1_MIN", '
                '"INTERVAL_5_MIN", "INTERVAL_15_MIN"',
            ),
            (
                ErrorType.NOT_SUPPORTED,
                "networks.flowLogs.metadata",
                'supported values: "INCLUDE_ALL_METADATA"',
            ),
            (ErrorType.INVALID, "networks.flowLogs.flowSampling", "must contain a valid value"),
        ]
    )


def test_forbid_reusing_vpc_without_cloud_router(vpc_infra):
    vpc_infra.networks.vpc = VPC(name="test-vpc")
    errors = validate_infrastructure_config(vpc_infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (
            ErrorType.INVALID,
            "networks.vpc.cloudRouter",
            "cloud router must be defined when reusing a VPC",
        )
    ]


def test_forbid_reusing_vpc_without_cloud_router_name(vpc_infra):
    vpc_infra.networks.vpc = VPC(name="test-vpc", cloud_router=CloudRouter())
    errors = validate_infrastructure_config(vpc_infra, NODES, PODS, SERVICES, None)
    assert _details(errors) == [
        (
            ErrorType.INVALID,
            "networks.vpc.cloudRouter.name",
            "cloud router name must be specified when reusing a VPC",
        )
    ]


def test_allow_correct_flow_log_config(infra):
    infra.networks.flow_logs = FlowLogs(
        aggregation_interval="INTERVAL_1_MIN", flow_sampling=0.5, metadata="INCLUDE_ALL_METADATA"
    )
    assert validate_infrastructure_config(infra, NODES, PODS, SERVICES, None) == []


def test_allow_correct_flow_log_config_on_copy(infra):
    new_config = copy.deepcopy(infra)
    new_config.networks.flow_logs = FlowLogs(
        aggregation_interval="INTERVAL_1_MIN", metadata="INCLUDE_ALL_METADATA", flow_sampling=0.5
    )
    assert validate_infrastructure_config(new_config, NODES, PODS, SERVICES, None) == []


def test_update_unchanged(infra):
    assert validate_infrastructure_config_update(infra, infra, None) == []


def test_update_allows_cloud_nat_and_flow_log_changes(infra):
    new_config = copy.deepcopy(infra)
    new_config.networks.cloud_nat = CloudNAT(
        min_ports_per_vm=30, nat_ip_names=[NatIPName(name="not-test")]
    )
    new_config.networks.flow_logs = FlowLogs(aggregation_interval="INTERVAL_30_SEC")
    assert validate_infrastructure_config_update(infra, new_config, None) == []


def test_update_forbids_network_changes(infra):
    new_config = copy.deepcopy(infra)
    new_config.networks.vpc = VPC(name="not-hugo", cloud_router=CloudRouter(name="not-hugo-cr"))
    new_config.networks.workers = "10.96.0.0/16"
    new_config.networks.worker = "10.96.0.0/16"
    new_config.networks.internal = "10.96.0.0/16"
    errors = validate_infrastructure_config_update(infra, new_config, None)
    assert _fields(errors) == sorted(
        [
            (ErrorType.INVALID, "networks.vpc.name"),
            (ErrorType.INVALID, "networks.vpc.cloudRouter"),
            (ErrorType.INVALID, "networks.workers"),
            (ErrorType.INVALID, "networks.worker"),
            (ErrorType.INVALID, "networks.internal"),
        ]
    )


def test_update_forbids_removing_vpc(infra):
    new_config = copy.deepcopy(infra)
    new_config.networks.vpc = None
    errors = validate_infrastructure_config_update(infra, new_config, None)
    assert _fields(errors) == [(ErrorType.INVALID, "networks.vpc")]