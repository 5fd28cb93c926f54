"""Validation of the cloud provider secret holding a GCP service account."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping

SERVICE_ACCOUNT_JSON_FIELD = "serviceaccount.json"

_PROJECT_ID_PATTERN = r"^(?P<project>[a-z][a-z0-9-]{4,28}[a-z0-9])$"
_PROJECT_ID = re.compile(_PROJECT_ID_PATTERN)


class InvalidSecretError(ValueError):
    """Raised when a secret does not hold a valid service account."""


def extract_service_account_project_id(service_account_json: bytes | str) -> str:
    """Return the project ID named in a service account JSON document."""
    try:
        document = json.loads(service_account_json)
    except (ValueError, TypeError) as err:
        raise InvalidSecretError(f"cannot parse service account JSON: {err}") from err
    if not isinstance(document, dict):
        raise InvalidSecretError("service account JSON must be an object")
    project_id = document.get("project_id")
    if project_id is not None and not isinstance(project_id, str):
        raise InvalidSecretError("project_id must be a string")
    if not project_id:
        raise InvalidSecretError("no project id specified")
    return project_id


def validate_cloud_provider_secret(data: Mapping[str, bytes]) -> None:
    """Check that secret data holds a service account with a well-formed project ID."""
    if SERVICE_ACCOUNT_JSON_FIELD not in data:
        raise InvalidSecretError(f'missing "{SERVICE_ACCOUNT_JSON_FIELD}" field in secret')
    project_id = extract_service_account_project_id(data[SERVICE_ACCOUNT_JSON_FIELD])
    if _PROJECT_ID.fullmatch(project_id) is None:
        raise InvalidSecretError(
            "service account project ID does not match the expected format "
            f"'{_PROJECT_ID_PATTERN}'"
        )