"""Validation of the DNS service provider configuration."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .shoot import EXTENSION_TYPE, NamedResourceReference
from .types import DNSConfig, DNSProvider

SUPPORTED_PROVIDER_TYPES = (
    "alicloud-dns",
    "aws-route53",
    "azure-dns",
    "azure-private-dns",
    "cloudflare-dns",
    "google-clouddns",
    "infoblox-dns",
    "netlify-dns",
    "openstack-designate",
    "remote",
    "rfc2136",
)

_PROVIDERS_PATH = f"spec.extensions.[@.type='{EXTENSION_TYPE}'].providerConfig"


class ErrorType(str, Enum):
    REQUIRED = "FieldValueRequired"
    INVALID = "FieldValueInvalid"

    @property
    def label(self) -> str:
        return "Required value" if self is ErrorType.REQUIRED else "Invalid value"


@dataclass(frozen=True)
class FieldError:
    """A validation error tied to a field path."""

    type: ErrorType
    field: str
    detail: str
    bad_value: Any = None

    def __str__(self) -> str:
        if self.type is ErrorType.INVALID:
            body = f"{self.type.label}: {json.dumps(self.bad_value)}"
        else:
            body = self.type.label
        if self.detail:
            body = f"{body}: {self.detail}"
        return f"{self.field}: {body}"


class ValidationFailed(Exception):
    """Raised when a configuration has validation errors."""

    def __init__(self, errors: Iterable[FieldError]):
        self.errors = tuple(errors)
        messages = [str(error) for error in self.errors]
        message = messages[0] if len(messages) == 1 else f"[{', '.join(messages)}]"
        super().__init__(message)


def is_supported_provider_type(provider_type: str) -> bool:
    """Return whether the provider type is one of the supported types."""
    return provider_type in SUPPORTED_PROVIDER_TYPES


def _validate_provider(
    index: int, provider: DNSProvider, resource_names: set[str] | None
) -> list[FieldError]:
    errors = []
    base = f"{_PROVIDERS_PATH}[{index}]"
    if not provider.type:
        errors.append(FieldError(ErrorType.REQUIRED, f"{base}.type", "provider type is required"))
    elif not is_supported_provider_type(provider.type):
        errors.append(
            FieldError(
                ErrorType.INVALID,
                f"{base}.type",
                "unsupported provider type. Valid types are: " + ", ".join(SUPPORTED_PROVIDER_TYPES),
                provider.type,
            )
        )
    if not provider.secret_name:
        errors.append(FieldError(ErrorType.REQUIRED, f"{base}.secretName", "secret name is required"))
    elif resource_names is not None and provider.secret_name not in resource_names:
        errors.append(
            FieldError(
                ErrorType.INVALID,
                f"{base}.secretName",
                "secret name is not defined as named resource references at 'spec.resources'",
                provider.secret_name,
            )
        )
    return errors


def validate_dns_config(
    config: DNSConfig, resources: Iterable[NamedResourceReference] | None
) -> list[FieldError]:
    """Validate a DNS config.

    If resources is not None, secret names must also be among the named resources.
    """
    resource_names = None if resources is None else {ref.name for ref in resources}
    return [
        error
        for index, provider in enumerate(config.providers or [])
        for error in _validate_provider(index, provider, resource_names)
    ]