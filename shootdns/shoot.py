"""Shoot model used by the admission webhooks."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

EXTENSION_TYPE = "shoot-dns-service"
WEBHOOK_PROVIDER = "shoot-dns-service"

MUTATOR_NAME = "mutator"
MUTATOR_PATH = "/webhooks/mutate"
VALIDATOR_NAME = "validator"
VALIDATOR_PATH = "/webhooks/validate"

WEBHOOK_OBJECT_SELECTOR = {"extensions.extensions.gardener.cloud/shoot-dns-service": "true"}


@dataclass
class CrossVersionObjectReference:
    """Reference to an object of a given kind and API version."""

    kind: str = ""
    name: str = ""
    api_version: str = ""


@dataclass
class NamedResourceReference:
    """A named reference to a resource in the shoot's project."""

    name: str = ""
    resource_ref: CrossVersionObjectReference = field(default_factory=CrossVersionObjectReference)


@dataclass
class IncludeExclude:
    """Items to include and exclude."""

    include: list[str] | None = None
    exclude: list[str] | None = None


@dataclass
class ShootDNSProvider:
    """A DNS provider declared in a shoot's DNS section."""

    domains: IncludeExclude | None = None
    primary: bool | None = None
    secret_name: str | None = None
    type: str | None = None
    zones: IncludeExclude | None = None


@dataclass
class ShootDNS:
    """A shoot's DNS section."""

    domain: str | None = None
    providers: list[ShootDNSProvider] | None = None


@dataclass
class Extension:
    """An extension enabled for a shoot, with its raw provider config."""

    type: str = ""
    provider_config: bytes | None = None
    disabled: bool | None = None


class LastOperationType(str, Enum):
    CREATE = "Create"
    RECONCILE = "Reconcile"
    DELETE = "Delete"
    MIGRATE = "Migrate"
    RESTORE = "Restore"


class LastOperationState(str, Enum):
    PROCESSING = "Processing"
    SUCCEEDED = "Succeeded"
    ERROR = "Error"
    FAILED = "Failed"
    PENDING = "Pending"
    ABORTED = "Aborted"


@dataclass
class LastOperation:
    """The last operation performed on a shoot."""

    type: LastOperationType
    state: LastOperationState


@dataclass
class ShootSpec:
    """The parts of a shoot specification the webhooks look at."""

    dns: ShootDNS | None = None
    extensions: list[Extension] = field(default_factory=list)
    resources: list[NamedResourceReference] | None = None


@dataclass
class Shoot:
    """A shoot cluster as seen by the admission webhooks."""

    spec: ShootSpec = field(default_factory=ShootSpec)
    deletion_timestamp: datetime | None = None
    last_operation: LastOperation | None = None
    labels: dict[str, str] = field(default_factory=dict)

    def find_extension(self, extension_type: str) -> Extension | None:
        """Return the first extension of the given type, or None."""
        return next((ext for ext in self.spec.extensions if ext.type == extension_type), None)

    def copy(self) -> Shoot:
        """Return a deep copy of the shoot."""
        return _copy.deepcopy(self)