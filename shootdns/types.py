"""DNS service configuration carried in a shoot's extension provider config."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

GROUP_NAME = "service.dns.extensions.gardener.cloud"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"
KIND = "DNSConfig"


class DecodeError(ValueError):
    """Raised when a serialized object cannot be decoded."""


def _load_object(raw: bytes | bytearray | str, api_version: str, kind: str) -> dict[str, Any]:
    """Parse a JSON object and check its type meta against the expected kind."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 input: {exc}") from exc
    elif isinstance(raw, str):
        text = raw
    else:
        raise DecodeError(f"cannot decode object of type {type(raw).__name__}")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodeError("expected a JSON object")
    found_version = data.get("apiVersion")
    if found_version not in (None, "", api_version):
        raise DecodeError(f"unexpected apiVersion {found_version!r}, expected {api_version!r}")
    found_kind = data.get("kind")
    if found_kind not in (None, "", kind):
        raise DecodeError(f"unexpected kind {found_kind!r}, expected {kind!r}")
    return data


def _opt_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodeError(f"field {key!r} must be a string")


def _opt_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise DecodeError(f"field {key!r} must be a boolean")


def _opt_str_list(data: dict[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DecodeError(f"field {key!r} must be a list of strings")
    return list(value)


def _opt_object(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None or isinstance(value, dict):
        return value
    raise DecodeError(f"field {key!r} must be an object")


def _encode(document: dict[str, Any]) -> bytes:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8") + b"\n"


@dataclass
class DNSIncludeExclude:
    """Domains or zones to include and exclude."""

    include: list[str] | None = None
    exclude: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.include:
            result["include"] = list(self.include)
        if self.exclude:
            result["exclude"] = list(self.exclude)
        return result


@dataclass
class DNSProvider:
    """An additional DNS provider enabled for a shoot."""

    domains: DNSIncludeExclude | None = None
    secret_name: str | None = None
    type: str | None = None
    zones: DNSIncludeExclude | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.domains is not None:
            result["domains"] = self.domains.to_dict()
        if self.secret_name is not None:
            result["secretName"] = self.secret_name
        if self.type is not None:
            result["type"] = self.type
        if self.zones is not None:
            result["zones"] = self.zones.to_dict()
        return result


@dataclass
class DNSProviderReplication:
    """Whether DNS providers are replicated from the shoot to the control plane."""

    enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled}


@dataclass
class DNSConfig:
    """Provider configuration of the DNS service extension."""

    dns_provider_replication: DNSProviderReplication | None = None
    providers: list[DNSProvider] | None = None
    sync_providers_from_shoot_spec_dns: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": KIND, "apiVersion": API_VERSION}
        if self.dns_provider_replication is not None:
            result["dnsProviderReplication"] = self.dns_provider_replication.to_dict()
        if self.providers:
            result["providers"] = [provider.to_dict() for provider in self.providers]
        if self.sync_providers_from_shoot_spec_dns is not None:
            result["syncProvidersFromShootSpecDNS"] = self.sync_providers_from_shoot_spec_dns
        return result


def _include_exclude(data: dict[str, Any] | None) -> DNSIncludeExclude | None:
    if data is None:
        return None
    return DNSIncludeExclude(
        include=_opt_str_list(data, "include"),
        exclude=_opt_str_list(data, "exclude"),
    )


def _provider(data: Any) -> DNSProvider:
    if not isinstance(data, dict):
        raise DecodeError("each provider must be an object")
    return DNSProvider(
        domains=_include_exclude(_opt_object(data, "domains")),
        secret_name=_opt_str(data, "secretName"),
        type=_opt_str(data, "type"),
        zones=_include_exclude(_opt_object(data, "zones")),
    )


def encode_dns_config(config: DNSConfig) -> bytes:
    """Serialize a DNS config as versioned JSON."""
    return _encode(config.to_dict())


def decode_dns_config(raw: bytes | bytearray | str) -> DNSConfig:
    """Decode a DNS config from JSON, raising DecodeError on malformed input."""
    data = _load_object(raw, API_VERSION, KIND)

    replication = None
    replication_data = _opt_object(data, "dnsProviderReplication")
    if replication_data is not None:
        replication = DNSProviderReplication(enabled=bool(_opt_bool(replication_data, "enabled")))

    providers = None
    providers_data = data.get("providers")
    if providers_data is not None:
        if not isinstance(providers_data, list):
            raise DecodeError("field 'providers' must be a list")
        providers = [_provider(item) for item in providers_data]

    return DNSConfig(
        dns_provider_replication=replication,
        providers=providers,
        sync_providers_from_shoot_spec_dns=_opt_bool(data, "syncProvidersFromShootSpecDNS"),
    )