"""DNS state stored in the extension status to rebuild entries after migration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import DecodeError, _encode, _load_object, _opt_object, _opt_str

GROUP_NAME = "dns.extensions.gardener.cloud"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"
KIND = "DNSState"


def _opt_str_map(data: dict[str, Any], key: str) -> dict[str, str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict) or not all(isinstance(item, str) for item in value.values()):
        raise DecodeError(f"field {key!r} must be a map of strings")
    return dict(value)


@dataclass
class DNSEntry:
    """A DNS entry maintained for a shoot; the spec is kept as an opaque mapping."""

    name: str = ""
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    spec: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.labels:
            result["labels"] = dict(self.labels)
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        result["spec"] = self.spec
        return result


@dataclass
class DNSState:
    """The set of DNS entries maintained by the service for one shoot."""

    entries: list[DNSEntry] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": KIND, "apiVersion": API_VERSION}
        if self.entries:
            result["entries"] = [entry.to_dict() for entry in self.entries]
        return result


def _entry(data: Any) -> DNSEntry:
    if not isinstance(data, dict):
        raise DecodeError("each entry must be an object")
    return DNSEntry(
        name=_opt_str(data, "name") or "",
        labels=_opt_str_map(data, "labels"),
        annotations=_opt_str_map(data, "annotations"),
        spec=_opt_object(data, "spec"),
    )


def encode_dns_state(state: DNSState) -> bytes:
    """Serialize a DNS state as versioned JSON."""
    return _encode(state.to_dict())


def decode_dns_state(raw: bytes | bytearray | str) -> DNSState:
    """Decode a DNS state from JSON, raising DecodeError on malformed input."""
    data = _load_object(raw, API_VERSION, KIND)
    entries_data = data.get("entries")
    if entries_data is None:
        return DNSState()
    if not isinstance(entries_data, list):
        raise DecodeError("field 'entries' must be a list")
    return DNSState(entries=[_entry(item) for item in entries_data])


def get_extension_state(raw: bytes | bytearray | str | None) -> DNSState:
    """Return the DNS state held in an extension status, empty if none is set."""
    if raw is None:
        return DNSState()
    try:
        return decode_dns_state(raw)
    except DecodeError as exc:
        raise DecodeError(f"could not decode extension state: {exc}") from exc