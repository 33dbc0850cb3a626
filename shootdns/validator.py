"""Admission validation of the DNS service extension config in shoots."""

from __future__ import annotations

from .shoot import EXTENSION_TYPE, Extension, Shoot
from .types import DecodeError, DNSConfig, decode_dns_config
from .validation import ValidationFailed, validate_dns_config


class ShootValidator:
    """Validates the DNS service provider config of shoots."""

    def validate(self, new: object, old: object | None = None) -> None:
        """Validate a new shoot, raising ValidationFailed if its DNS config is invalid."""
        if not isinstance(new, Shoot):
            raise TypeError(f"wrong object type {type(new).__name__}")
        self._validate_shoot(new)

    def _validate_shoot(self, shoot: Shoot) -> None:
        if self._is_disabled(shoot):
            return
        config = self._extract_dns_config(shoot)
        if config is None:
            return
        errors = validate_dns_config(config, shoot.spec.resources or [])
        if errors:
            raise ValidationFailed(errors)

    @staticmethod
    def _find_extension(shoot: Shoot) -> Extension | None:
        return shoot.find_extension(EXTENSION_TYPE)

    def _is_disabled(self, shoot: Shoot) -> bool:
        ext = self._find_extension(shoot)
        return bool(ext is not None and ext.disabled)

    def _extract_dns_config(self, shoot: Shoot) -> DNSConfig | None:
        ext = self._find_extension(shoot)
        if ext is None or ext.provider_config is None:
            return None
        try:
            return decode_dns_config(ext.provider_config)
        except DecodeError as exc:
            raise DecodeError(f"failed to decode {ext.type} provider config: {exc}") from exc