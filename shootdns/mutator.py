"""Admission mutation syncing shoot DNS providers into the extension config."""

from __future__ import annotations

from .shoot import (
    EXTENSION_TYPE,
    CrossVersionObjectReference,
    Extension,
    LastOperationState,
    LastOperationType,
    NamedResourceReference,
    Shoot,
    ShootDNSProvider,
)
from .types import (
    DecodeError,
    DNSConfig,
    DNSIncludeExclude,
    DNSProvider,
    decode_dns_config,
    encode_dns_config,
)

_SECRET_PREFIX = EXTENSION_TYPE + "-"


class ShootMutator:
    """Mutates shoots so that the DNS extension config mirrors spec.dns.providers."""

    def mutate(self, new: object, old: object | None = None) -> None:
        """Mutate the new shoot in place."""
        if not isinstance(new, Shoot):
            raise TypeError(f"wrong object type {type(new).__name__}")
        self._mutate_shoot(new)

    def _mutate_shoot(self, shoot: Shoot) -> None:
        if self._is_disabled(shoot):
            return
        config = self._extract_dns_config(shoot)

        sync = config is None or config.providers is None
        if config is not None and config.sync_providers_from_shoot_spec_dns is not None:
            sync = config.sync_providers_from_shoot_spec_dns
        if not sync:
            return

        if config is None:
            config = DNSConfig()
        config.sync_providers_from_shoot_spec_dns = sync

        old_names = {ref.name: index for index, ref in enumerate(shoot.spec.resources or [])}
        new_names: set[str] = set()

        providers = [
            self._convert_provider(shoot, provider, old_names, new_names)
            for provider in shoot.spec.dns.providers or []
        ]
        config.providers = providers or None

        outdated = {
            name for name in old_names if name.startswith(_SECRET_PREFIX) and name not in new_names
        }
        if outdated:
            shoot.spec.resources = [
                ref for ref in shoot.spec.resources or [] if ref.name not in outdated
            ]

        self._update_dns_config(shoot, config)

    @staticmethod
    def _convert_provider(
        shoot: Shoot,
        provider: ShootDNSProvider,
        old_names: dict[str, int],
        new_names: set[str],
    ) -> DNSProvider:
        result = DNSProvider(type=provider.type)
        if provider.domains is not None:
            result.domains = DNSIncludeExclude(
                include=_copy_list(provider.domains.include),
                exclude=_copy_list(provider.domains.exclude),
            )
        if provider.zones is not None:
            result.zones = DNSIncludeExclude(
                include=_copy_list(provider.zones.include),
                exclude=_copy_list(provider.zones.exclude),
            )
        if (
            provider.primary
            and provider.domains is None
            and provider.zones is None
            and shoot.spec.dns.domain is not None
        ):
            result.domains = DNSIncludeExclude(include=[shoot.spec.dns.domain])
        if provider.secret_name is not None:
            mapped = _SECRET_PREFIX + provider.secret_name
            result.secret_name = mapped
            ref = CrossVersionObjectReference(
                kind="Secret", name=provider.secret_name, api_version="v1"
            )
            new_names.add(mapped)
            if mapped in old_names:
                shoot.spec.resources[old_names[mapped]].resource_ref = ref
            else:
                if shoot.spec.resources is None:
                    shoot.spec.resources = []
                shoot.spec.resources.append(NamedResourceReference(name=mapped, resource_ref=ref))
        return result

    @staticmethod
    def _find_extension(shoot: Shoot) -> Extension | None:
        if shoot.spec.dns is None:
            return None
        return shoot.find_extension(EXTENSION_TYPE)

    def _is_disabled(self, shoot: Shoot) -> bool:
        if shoot.spec.dns is None:
            return True
        if shoot.deletion_timestamp is not None:
            return True
        last = shoot.last_operation
        if (
            last is not None
            and last.type != LastOperationType.RECONCILE
            and last.state != LastOperationState.PROCESSING
        ):
            return True
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

    @staticmethod
    def _update_dns_config(shoot: Shoot, config: DNSConfig) -> None:
        raw = encode_dns_config(config)
        ext = shoot.find_extension(EXTENSION_TYPE)
        if ext is None:
            ext = Extension(type=EXTENSION_TYPE)
            shoot.spec.extensions.append(ext)
        ext.provider_config = raw


def _copy_list(items: list[str] | None) -> list[str] | None:
    return None if items is None else list(items)