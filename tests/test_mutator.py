from datetime import datetime, timezone

import pytest

from shootdns.mutator import ShootMutator
from shootdns.shoot import (
    CrossVersionObjectReference,
    Extension,
    IncludeExclude,
    LastOperation,
    LastOperationState,
    LastOperationType,
    NamedResourceReference,
    Shoot,
    ShootDNS,
    ShootDNSProvider,
    ShootSpec,
)
from shootdns.types import DecodeError, DNSConfig, DNSIncludeExclude, DNSProvider, decode_dns_config

DOMAIN = "foo.domain.com"
AWS = "aws-route53"
SECRET1 = "my-secret1"
MAPPED1 = "shoot-dns-service-my-secret1"
SECRET2 = "my-secret2"
MAPPED2 = "shoot-dns-service-my-secret2"


def _ref(name, target):
    return NamedResourceReference(
        name=name,
        resource_ref=CrossVersionObjectReference(kind="Secret", name=target, api_version="v1"),
    )


def _shoot():
    return Shoot(
        spec=ShootSpec(
            dns=ShootDNS(domain=DOMAIN),
            extensions=[Extension(type="shoot-cert-service")],
        )
    )


def _shoot_with_resources():
    return Shoot(
        spec=ShootSpec(
            dns=ShootDNS(domain=DOMAIN),
            extensions=[
                Extension(type="shoot-cert-service"),
                Extension(
                    type="shoot-dns-service",
                    provider_config=b'{"syncProvidersFromShootSpecDNS": true}',
                    disabled=False,
                ),
            ],
            resources=[
                _ref("shoot-dns-service-my-secret-obsolete1", "foo"),
                _ref(MAPPED2, "foo"),
                _ref("shoot-dns-service-my-secret-obsolete2", "foo"),
                _ref("other", "other"),
            ],
        )
    )


def _shoot_with_disabled_sync():
    return Shoot(
        spec=ShootSpec(
            dns=ShootDNS(domain=DOMAIN),
            extensions=[
                Extension(
                    type="shoot-dns-service",
                    provider_config=b'{"syncProvidersFromShootSpecDNS": false}',
                    disabled=False,
                )
            ],
        )
    )


def _shoot_in_deletion():
    return Shoot(
        spec=ShootSpec(dns=ShootDNS(domain=DOMAIN)),
        deletion_timestamp=datetime.now(timezone.utc),
    )


def _primary_default():
    return ShootDNSProvider(type=AWS, secret_name=SECRET1, primary=True)


def _primary():
    return ShootDNSProvider(
        domains=IncludeExclude(include=["my.domain.test"], exclude=["private.my.domain.test"]),
        type=AWS,
        secret_name=SECRET1,
        primary=True,
    )


def _additional():
    return ShootDNSProvider(zones=IncludeExclude(include=["Z1234"]), type=AWS, secret_name=SECRET2)


def _find_config(shoot):
    for ext in shoot.spec.extensions:
        if ext.type == "shoot-dns-service" and ext.provider_config is not None:
            return decode_dns_config(ext.provider_config)
    return None


PRIMARY_EXPECTED = DNSProvider(
    domains=DNSIncludeExclude(include=["my.domain.test"], exclude=["private.my.domain.test"]),
    secret_name=MAPPED1,
    type=AWS,
)


@pytest.mark.parametrize(
    "style, template, providers, expected, expected_resources",
    [
        ("none", _shoot, None, None, None),
        ("disabled", _shoot, None, None, None),
        (
            "enabled",
            _shoot,
            None,
            DNSConfig(sync_providers_from_shoot_spec_dns=True),
            None,
        ),
        (
            "enabled",
            _shoot,
            [_primary_default()],
            DNSConfig(
                sync_providers_from_shoot_spec_dns=True,
                providers=[
                    DNSProvider(
                        domains=DNSIncludeExclude(include=[DOMAIN]),
                        secret_name=MAPPED1,
                        type=AWS,
                    )
                ],
            ),
            [_ref(MAPPED1, SECRET1)],
        ),
        (
            "enabled",
            _shoot,
            [_primary()],
            DNSConfig(sync_providers_from_shoot_spec_dns=True, providers=[PRIMARY_EXPECTED]),
            [_ref(MAPPED1, SECRET1)],
        ),
        (
            "enabled",
            _shoot_with_resources,
            [_primary(), _additional()],
            DNSConfig(
                sync_providers_from_shoot_spec_dns=True,
                providers=[
                    PRIMARY_EXPECTED,
                    DNSProvider(
                        secret_name=MAPPED2,
                        type=AWS,
                        zones=DNSIncludeExclude(include=["Z1234"]),
                    ),
                ],
            ),
            [_ref(MAPPED2, SECRET2), _ref("other", "other"), _ref(MAPPED1, SECRET1)],
        ),
        (
            "enabled",
            _shoot_with_disabled_sync,
            [_additional()],
            DNSConfig(sync_providers_from_shoot_spec_dns=False),
            None,
        ),
        ("enabled", _shoot_in_deletion, [_additional()], None, None),
    ],
    ids=[
        "no DNS",
        "extension disabled",
        "extension enabled - default domain",
        "primaryDefault",
        "primary",
        "primary+additional",
        "disabled sync",
        "shoot in deletion",
    ],
)
def test_mutate(style, template, providers, expected, expected_resources):
    old = template()
    new = template()
    if style == "none":
        old.spec.dns = None
        new.spec.dns = None
    elif style == "disabled":
        new.spec.extensions.append(Extension(type="shoot-dns-service", disabled=True))
    else:
        new.spec.dns.providers = providers

    ShootMutator().mutate(new, old)

    assert _find_config(new) == expected
    assert new.spec.resources == expected_resources


def test_mutate_is_idempotent():
    mutator = ShootMutator()
    shoot = _shoot_with_resources()
    shoot.spec.dns.providers = [_primary(), _additional()]
    mutator.mutate(shoot, None)
    first = shoot.copy()
    mutator.mutate(shoot, None)
    assert _find_config(shoot) == _find_config(first)
    assert shoot.spec.resources == first.spec.resources


def test_last_operation_not_reconciling_skips_mutation():
    shoot = _shoot()
    shoot.spec.dns.providers = [_primary()]
    shoot.last_operation = LastOperation(LastOperationType.CREATE, LastOperationState.SUCCEEDED)
    ShootMutator().mutate(shoot, None)
    assert _find_config(shoot) is None
    assert shoot.spec.resources is None


def test_explicit_providers_without_sync_flag_are_kept():
    shoot = _shoot()
    raw = b'{"providers": [{"type": "aws-route53", "secretName": "my-secret1"}]}'
    shoot.spec.extensions.append(Extension(type="shoot-dns-service", provider_config=raw))
    shoot.spec.dns.providers = [_additional()]
    ShootMutator().mutate(shoot, None)
    assert shoot.spec.extensions[-1].provider_config == raw
    assert shoot.spec.resources is None


def test_undecodable_provider_config_raises():
    shoot = _shoot()
    shoot.spec.extensions.append(Extension(type="shoot-dns-service", provider_config=b"[1"))
    with pytest.raises(DecodeError) as info:
        ShootMutator().mutate(shoot, None)
    assert "failed to decode shoot-dns-service provider config" in str(info.value)


def test_wrong_object_type_raises():
    with pytest.raises(TypeError):
        ShootMutator().mutate("shoot", None)