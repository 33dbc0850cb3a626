# shootdns

Admission logic for a shoot DNS service extension, written as plain Python
objects. It has no dependencies outside the standard library.

## Modules

- **`shootdns.types`**: the `DNSConfig` provider configuration with
  `DNSProvider`, `DNSIncludeExclude` and `DNSProviderReplication`.
  `encode_dns_config` writes a config as compact JSON carrying
  `apiVersion: service.dns.extensions.gardener.cloud/v1alpha1` and
  `kind: DNSConfig`. `decode_dns_config` reads bytes or a string back. It
  raises `DecodeError`, a subclass of `ValueError`, for invalid JSON, a
  mismatched `apiVersion` or `kind`, or fields of the wrong type.
- **`shootdns.state`**: `DNSState` and `DNSEntry`, the saved set of DNS
  entries. An entry's `spec` is kept as a plain mapping. The module provides
  `encode_dns_state` and `decode_dns_state`. `get_extension_state(raw)`
  returns an empty `DNSState` when `raw` is `None`, and raises `DecodeError`
  when `raw` cannot be decoded.
- **`shootdns.error_codes`**: the `ErrorCode` enum (`INFRA_UNAUTHENTICATED`,
  `INFRA_UNAUTHORIZED`, `INFRA_QUOTA_EXCEEDED`, `INFRA_RATE_LIMITS_EXCEEDED`,
  `CONFIGURATION_PROBLEM`). `matches_error_code(code, message)` tests one
  code against a provider error message. `determine_error_codes(message)`
  returns every code whose pattern matches. Matching ignores case.
- **`shootdns.shoot`**: the parts of a `Shoot` that the admission steps read
  and change. These are `ShootSpec`, `ShootDNS`, `ShootDNSProvider`,
  `IncludeExclude`, `Extension`, `NamedResourceReference`,
  `CrossVersionObjectReference` and `LastOperation` (with
  `LastOperationType` and `LastOperationState`). `Shoot.find_extension(type)`
  returns the first extension of a type. `Shoot.copy()` returns a deep copy.
  The module also defines the extension type (`EXTENSION_TYPE`), the webhook
  names and paths (`MUTATOR_NAME`, `MUTATOR_PATH`, `VALIDATOR_NAME`,
  `VALIDATOR_PATH`) and `WEBHOOK_OBJECT_SELECTOR` as constants.
- **`shootdns.validation`**: `validate_dns_config(config, resources)` returns
  a list of `FieldError`. Each provider needs a supported type and a secret
  name. When `resources` is not `None`, every secret name must also be the
  name of one of those resources. `is_supported_provider_type` checks a
  single type. `ValidationFailed` wraps a list of errors.
- **`shootdns.validator`**: `ShootValidator.validate(new, old)` decodes the
  `shoot-dns-service` extension's provider config and validates it against
  `spec.resources`.
  - It skips the shoot when the extension is disabled or has no config.
  - It raises `ValidationFailed` when the config is invalid.
  - It raises `DecodeError` when the config cannot be decoded.
  - It raises `TypeError` for objects that are not a `Shoot`.
- **`shootdns.mutator`**: `ShootMutator.mutate(new, old)` changes the new
  shoot in place.
  - **When it leaves the shoot alone.** It does nothing if the shoot has no
    DNS section, is being deleted, has a last operation that is neither a
    reconcile nor processing, or has the extension disabled. It also does
    nothing when provider syncing is off. Syncing is on by default if there
    is no config or the config lists no providers. An explicit
    `syncProvidersFromShootSpecDNS` overrides that default.
  - **Providers.** It copies `spec.dns.providers` into the extension config.
    A primary provider with neither domains nor zones gets the shoot's
    domain as its included domain.
  - **Secrets.** Each secret name is renamed to `shoot-dns-service-<name>`,
    and a matching `Secret` reference is added to or updated in
    `spec.resources`. Prefixed references that are no longer used are
    removed.
  - **Result.** The encoded config is written to the extension, which is
    created if it is missing.

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
from shootdns.types import DNSConfig, DNSProvider
from shootdns.validation import validate_dns_config

config = DNSConfig(providers=[DNSProvider(type="aws-route53", secret_name=None)])
for error in validate_dns_config(config, None):
    print(error)
```

The loop prints one error:

```
spec.extensions.[@.type='shoot-dns-service'].providerConfig[0].secretName: Required value: secret name is required
```

## What this package does not do

The package holds the decision logic only. There is no HTTP webhook server
and no admission review handling: the webhook names, paths and object
selector are given as constants only. There is no controller that creates DNS
entries or providers, no connection to a cluster and no command-line program.
Callers build `Shoot` objects themselves and pass them to `ShootValidator` and
`ShootMutator`.