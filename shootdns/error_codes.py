"""Classification of provider error messages into error codes."""

from __future__ import annotations

import re
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes reported for failed operations."""

    INFRA_UNAUTHENTICATED = "ERR_INFRA_UNAUTHENTICATED"
    INFRA_UNAUTHORIZED = "ERR_INFRA_UNAUTHORIZED"
    INFRA_QUOTA_EXCEEDED = "ERR_INFRA_QUOTA_EXCEEDED"
    INFRA_RATE_LIMITS_EXCEEDED = "ERR_INFRA_RATE_LIMITS_EXCEEDED"
    CONFIGURATION_PROBLEM = "ERR_CONFIGURATION_PROBLEM"


KNOWN_CODES: dict[ErrorCode, re.Pattern[str]] = {
    ErrorCode.INFRA_UNAUTHENTICATED: re.compile(
        r"(?i)(InvalidAuthenticationTokenTenant|Authentication failed|AuthFailure|invalid character"
        r"|invalid_client|query returned no results|InvalidAccessKeyId|cannot fetch token"
        r"|InvalidSecretAccessKey|InvalidSubscriptionId)"
    ),
    ErrorCode.INFRA_UNAUTHORIZED: re.compile(
        r"(?i)(Unauthorized|InvalidClientTokenId|SignatureDoesNotMatch|AuthorizationFailed|invalid_grant"
        r"|Authorization Profile was not found|no active subscriptions|UnauthorizedOperation"
        r"|not authorized|AccessDenied|OperationNotAllowed|Error 403|SERVICE_ACCOUNT_ACCESS_DENIED)"
    ),
    ErrorCode.INFRA_QUOTA_EXCEEDED: re.compile(
        r"(?i)((?:^|[^t]|(?:[^s]|^)t|(?:[^e]|^)st|(?:[^u]|^)est|(?:[^q]|^)uest|(?:[^e]|^)quest"
        r"|(?:[^r]|^)equest)LimitExceeded|Quotas|Quota.*exceeded|exceeded quota|Quota has been met"
        r"|QUOTA_EXCEEDED|Maximum number of ports exceeded|ZONE_RESOURCE_POOL_EXHAUSTED_WITH_DETAILS)"
    ),
    ErrorCode.INFRA_RATE_LIMITS_EXCEEDED: re.compile(
        r"(?i)(RequestLimitExceeded|Throttling|Too many requests)"
    ),
    ErrorCode.CONFIGURATION_PROBLEM: re.compile(r"(?i)(no domain matching hosting zones|duplicate zones)"),
}


def matches_error_code(code: ErrorCode | str, message: str) -> bool:
    """Return whether the message matches the pattern of the given code."""
    return KNOWN_CODES[ErrorCode(code)].search(message) is not None


def determine_error_codes(message: str) -> list[ErrorCode]:
    """Return all known error codes whose patterns match the message."""
    return [code for code, pattern in KNOWN_CODES.items() if pattern.search(message)]