# zkoracle/errors.py
"""
Error taxonomy for the attestation pipeline.

Components raise OracleFailure subclasses. The orchestrator converts them
into OracleError values at its boundary; nothing past that point raises
for a domain failure.
"""

from dataclasses import dataclass
from enum import Enum

ORACLE_ERROR = "Oracle Error"
INVALID_DATA = "Data is invalid or does not fit the requirements"


class ErrorCode(str, Enum):
    TOKEN_EXCHANGE_FAILED = "TokenExchangeFailed"
    PROFILE_FETCH_FAILED = "ProfileFetchFailed"
    INVALID_TOKEN = "InvalidToken"
    MALFORMED_CLAIM = "MalformedClaim"
    FETCH_FAILED = "FetchFailed"
    INACTIVE_OR_UNOWNED = "InactiveOrUnowned"
    TOO_LONG = "TooLong"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_KEY = "InvalidKey"


DESCRIPTIONS = {
    ErrorCode.TOKEN_EXCHANGE_FAILED: "Error when retrieving access token",
    ErrorCode.PROFILE_FETCH_FAILED: "Error when retrieving user info",
    ErrorCode.FETCH_FAILED: (
        "Error occurred during subscription data retrieval. Check the billing-id."
    ),
    ErrorCode.INACTIVE_OR_UNOWNED: (
        "Subscription is not active or is not owned by the logged-on user"
    ),
    ErrorCode.INVALID_TOKEN: INVALID_DATA,
    ErrorCode.MALFORMED_CLAIM: INVALID_DATA,
    ErrorCode.TOO_LONG: INVALID_DATA,
    ErrorCode.OUT_OF_RANGE: INVALID_DATA,
    ErrorCode.INVALID_KEY: "Oracle key material is invalid",
}


class OracleFailure(Exception):
    """Base for every failure the pipeline can report to a caller."""

    def __init__(self, code: ErrorCode, detail: str = ""):
        self.code = code
        self.detail = detail
        super().__init__(f"{code.value}: {detail}" if detail else code.value)

    @property
    def description(self) -> str:
        return DESCRIPTIONS[self.code]


class IdentityError(OracleFailure):
    pass


class PolicyError(OracleFailure):
    pass


class EncodingError(OracleFailure):
    pass


class SigningError(OracleFailure):
    pass


class ConfigError(Exception):
    """Startup configuration is missing or invalid. Fatal."""


@dataclass(frozen=True)
class OracleError:
    """Uniform caller-facing failure value."""

    code: ErrorCode
    error: str = ORACLE_ERROR
    error_description: str = ""

    @classmethod
    def from_failure(cls, failure: OracleFailure) -> "OracleError":
        return cls(code=failure.code, error_description=failure.description)

    def to_dict(self) -> dict:
        return {"error": self.error, "error_description": self.error_description}
