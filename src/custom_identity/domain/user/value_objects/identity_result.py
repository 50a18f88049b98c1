"""Structured outcomes for expected store failures.

Concurrency conflicts and duplicate claims are part of normal operation, so
they are returned as an ``IdentityResult`` rather than raised.
"""

from dataclasses import dataclass
from enum import Enum

from custom_identity.domain.user.value_objects.claim import Claim


class IdentityErrorCode(str, Enum):
    """Stable error codes for callers branching on failures."""

    CONCURRENCY_FAILURE = "ConcurrencyFailure"
    DUPLICATE_CLAIM = "DuplicateClaim"
    INVALID_CLAIM = "InvalidClaim"


@dataclass(frozen=True)
class IdentityError:
    code: IdentityErrorCode
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of a store operation."""

    succeeded: bool
    errors: tuple[IdentityError, ...] = ()

    @classmethod
    def success(cls) -> "IdentityResult":
        return _SUCCESS

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        return cls(succeeded=False, errors=tuple(errors))

    @property
    def error_codes(self) -> list[IdentityErrorCode]:
        return [error.code for error in self.errors]

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        codes = ",".join(code.value for code in self.error_codes)
        return f"Failed : {codes}"


_SUCCESS = IdentityResult(succeeded=True)


class IdentityErrorDescriber:
    """Builds the errors placed in failed results.

    Subclass and assign to ``UserStoreSQLAlchemy.error_describer`` to change
    the wording.
    """

    def concurrency_failure(self) -> IdentityError:
        return IdentityError(
            code=IdentityErrorCode.CONCURRENCY_FAILURE,
            description="Optimistic concurrency failure, object has been modified.",
        )

    def duplicate_claim(self, claim: Claim) -> IdentityError:
        return IdentityError(
            code=IdentityErrorCode.DUPLICATE_CLAIM,
            description=f"User already has claim '{claim}'.",
        )

    def invalid_claim(self, claim_id: int) -> IdentityError:
        return IdentityError(
            code=IdentityErrorCode.INVALID_CLAIM,
            description=f"Claim {claim_id} does not exist.",
        )
