"""Claim persistence capability.

The engine reads claims and writes validation runs through a ``ClaimStore``.
``InMemoryClaimStore`` backs the workflow and the tests; production callers
inject their own implementation.
"""

import threading
from abc import ABC, abstractmethod
from functools import lru_cache

from .errors import ClaimNotFoundError
from .schemas.claim import Claim
from .schemas.validation import ClaimValidation


class ClaimStore(ABC):
    @abstractmethod
    def get_claim(self, claim_id: str) -> Claim | None:
        """Claim with its service lines, or None if it does not exist."""

    @abstractmethod
    def save_claim(self, claim: Claim) -> None:
        """Insert or overwrite a claim."""

    @abstractmethod
    def replace_validation(self, validation: ClaimValidation) -> None:
        """Atomically replace the claim's validation run, score and status.

        Raises ClaimNotFoundError if the claim does not exist.
        """

    @abstractmethod
    def get_validation(self, claim_id: str) -> ClaimValidation | None:
        """Most recent validation run for the claim, if any."""


class InMemoryClaimStore(ClaimStore):
    """Process-local store. One lock serializes writes; last write wins."""

    def __init__(self, claims: list[Claim] | None = None):
        self._lock = threading.Lock()
        self._claims: dict[str, Claim] = {}
        self._validations: dict[str, ClaimValidation] = {}
        for claim in claims or []:
            self.save_claim(claim)

    def get_claim(self, claim_id: str) -> Claim | None:
        with self._lock:
            claim = self._claims.get(claim_id)
            return claim.model_copy(deep=True) if claim is not None else None

    def save_claim(self, claim: Claim) -> None:
        with self._lock:
            self._claims[claim.id] = claim.model_copy(deep=True)

    def replace_validation(self, validation: ClaimValidation) -> None:
        with self._lock:
            claim = self._claims.get(validation.claim_id)
            if claim is None:
                raise ClaimNotFoundError(validation.claim_id)
            self._claims[claim.id] = claim.model_copy(
                update={"score": validation.score, "status": validation.status}
            )
            self._validations[claim.id] = validation.model_copy(deep=True)

    def get_validation(self, claim_id: str) -> ClaimValidation | None:
        with self._lock:
            validation = self._validations.get(claim_id)
            return validation.model_copy(deep=True) if validation is not None else None


@lru_cache(maxsize=1)
def get_claim_store() -> ClaimStore:
    """Store shared by workflow runs in this process."""
    return InMemoryClaimStore()
