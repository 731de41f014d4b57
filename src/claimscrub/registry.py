"""Provider registry capability used by NPI verification.

The engine never talks to the NPPES API itself; the surrounding system injects
a ``ProviderRegistry``. Lookups are bounded by a timeout so a slow registry
degrades NPI verification to a warning instead of stalling the run.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Literal

from pydantic import BaseModel

from .errors import RegistryUnavailableError

logger = logging.getLogger(__name__)

_LOOKUP_POOL = ThreadPoolExecutor(max_workers=4, thread_name_prefix="npi-registry")


class ProviderRecord(BaseModel):
    """Registry entry for a provider NPI."""

    npi: str
    name: str
    provider_type: Literal["individual", "organization"]
    status: Literal["active", "deactivated"] = "active"
    taxonomy_code: str | None = None
    specialty: str | None = None


class ProviderRegistry(ABC):
    """Read-only lookup of providers by NPI."""

    @abstractmethod
    def lookup(self, npi: str) -> ProviderRecord | None:
        """Return the provider for ``npi``, or None if the registry has none."""


class StaticProviderRegistry(ProviderRegistry):
    """Registry backed by an in-memory list of providers."""

    def __init__(self, providers: list[ProviderRecord]):
        self._providers = {p.npi: p for p in providers}

    def lookup(self, npi: str) -> ProviderRecord | None:
        return self._providers.get(npi)


SAMPLE_PROVIDERS = [
    ProviderRecord(
        npi="1234567893",
        name="Dr. Sarah Chen",
        provider_type="individual",
        taxonomy_code="207RH0003X",
        specialty="Hematology & Oncology",
    ),
    ProviderRecord(
        npi="1987654328",
        name="Memorial Health Oncology",
        provider_type="organization",
        taxonomy_code="282N00000X",
        specialty="General Acute Care Hospital",
    ),
]


def get_provider_registry() -> ProviderRegistry:
    """Registry used by the validation workflow."""
    return StaticProviderRegistry(SAMPLE_PROVIDERS)


def lookup_with_timeout(
    registry: ProviderRegistry, npi: str, timeout_seconds: float
) -> ProviderRecord | None:
    """Run a registry lookup, giving up after ``timeout_seconds``.

    Raises RegistryUnavailableError on timeout or when the registry errors.
    """
    future = _LOOKUP_POOL.submit(registry.lookup, npi)
    try:
        return future.result(timeout=timeout_seconds)
    except FuturesTimeoutError as e:
        future.cancel()
        logger.warning("NPI registry lookup for %s timed out after %.1fs", npi, timeout_seconds)
        raise RegistryUnavailableError(
            f"NPI registry did not respond within {timeout_seconds:g}s"
        ) from e
    except Exception as e:
        logger.warning("NPI registry lookup for %s failed: %s", npi, e)
        raise RegistryUnavailableError(f"NPI registry lookup failed: {e}") from e
