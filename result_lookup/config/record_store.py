"""
Record store connection settings and environment diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from result_lookup.config import Settings

REQUIRED_VARIABLES = ("SUPABASE_URL", "SUPABASE_ANON_KEY")

CONFIGURED = "Configured"
MISSING = "Missing"

ALL_CONFIGURED_MESSAGE = "All required environment variables are configured correctly."
SOME_MISSING_MESSAGE = "Some environment variables are missing. Please check your configuration."


@dataclass(frozen=True)
class RecordStoreConfig:
    """
    Explicit connection parameters for the record store.

    Injected into the client instead of being looked up from the
    environment at query time.
    """
    endpoint: str
    credential: str
    timeout_seconds: float = 15.0

    @property
    def is_complete(self) -> bool:
        return bool(self.endpoint) and bool(self.credential)

    @staticmethod
    def from_settings(settings: Settings) -> "RecordStoreConfig":
        return RecordStoreConfig(
            endpoint=(settings.SUPABASE_URL or "").strip().rstrip("/"),
            credential=(settings.SUPABASE_ANON_KEY or "").strip(),
            timeout_seconds=settings.RECORD_STORE_TIMEOUT_SECONDS,
        )


@dataclass(frozen=True)
class EnvironmentStatus:
    variables: Dict[str, str]

    @property
    def all_configured(self) -> bool:
        return all(status == CONFIGURED for status in self.variables.values())

    @property
    def message(self) -> str:
        return ALL_CONFIGURED_MESSAGE if self.all_configured else SOME_MISSING_MESSAGE

    def missing(self) -> list[str]:
        return [name for name, status in self.variables.items() if status == MISSING]


def _is_set(value: Optional[str]) -> bool:
    return bool((value or "").strip())


def check_environment(settings: Settings) -> EnvironmentStatus:
    """Report which required connection variables are present. Values are never exposed."""
    variables = {
        name: CONFIGURED if _is_set(getattr(settings, name, None)) else MISSING
        for name in REQUIRED_VARIABLES
    }
    return EnvironmentStatus(variables=variables)
