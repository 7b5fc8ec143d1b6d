from typing import Any, Dict, Optional


class EnrichmentError(Exception):
    """Failure that aborts an enrichment run and is reported to the caller."""

    kind = "enrichment_error"
    phase = "enrichment"
    status_code = 500

    def __init__(self, message: str, phase: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if phase:
            self.phase = phase

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.message,
            "kind": self.kind,
            "phase": self.phase,
        }


class ConfigurationError(EnrichmentError):
    kind = "configuration_error"
    phase = "configuration"


class ProductNotFoundError(EnrichmentError):
    kind = "not_found"
    phase = "product_fetch"
    status_code = 404


class CatalogStoreError(EnrichmentError):
    kind = "store_error"
    phase = "product_fetch"
    status_code = 502


class PersistenceError(EnrichmentError):
    kind = "persistence_error"
    phase = "database_update"


class EnrichmentTimeoutError(EnrichmentError):
    kind = "timeout"
    phase = "enrichment"
    status_code = 504


class CompletionError(Exception):
    """Transport failure of an inference service, after retries."""
