import logging
from typing import Any, Dict, List, Optional

import requests

from catalog_enrichment.core.config import Settings
from catalog_enrichment.core.errors import CatalogStoreError
from catalog_enrichment.models.schemas import CatalogRecord, ImageReference

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = (
    "id,title,description,product_type,vendor,enrichment_status,"
    "last_enriched_at,ai_color,ai_material,ai_vision_analysis"
)
IMAGE_COLUMNS = "src,alt_text,position"


class CatalogStore:
    """Reads and updates catalog records through the Supabase REST API."""

    def __init__(self, config: Settings, session: Optional[requests.Session] = None) -> None:
        self._base_url = (config.supabase_url or "").rstrip("/") + "/rest/v1"
        self._key = config.supabase_service_role_key
        self._products_table = config.products_table
        self._images_table = config.images_table
        self._timeout = config.request_timeout
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self._key or "",
            "Authorization": f"Bearer {self._key}",
            "accept": "application/json",
            "Content-Type": "application/json",
        }

    def _select(self, table: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        response = self._session.get(
            f"{self._base_url}/{table}",
            headers=self._headers(),
            params=params,
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()

    def get_product(self, product_id: str) -> Optional[CatalogRecord]:
        """Fetch one product by id, or None if it does not exist."""
        try:
            rows = self._select(
                self._products_table,
                {"id": f"eq.{product_id}", "select": PRODUCT_COLUMNS, "limit": 1},
            )
        except requests.exceptions.RequestException as e:
            raise CatalogStoreError(f"Failed to fetch product {product_id}: {e}") from e

        if not rows:
            return None
        try:
            return CatalogRecord.model_validate(rows[0])
        except (ValueError, TypeError) as e:
            raise CatalogStoreError(f"Malformed product row for {product_id}: {e}") from e

    def get_images(self, product_id: str, limit: int = 3) -> List[ImageReference]:
        """Fetch the first images of a product, ordered by position."""
        try:
            rows = self._select(
                self._images_table,
                {
                    "product_id": f"eq.{product_id}",
                    "select": IMAGE_COLUMNS,
                    "order": "position.asc",
                    "limit": limit,
                },
            )
        except requests.exceptions.RequestException as e:
            raise CatalogStoreError(f"Failed to fetch images for {product_id}: {e}") from e

        try:
            return [ImageReference.model_validate(row) for row in rows if row.get("src")]
        except (ValueError, TypeError, AttributeError) as e:
            raise CatalogStoreError(f"Malformed image rows for {product_id}: {e}") from e

    def update_enrichment(self, product_id: str, fields: Dict[str, Any]) -> None:
        """Apply a single partial update of the enrichment columns."""
        headers = self._headers()
        headers["Prefer"] = "return=minimal"
        try:
            response = self._session.patch(
                f"{self._base_url}/{self._products_table}",
                headers=headers,
                params={"id": f"eq.{product_id}"},
                json=fields,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise CatalogStoreError(f"Failed to update product {product_id}: {e}", phase="database_update") from e
