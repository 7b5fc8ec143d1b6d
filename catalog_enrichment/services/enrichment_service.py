import concurrent.futures
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from catalog_enrichment.core.config import Settings, check_configuration, settings
from catalog_enrichment.core.errors import CatalogStoreError, PersistenceError, ProductNotFoundError
from catalog_enrichment.models.schemas import (
    CatalogRecord,
    EnrichmentOutcome,
    ImageReference,
    MAX_KEYWORDS,
    SeoContent,
    TextAnalysis,
    VisionAnalysis,
)
from catalog_enrichment.services.catalog_store import CatalogStore
from catalog_enrichment.services.completion_client import CompletionClient
from catalog_enrichment.services.scoring import calculate_confidence_score
from catalog_enrichment.services.text_analysis import analyze_text, generate_seo
from catalog_enrichment.services.text_processing import extract_dimensions, sanitize_description, truncate
from catalog_enrichment.services.vision_service import analyze_images, build_vision_llm

logger = logging.getLogger(__name__)

MAX_LOADED_IMAGES = 3
SEO_DESCRIPTION_LIMIT = 155
ENRICHED = "enriched"

_UNSET = object()


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def first_present(*values: Optional[str]) -> str:
    """Return the first non-blank value, or an empty string."""
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def merge_tags(keywords: List[str]) -> str:
    unique = list(dict.fromkeys(k.strip() for k in keywords if k and k.strip()))
    return ", ".join(unique[:MAX_KEYWORDS])


def fill_dimensions(analysis: TextAnalysis, product: CatalogRecord, clean_description: str) -> TextAnalysis:
    """Use regex-extracted dimensions only when the analysis has none."""
    if analysis.dimensions_text:
        return analysis
    found = extract_dimensions(product.title, clean_description)
    if found is None:
        return analysis
    logger.info("Dimensions extracted with regex")
    return analysis.model_copy(update={"dimensions_text": found.text, "dimensions_source": found.source})


def merge_outcome(
    product: CatalogRecord,
    analysis: TextAnalysis,
    vision: VisionAnalysis,
    seo: SeoContent,
    clean_description: str,
    image_count: int,
    config: Settings,
) -> EnrichmentOutcome:
    """Combine every source; per field, vision wins over text, text over stored values."""
    return EnrichmentOutcome(
        category=first_present(analysis.category),
        sub_category=first_present(analysis.sub_category),
        functionality=first_present(analysis.functionality),
        characteristics=first_present(analysis.characteristics),
        style=first_present(vision.style_detected, analysis.style),
        room=first_present(analysis.room),
        google_product_category=first_present(analysis.google_product_category, config.default_taxonomy),
        google_brand=first_present(product.vendor),
        seo_title=first_present(seo.seo_title, product.title),
        seo_description=first_present(seo.seo_description, truncate(clean_description, SEO_DESCRIPTION_LIMIT)),
        tags=merge_tags(analysis.keywords),
        ai_vision_analysis=first_present(vision.visual_description, product.ai_vision_analysis),
        ai_color=first_present(vision.color_detected, analysis.color, product.ai_color),
        ai_material=first_present(vision.material_detected, analysis.material, product.ai_material),
        dimensions_text=analysis.dimensions_text or None,
        dimensions_source=analysis.dimensions_source or None,
        confidence_score=calculate_confidence_score(analysis, image_count, vision),
        enrichment_status=ENRICHED,
        last_enriched_at=_utc_now_iso(),
        seo_synced_to_shopify=False,
    )


def _settle(future: concurrent.futures.Future, default, label: str):
    try:
        return future.result()
    except Exception as e:
        logger.error("%s failed, degrading to empty result: %s", label, e)
        return default


class EnrichmentService:
    """Runs one enrichment of one catalog record.

    Collaborators are created from the settings unless injected.
    """

    def __init__(
        self,
        config: Settings = settings,
        store: Optional[CatalogStore] = None,
        completion: Optional[CompletionClient] = None,
        vision_llm: Any = _UNSET,
    ) -> None:
        self.config = config
        self._store = store
        self._completion = completion
        self._vision_llm = vision_llm

    def _collaborators(self):
        store = self._store or CatalogStore(self.config)
        completion = self._completion or CompletionClient(self.config)
        vision_llm = build_vision_llm(self.config) if self._vision_llm is _UNSET else self._vision_llm
        return store, completion, vision_llm

    def _load_images(self, store: CatalogStore, product_id: str) -> List[ImageReference]:
        try:
            images = store.get_images(product_id, limit=MAX_LOADED_IMAGES)
        except (CatalogStoreError, ValueError) as e:
            logger.warning("Could not load images for %s, continuing without: %s", product_id, e)
            return []
        logger.info("Found %d images", len(images))
        return images[:MAX_LOADED_IMAGES]

    def enrich(self, product_id: str) -> EnrichmentOutcome:
        check_configuration(self.config)
        store, completion, vision_llm = self._collaborators()

        logger.info("Starting enrichment of product %s", product_id)
        product = store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product not found: {product_id}")
        logger.info("Product found: %s", product.title)

        images = self._load_images(store, product_id)
        clean_description = sanitize_description(product.description)

        analysis = analyze_text(completion, product, clean_description, self.config)
        analysis = fill_dimensions(analysis, product, clean_description)

        # Vision and SEO are independent; each degrades on its own
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
            vision_future = executor.submit(analyze_images, vision_llm, images)
            seo_future = executor.submit(generate_seo, completion, product, analysis, self.config)
            vision = _settle(vision_future, VisionAnalysis(), "Vision analysis")
            seo = _settle(seo_future, SeoContent(), "SEO generation")

        outcome = merge_outcome(product, analysis, vision, seo, clean_description, len(images), self.config)
        logger.info(
            "Final data fusion: color=%s material=%s style=%s confidence=%d",
            outcome.ai_color, outcome.ai_material, outcome.style, outcome.confidence_score,
        )

        self._persist(store, product_id, outcome)
        logger.info("Enrichment of product %s completed", product_id)
        return outcome

    def _persist(self, store: CatalogStore, product_id: str, outcome: EnrichmentOutcome) -> None:
        fields: Dict[str, Any] = outcome.model_dump()
        try:
            store.update_enrichment(product_id, fields)
        except CatalogStoreError as e:
            logger.error("Database update failed: %s", e)
            raise PersistenceError(f"Database update failed: {e.message}") from e
