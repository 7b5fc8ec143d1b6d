from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

MAX_KEYWORDS = 15
UNCATEGORIZED = "uncategorized"


def _flatten_text(value):
    """Accept a string, a list of strings, or nothing, and return a string or None."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [str(v).strip() for v in value if v is not None and str(v).strip()]
        return ", ".join(parts) or None
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ImageReference(BaseModel):
    src: str
    alt_text: Optional[str] = None
    position: Optional[int] = None


class CatalogRecord(BaseModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    enrichment_status: Optional[str] = None
    last_enriched_at: Optional[str] = None
    ai_color: Optional[str] = None
    ai_material: Optional[str] = None
    ai_vision_analysis: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value) if value is not None else value

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_null(cls, value):
        return value or ""


class TextAnalysis(BaseModel):
    category: Optional[str] = None
    sub_category: Optional[str] = None
    functionality: Optional[str] = None
    characteristics: Optional[str] = None
    material: Optional[str] = None
    color: Optional[str] = None
    style: Optional[str] = None
    room: Optional[str] = None
    google_product_category: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    dimensions_text: Optional[str] = None
    dimensions_source: Optional[str] = None
    # Set when the AI result was unusable and the minimal default was substituted
    fallback: bool = False

    @field_validator(
        "category", "sub_category", "functionality", "characteristics",
        "material", "color", "style", "room", "google_product_category",
        "dimensions_text", "dimensions_source",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return _flatten_text(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple)):
            return []
        keywords = []
        for item in value:
            if item is None:
                continue
            keyword = str(item).strip()
            if keyword and keyword not in keywords:
                keywords.append(keyword)
        return keywords[:MAX_KEYWORDS]

    @classmethod
    def minimal(cls, product_type: Optional[str] = None) -> "TextAnalysis":
        return cls(category=product_type or UNCATEGORIZED, fallback=True)


class VisionAnalysis(BaseModel):
    color_detected: Optional[str] = None
    material_detected: Optional[str] = None
    style_detected: Optional[str] = None
    visual_description: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return _flatten_text(value)


class SeoContent(BaseModel):
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return _flatten_text(value)


class EnrichmentOutcome(BaseModel):
    category: str = ""
    sub_category: str = ""
    functionality: str = ""
    characteristics: str = ""
    style: str = ""
    room: str = ""
    google_product_category: str = ""
    google_brand: str = ""
    seo_title: str = ""
    seo_description: str = ""
    tags: str = ""
    ai_vision_analysis: str = ""
    ai_color: str = ""
    ai_material: str = ""
    dimensions_text: Optional[str] = None
    dimensions_source: Optional[str] = None
    confidence_score: int = Field(default=0, ge=0, le=100)
    enrichment_status: str = "enriched"
    last_enriched_at: str = ""
    seo_synced_to_shopify: bool = False


class EnrichRequest(BaseModel):
    product_id: str = Field(min_length=1, description="Identifier of the catalog record to enrich")


class EnrichmentData(BaseModel):
    category: str
    sub_category: str
    style: str
    material: str
    color: str
    dimensions: Optional[str] = None
    confidence: int
    status: str


class EnrichResponse(BaseModel):
    success: bool
    message: str
    data: EnrichmentData


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    kind: str
    phase: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
