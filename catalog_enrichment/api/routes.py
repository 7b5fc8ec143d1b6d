import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from catalog_enrichment.core.config import settings
from catalog_enrichment.core.deadline import run_with_deadline
from catalog_enrichment.core.errors import EnrichmentError
from catalog_enrichment.models.schemas import (
    EnrichmentData,
    EnrichRequest,
    EnrichResponse,
    ErrorResponse,
    HealthResponse,
)
from catalog_enrichment.services.enrichment_service import EnrichmentService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_enrichment_service() -> EnrichmentService:
    return EnrichmentService(settings)


@router.post(
    "/enrich",
    response_model=EnrichResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
def enrich_product(request: EnrichRequest):
    """Enrich one catalog record with AI-derived metadata"""
    service = get_enrichment_service()

    try:
        outcome = run_with_deadline(
            lambda: service.enrich(request.product_id),
            timeout=settings.enrichment_timeout,
            retries=settings.enrichment_retries,
        )
    except EnrichmentError as e:
        logger.error("Enrichment of %s failed at %s: %s", request.product_id, e.phase, e.message)
        return JSONResponse(status_code=e.status_code, content=e.to_payload())
    except Exception as e:
        logger.exception("Unexpected error while enriching %s", request.product_id)
        return JSONResponse(status_code=500, content=EnrichmentError(str(e)).to_payload())

    return EnrichResponse(
        success=True,
        message="Product enriched successfully",
        data=EnrichmentData(
            category=outcome.category,
            sub_category=outcome.sub_category,
            style=outcome.style,
            material=outcome.ai_material,
            color=outcome.ai_color,
            dimensions=outcome.dimensions_text,
            confidence=outcome.confidence_score,
            status=outcome.enrichment_status,
        ),
    )


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        service="Catalog Enrichment API",
        version="1.0.0"
    )


@router.get("/")
def root():
    """API information and documentation links"""
    return {
        "service": "Catalog Enrichment API",
        "version": "1.0.0",
        "description": "AI-powered enrichment of catalog products into SEO-ready metadata",
        "docs": "/docs",
        "health": "/health"
    }
