import logging

from pydantic import ValidationError

from catalog_enrichment.core.config import Settings
from catalog_enrichment.core.errors import CompletionError
from catalog_enrichment.models.schemas import CatalogRecord, SeoContent, TextAnalysis
from catalog_enrichment.prompt import (
    SEO_SYSTEM_PROMPT,
    TEXT_ANALYSIS_SYSTEM_PROMPT,
    build_seo_prompt,
    build_text_analysis_prompt,
)
from catalog_enrichment.services.completion_client import CompletionClient
from catalog_enrichment.services.response_parser import parse_ai_response

logger = logging.getLogger(__name__)


def analyze_text(
    client: CompletionClient,
    product: CatalogRecord,
    clean_description: str,
    config: Settings,
) -> TextAnalysis:
    """Extract category and attributes from the product text.

    Never raises: transport or parse failures yield TextAnalysis.minimal().
    """
    logger.info("Starting text analysis for product %s", product.id)
    messages = [
        {"role": "system", "content": TEXT_ANALYSIS_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": build_text_analysis_prompt(product, clean_description, config.description_max_length),
        },
    ]

    try:
        content = client.complete(messages, max_tokens=config.analysis_max_tokens)
    except CompletionError as e:
        logger.error("Text analysis failed, using defaults: %s", e)
        return TextAnalysis.minimal(product.product_type)

    parsed = parse_ai_response(content)
    if parsed is None:
        logger.error("Failed to parse text analysis, using defaults")
        return TextAnalysis.minimal(product.product_type)

    parsed.pop("fallback", None)
    try:
        analysis = TextAnalysis.model_validate(parsed)
    except ValidationError as e:
        logger.error("Text analysis did not match the expected schema, using defaults: %s", e)
        return TextAnalysis.minimal(product.product_type)

    logger.info(
        "Text analysis parsed: category=%s material=%s style=%s",
        analysis.category, analysis.material, analysis.style,
    )
    return analysis


def generate_seo(
    client: CompletionClient,
    product: CatalogRecord,
    analysis: TextAnalysis,
    config: Settings,
) -> SeoContent:
    """Ask for an SEO title and meta description; empty SeoContent on failure."""
    logger.info("Generating SEO content for product %s", product.id)
    messages = [
        {"role": "system", "content": SEO_SYSTEM_PROMPT},
        {"role": "user", "content": build_seo_prompt(product, analysis)},
    ]

    try:
        content = client.complete(messages, max_tokens=config.seo_max_tokens)
    except CompletionError as e:
        logger.error("SEO generation failed: %s", e)
        return SeoContent()

    parsed = parse_ai_response(content)
    if parsed is None:
        return SeoContent()

    try:
        seo = SeoContent.model_validate(parsed)
    except ValidationError as e:
        logger.error("SEO content did not match the expected schema: %s", e)
        return SeoContent()

    logger.info("SEO content generated")
    return seo
