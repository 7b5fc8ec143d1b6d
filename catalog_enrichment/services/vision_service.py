import logging
from typing import List, Optional

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from catalog_enrichment.core.config import Settings
from catalog_enrichment.models.schemas import ImageReference, VisionAnalysis
from catalog_enrichment.prompt import VISION_PROMPT
from catalog_enrichment.services.response_parser import parse_ai_response

logger = logging.getLogger(__name__)

MAX_VISION_IMAGES = 2


def build_vision_llm(config: Settings) -> Optional[ChatGoogleGenerativeAI]:
    """Vision model client, or None when no vision key is configured."""
    if not config.google_api_key:
        return None
    return ChatGoogleGenerativeAI(
        model=config.gemini_model,
        google_api_key=config.google_api_key,
        temperature=config.vision_temperature,
        max_output_tokens=config.vision_max_tokens,
    )


def build_vision_message(images: List[ImageReference]) -> HumanMessage:
    content = [{"type": "text", "text": VISION_PROMPT}]
    for image in images[:MAX_VISION_IMAGES]:
        content.append({"type": "image_url", "image_url": {"url": image.src, "detail": "low"}})
    return HumanMessage(content=content)


def analyze_images(llm, images: List[ImageReference]) -> VisionAnalysis:
    """Describe the visible attributes of the product images.

    Best-effort: no model, no images, or any failure yields an empty VisionAnalysis.
    """
    if not images:
        logger.info("No images for vision analysis")
        return VisionAnalysis()

    if llm is None:
        logger.warning("Vision API key missing, skipping vision analysis")
        return VisionAnalysis()

    try:
        logger.info("Analyzing %d images", min(len(images), MAX_VISION_IMAGES))
        result = llm.invoke([build_vision_message(images)])
        parsed = parse_ai_response(_content_text(result.content))
        if parsed is None:
            return VisionAnalysis()
        analysis = VisionAnalysis.model_validate(parsed)
    except Exception as e:
        logger.error("Vision analysis failed: %s", e)
        return VisionAnalysis()

    logger.info(
        "Vision analysis completed: color=%s material=%s",
        analysis.color_detected, analysis.material_detected,
    )
    return analysis


def _content_text(content) -> str:
    # Chat models may return a list of content parts instead of a plain string
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return content or ""
