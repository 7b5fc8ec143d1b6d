from catalog_enrichment.models.schemas import TextAnalysis, VisionAnalysis

MAX_SCORE = 100
MAX_IMAGE_BONUS = 10

TEXT_WEIGHTS = {
    "sub_category": 15,
    "material": 10,
    "style": 10,
    "functionality": 10,
    "characteristics": 5,
    "dimensions_text": 10,
}

VISION_WEIGHTS = {
    "color_detected": 10,
    "material_detected": 5,
    "style_detected": 5,
}


def calculate_confidence_score(analysis: TextAnalysis, image_count: int, vision: VisionAnalysis) -> int:
    """Point-additive score of how much data was derived, capped at 100.

    A defaulted category (text analysis fallback) earns no category points.
    """
    score = 0

    if analysis.category and not analysis.fallback:
        score += 20
    for field, points in TEXT_WEIGHTS.items():
        if getattr(analysis, field):
            score += points
    for field, points in VISION_WEIGHTS.items():
        if getattr(vision, field):
            score += points

    if image_count > 0:
        score += min(image_count * 2, MAX_IMAGE_BONUS)

    return max(0, min(score, MAX_SCORE))
