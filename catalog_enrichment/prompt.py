from catalog_enrichment.models.schemas import CatalogRecord, TextAnalysis

NOT_SPECIFIED = "Not specified"

TEXT_ANALYSIS_SYSTEM_PROMPT = (
    "You are an e-commerce product analysis expert. "
    "Reply ONLY with valid JSON, without any additional text."
)

SEO_SYSTEM_PROMPT = "SEO expert. Reply ONLY with valid JSON."


def build_text_analysis_prompt(product: CatalogRecord, clean_description: str, max_length: int = 800) -> str:
    return f"""You are an e-commerce product analysis expert. Analyze the following product and extract structured data.

PRODUCT:
Title: {product.title}
Description: {(clean_description or "No description provided")[:max_length]}
Type: {product.product_type or NOT_SPECIFIED}
Brand: {product.vendor or NOT_SPECIFIED}

CRITICAL INSTRUCTIONS:
1. Reply ONLY with valid JSON, no additional text
2. IGNORE any mention of quantity (lot, set, pack, bundle, X pieces)
3. Focus on the attributes of ONE SINGLE product
4. Use the language of the product title for every field (except google_product_category)
5. Extract ALL dimensions mentioned

EXPECTED JSON FORMAT:
{{
  "category": "Main category (e.g. 'Chair', 'Table', 'Sofa')",
  "sub_category": "Detailed sub-category (e.g. 'Metal bar stool', 'Wooden coffee table')",
  "functionality": "Key functionality (e.g. 'Convertible', 'With storage', 'Adjustable')",
  "characteristics": "Technical characteristics separated by commas",
  "material": "Main material identified",
  "color": "Main color if mentioned",
  "style": "Design style (e.g. 'Modern', 'Scandinavian', 'Industrial', 'Minimalist')",
  "room": "Room of use (e.g. 'Living room', 'Bedroom', 'Kitchen', 'Office')",
  "google_product_category": "FULL Google Shopping category in English (e.g. 'Home & Garden > Furniture > Chairs > Bar Stools')",
  "keywords": ["list", "of", "10-15", "relevant", "SEO", "keywords"],
  "dimensions_text": "Readable dimensions (e.g. 'Height: 85 cm, Width: 45 cm, Depth: 50 cm')",
  "dimensions_source": "title or description or ai_inference"
}}

DIMENSION EXTRACTION:
- Look for patterns such as "120x80", "L120 x W80 x H45", "Ø60", "height 85 cm"
- Include ALL dimensions found (height, width, depth, diameter, weight)
- Format them readably: "Height: 85 cm, Width: 45 cm"

Reply ONLY with the JSON, nothing else."""


VISION_PROMPT = """STRICT VISUAL ANALYSIS - You are analyzing IMAGES of a product.

ABSOLUTE RULES:
1. You see ONE SINGLE UNIT of the product in the image
2. You have NO context about the title, the description or the packaging
3. You describe ONLY what is VISUALLY OBSERVABLE
4. FORBIDDEN: mentioning "lot", "set", "bundle", "pack", or any number of pieces
5. FORBIDDEN: naming the type of object (no "chair", "table", "sofa")
6. ALLOWED: colors, textures, materials, finishes, visual style

REPLY IN JSON:
{
  "color_detected": "Main observed color(s)",
  "material_detected": "Visible material(s): wood, metal, fabric, leather, glass, plastic",
  "style_detected": "Visual style: Modern, Scandinavian, Industrial, Classic, Contemporary, Minimalist",
  "visual_description": "Concise description (1-2 sentences) of the visual attributes of ONE unit"
}

CORRECT: "Light grey upholstered fabric, matte black metal frame, clean lines"
FORBIDDEN: "Set of 4 chairs", "Furniture bundle", "Pack of 2 stools"
"""


def build_seo_prompt(product: CatalogRecord, analysis: TextAnalysis) -> str:
    return f"""Generate an optimized SEO title and meta description.

PRODUCT:
Title: {product.title}
Category: {analysis.category or ''}
Material: {analysis.material or ''}
Style: {analysis.style or ''}

REQUIREMENTS:
1. seo_title: 50-60 characters max
2. seo_description: 140-155 characters max
3. Language: same language as the title
4. DO NOT repeat the exact title
5. DO NOT mention quantity (lot, set, pack, X pieces)
6. Include: category + material/style + key benefit

REPLY IN JSON:
{{
  "seo_title": "Optimized SEO title",
  "seo_description": "Attractive SEO description with a subtle call to action"
}}"""
