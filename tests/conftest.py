import json
from types import SimpleNamespace

import pytest

from catalog_enrichment.core.config import Settings
from catalog_enrichment.models.schemas import CatalogRecord, ImageReference
from catalog_enrichment.prompt import SEO_SYSTEM_PROMPT


class FakeStore:
    def __init__(self, product=None, images=None, images_error=None, update_error=None):
        self.product = product
        self.images = images or []
        self.images_error = images_error
        self.update_error = update_error
        self.updates = []

    def get_product(self, product_id):
        if self.product is None or self.product["id"] != product_id:
            return None
        return CatalogRecord.model_validate(self.product)

    def get_images(self, product_id, limit=3):
        if self.images_error:
            raise self.images_error
        return [ImageReference.model_validate(image) for image in self.images[:limit]]

    def update_enrichment(self, product_id, fields):
        if self.update_error:
            raise self.update_error
        self.updates.append((product_id, fields))


class FakeCompletion:
    """Answers analysis and SEO prompts; an Exception value is raised instead."""

    def __init__(self, analysis=None, seo=None):
        self.analysis = analysis
        self.seo = seo
        self.calls = []

    def complete(self, messages, max_tokens):
        kind = "seo" if messages[0]["content"] == SEO_SYSTEM_PROMPT else "analysis"
        self.calls.append((kind, max_tokens))
        reply = self.seo if kind == "seo" else self.analysis
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply or ""


class FakeVisionLLM:
    def __init__(self, reply=None):
        self.reply = reply
        self.messages = []

    def invoke(self, messages):
        self.messages.append(messages)
        if isinstance(self.reply, Exception):
            raise self.reply
        content = json.dumps(self.reply) if isinstance(self.reply, dict) else self.reply
        return SimpleNamespace(content=content)


@pytest.fixture
def config():
    return Settings(
        _env_file=None,
        supabase_url="https://catalog.example.supabase.co",
        supabase_service_role_key="service-key",
        deepseek_api_key="deepseek-key",
        google_api_key="google-key",
    )


@pytest.fixture
def product():
    return {
        "id": "prod-1",
        "title": "Lot de 3 coussins",
        "description": "<p>Lot de 3 coussins décoratifs, 45x45cm</p>",
        "product_type": "Coussin",
        "vendor": "Maison Douce",
        "enrichment_status": "pending",
        "ai_color": "beige",
        "ai_material": None,
        "ai_vision_analysis": "Ancienne analyse",
    }


@pytest.fixture
def images():
    return [
        {"src": "https://cdn.example.com/1.jpg", "alt_text": "front", "position": 1},
        {"src": "https://cdn.example.com/2.jpg", "alt_text": None, "position": 2},
    ]


@pytest.fixture
def analysis_reply():
    return {
        "category": "Coussin",
        "sub_category": "Coussin décoratif carré",
        "material": "coton",
        "color": "gris",
        "style": "Scandinave",
        "room": "Salon",
        "google_product_category": "Home & Garden > Decor > Throw Pillows",
        "keywords": ["coussin", "déco", "coussin", "salon"],
    }


@pytest.fixture
def seo_reply():
    return {
        "seo_title": "Coussin décoratif en coton style scandinave",
        "seo_description": "Apportez douceur et caractère à votre salon avec ce coussin en coton.",
    }


@pytest.fixture
def fake_store():
    return FakeStore


@pytest.fixture
def fake_completion():
    return FakeCompletion


@pytest.fixture
def fake_vision():
    return FakeVisionLLM
