from catalog_enrichment.services.text_processing import extract_dimensions, sanitize_description


def test_sanitize_removes_french_quantity_phrase():
    assert sanitize_description("Lot de 3 coussins décoratifs, 45x45cm") == "coussins décoratifs, 45x45cm"


def test_sanitize_strips_markup_and_whitespace():
    html = "<p>Chaise   en <b>chêne</b></p>\n<br/>massif"
    assert sanitize_description(html) == "Chaise en chêne massif"


def test_sanitize_removes_english_quantity_phrases():
    text = "Pack of 4 stools. Includes 4 pieces in black. Quantity: 4 per order"
    cleaned = sanitize_description(text)
    assert "4" not in cleaned
    assert "stools" in cleaned
    assert "black" in cleaned


def test_sanitize_keeps_dimensions():
    assert sanitize_description("Set 2 tabourets 40 x 40 x 75 cm") == "tabourets 40 x 40 x 75 cm"


def test_sanitize_empty_description():
    assert sanitize_description(None) == ""
    assert sanitize_description("") == ""


def test_dimensions_from_description():
    found = extract_dimensions("Lot de 3 coussins", "coussins décoratifs, 45x45cm")
    assert found.text == "45x45cm"
    assert found.source == "description"


def test_dimensions_from_title():
    found = extract_dimensions("Table basse 120 x 60 x 45 cm", "Plateau en chêne")
    assert found.text == "120 x 60 x 45 cm"
    assert found.source == "title"


def test_labeled_dimensions_are_collected_and_deduplicated():
    description = "Height: 85 cm, width: 45cm. Hauteur: 85 cm. Diameter 30 mm, ø 60 cm. Height: 85 cm"
    found = extract_dimensions("Lampe", description)
    assert found.text == "height: 85 cm, width: 45cm, hauteur: 85 cm, diameter 30 mm, ø 60 cm"
    assert found.source == "description"


def test_no_dimensions():
    assert extract_dimensions("Vase", "Un joli vase bleu") is None
