from catalog_enrichment.services.response_parser import parse_ai_response


def test_parses_plain_json():
    assert parse_ai_response('{"category": "Chaise"}') == {"category": "Chaise"}


def test_recovers_json_fenced_block():
    content = 'Voici le résultat :\n```json\n{"category": "Table", "keywords": ["bois"]}\n```\nMerci'
    assert parse_ai_response(content) == {"category": "Table", "keywords": ["bois"]}


def test_recovers_bare_fenced_block():
    content = '```\n{"seo_title": "Table basse en chêne"}\n```'
    assert parse_ai_response(content) == {"seo_title": "Table basse en chêne"}


def test_recovers_brace_span_in_prose():
    content = 'Sure! Here is the analysis: {"color_detected": "charcoal"} Hope this helps.'
    assert parse_ai_response(content) == {"color_detected": "charcoal"}


def test_strips_control_characters():
    content = '\x00{"material": \x07"metal"}\x1f'
    assert parse_ai_response(content) == {"material": "metal"}


def test_empty_and_whitespace_return_none():
    assert parse_ai_response("") is None
    assert parse_ai_response("   \n\t ") is None
    assert parse_ai_response(None) is None


def test_unparseable_returns_none():
    assert parse_ai_response("I cannot help with that.") is None
    assert parse_ai_response("{not json at all}") is None


def test_non_object_json_is_rejected():
    assert parse_ai_response('["a", "b"]') is None
    assert parse_ai_response("42") is None
