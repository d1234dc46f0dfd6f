from core.services.text_decoding import (
    decode_escape_sequences,
    decode_html_entities,
    encode_html_entities,
    normalize_caption,
    scrub_surrogates,
)


def test_decodes_basic_entities():
    raw = "&quot;quoted&quot; &amp; &lt;tag&gt; it&#039;s"
    assert decode_html_entities(raw) == "\"quoted\" & <tag> it's"


def test_entity_decoding_leaves_plain_text_unchanged():
    text = "Plain caption with no entities: 100% fun <3 & friends"
    assert decode_html_entities(text) == text
    assert decode_html_entities(decode_html_entities("a &amp; b")) == "a & b"


def test_decodes_literal_newlines():
    assert decode_escape_sequences("line one\\nline two") == "line one\nline two"


def test_decodes_unicode_escapes():
    assert decode_escape_sequences("\\u0041\\u0042") == "AB"


def test_decodes_surrogate_pairs_into_emoji():
    assert decode_escape_sequences("fire \\ud83d\\udd25") == "fire \U0001F525"


def test_lone_surrogate_does_not_raise():
    out = decode_escape_sequences("x\\ud83dy")
    assert out.startswith("x") and out.endswith("y")


def test_normalize_caption_pipeline():
    assert normalize_caption("  Hello &amp; welcome\\n\\u2764  ") == "Hello & welcome\n❤"


def test_normalize_caption_empty_values():
    assert normalize_caption(None) == ""
    assert normalize_caption("   \\n  ") == ""


def test_bare_ampersands_are_not_entities():
    text = "Salt&pepper &copy2024 rock&not roll"
    assert decode_html_entities(text) == text
    assert normalize_caption(text) == text


def test_entities_decode_in_a_single_pass():
    assert decode_html_entities("&amp;lt;") == "&lt;"
    assert decode_html_entities("&amp;amp;") == "&amp;"


def test_encode_is_the_inverse_of_decode():
    text = "<b>\"Tom & Jerry's\"</b>"
    assert encode_html_entities(text) == "&lt;b&gt;&quot;Tom &amp; Jerry&#039;s&quot;&lt;/b&gt;"
    assert decode_html_entities(encode_html_entities(text)) == text


def test_lone_surrogates_become_replacement_char():
    assert scrub_surrogates("hi \ud83d there") == "hi \ufffd there"
    assert normalize_caption("hi \ud83d there") == "hi \ufffd there"
    assert scrub_surrogates("fire \U0001F525") == "fire \U0001F525"
    normalize_caption("x \udd25 y").encode("utf-8")
