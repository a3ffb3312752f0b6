import pytest

from app.ai.prompts import (
    LENGTH_INSTRUCTIONS,
    LENGTH_MAX_TOKENS,
    SYSTEM_DIRECTIVE,
    TONE_INSTRUCTIONS,
    build_prompt,
)


def test_tables_cover_every_option():
    assert set(LENGTH_MAX_TOKENS) == {"short", "medium", "detailed"}
    assert set(LENGTH_INSTRUCTIONS) == set(LENGTH_MAX_TOKENS)
    assert set(TONE_INSTRUCTIONS) == {"neutral", "formal", "casual", "technical", "simple"}


def test_size_hint_grows_with_length():
    short, medium, detailed = (build_prompt("x", length=l).max_tokens for l in ("short", "medium", "detailed"))
    assert short < medium < detailed
    assert short == 256 and detailed == 1536


@pytest.mark.parametrize("tone", sorted(TONE_INSTRUCTIONS))
def test_tone_instruction_appended_to_system_text(tone):
    p = build_prompt("some text", tone=tone)
    assert p.system_text.startswith(SYSTEM_DIRECTIVE)
    assert p.system_text.endswith(TONE_INSTRUCTIONS[tone])


def test_user_text_carries_raw_note():
    html = "<h2>Groceries</h2><ul><li>milk</li></ul>"
    p = build_prompt(html, length="short")
    assert html in p.user_text
    assert LENGTH_INSTRUCTIONS["short"] in p.system_text


def test_defaults_are_medium_and_neutral():
    p = build_prompt("x")
    assert p.max_tokens == LENGTH_MAX_TOKENS["medium"]
    assert TONE_INSTRUCTIONS["neutral"] in p.system_text


def test_unknown_options_rejected():
    with pytest.raises(ValueError):
        build_prompt("x", length="epic")
    with pytest.raises(ValueError):
        build_prompt("x", tone="sarcastic")
