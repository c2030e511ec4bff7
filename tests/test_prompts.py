from brandkit import prompts
from brandkit.languages import LANGUAGES, is_supported, language_name


def test_banner_prompts_are_square_vertical_horizontal():
    pairs = prompts.banner_prompts("Acme", "A rocket at dawn.", "ja")

    assert [ratio for ratio, _ in pairs] == ["1:1", "9:16", "4:3"]
    assert "(square)" in pairs[0][1]
    assert "(vertical)" in pairs[1][1]
    assert "(horizontal)" in pairs[2][1]
    for _, prompt in pairs:
        assert "A rocket at dawn." in prompt
        assert "Do NOT include ANY text" in prompt
        assert "(ja)" in prompt


def test_logo_prompts_forbid_typography():
    first, second = prompts.logo_prompts("Acme", "bold", "calm", "en")

    assert "convey bold" in first
    assert "should be calm" in second
    assert all("Do NOT use typography" in p for p in (first, second))


def test_translation_prompt_uses_language_name():
    assert prompts.translation_prompt("Olá", "ru").startswith("Translate the following text into Русский")


def test_language_table():
    assert [lang.code for lang in LANGUAGES] == ["pt-br", "en", "zh", "ja", "ru", "ceb", "tl"]
    assert is_supported("tl")
    assert not is_supported("fr")
    assert language_name("fr") == "fr"
