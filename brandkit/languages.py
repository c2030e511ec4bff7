from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Language:
    name: str
    code: str


LANGUAGES: List[Language] = [
    Language(name="Português", code="pt-br"),
    Language(name="English", code="en"),
    Language(name="中文", code="zh"),
    Language(name="日本語", code="ja"),
    Language(name="Русский", code="ru"),
    Language(name="Cebuano", code="ceb"),
    Language(name="Tagalog", code="tl"),
]

DEFAULT_SOURCE_LANGUAGE = LANGUAGES[0].code
DEFAULT_TARGET_LANGUAGE = LANGUAGES[1].code


def is_supported(code: str) -> bool:
    return any(lang.code == code for lang in LANGUAGES)


def language_name(code: str) -> str:
    """Display name for a language code, or the code itself if unknown."""
    for lang in LANGUAGES:
        if lang.code == code:
            return lang.name
    return code
