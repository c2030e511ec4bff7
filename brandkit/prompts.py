"""
Prompt builders for every generation call in the workflow.

Prompts that chain creative decisions (strategy, USP, adjectives, scene) are
built from the source-language review text, never from the target-language
deliverable.
"""
from typing import List, Tuple

from .languages import language_name


LOGO_NEGATIVES = (
    "--- NEGATIVE INSTRUCTIONS: Do NOT include text, letters or words. "
    "AVOID bizarre, distorted or overly complex shapes. Do NOT use typography. "
    "Do NOT use any language other than the target language ({language})."
)

BANNER_NEGATIVES = (
    "--- NEGATIVE INSTRUCTIONS: Do NOT include ANY text in the image. "
    "AVOID distorted or bizarre shapes. "
    "Do NOT use any language other than the target language ({language})."
)

# (aspect ratio, orientation, palette, style)
BANNER_FORMATS: List[Tuple[str, str, str, str]] = [
    ("1:1", "square", "cohesive and professional", "Photographic"),
    ("9:16", "vertical", "dynamic and cohesive", "Dynamic"),
    ("4:3", "horizontal", "professional and cohesive", "Professional"),
]


def _target(code: str) -> str:
    return f"{language_name(code)} ({code})"


def media_plan_prompt(company_name: str, location: str, target_language: str) -> str:
    return (
        f'Research and present an initial media plan for the company "{company_name}".\n'
        "- Analyse the market niche.\n"
        "- Describe the main target audience (demographics, interests, online behaviour).\n"
        "- List the main media channels this audience consumes, focusing on platforms "
        f"popular in {location}.\n"
        "- Identify 3 current trends in the sector.\n"
        "- Suggest 3 content types that would perform well.\n"
        f"Present everything clearly and strategically, in the language {_target(target_language)}."
    )


def translation_prompt(text: str, source_language: str) -> str:
    return f"Translate the following text into {language_name(source_language)}:\n\n{text}"


def market_strategy_prompt(
    company_name: str,
    location: str,
    media_plan_source: str,
    target_language: str,
) -> str:
    return (
        f'Create a complete market strategy for the company "{company_name}" based on this information:\n'
        f"- Location: {location}\n"
        f"- Media plan: {media_plan_source}\n"
        "The strategy must include:\n"
        "- SWOT matrix (Strengths, Weaknesses, Opportunities, Threats).\n"
        f'- Competitor research: list the 3 main competitors in "{location}", analysing '
        "the strengths and weaknesses of each.\n"
        "- Unique Value Proposition (USP): clearly define what is unique about the company.\n"
        "- Paid traffic strategy: suggest platforms and approaches.\n"
        "- Initial monthly budget estimate (add a clear notice that these are estimated values).\n"
        f"Present the strategy in the language {_target(target_language)}."
    )


def usp_prompt(strategy_source: str) -> str:
    return (
        "Extract the Unique Value Proposition (USP) from the following text and return "
        f"ONLY the USP as one short sentence:\n\n{strategy_source}"
    )


def adjectives_prompt(strategy_source: str) -> str:
    return (
        f'Based on the strategy: "{strategy_source}", provide two contrasting adjectives '
        "for a brand (e.g. 'trustworthy', 'bold')."
    )


def scene_prompt(usp: str) -> str:
    return (
        f'Based on the USP: "{usp}", describe a simple visual scene for an advert in one '
        "sentence. Be concise. Example: 'A person smiling while using a product in a "
        "modern, well-lit setting.'"
    )


def logo_prompts(company_name: str, adj1: str, adj2: str, target_language: str) -> List[str]:
    negatives = LOGO_NEGATIVES.format(language=target_language)
    return [
        (
            f'Create a minimalist, modern logo icon for the company "{company_name}". '
            f"The style should convey {adj1}. Generate a harmonious, professional colour "
            "palette suited to the brand. The icon must be clean, vector style, centred on "
            f"a plain white background, in 1:1 proportion. {negatives}"
        ),
        (
            f'Create a bold, creative logo icon for the company "{company_name}". '
            f"The style should be {adj2}. Generate a unique, memorable colour palette. "
            "The design must be striking, centred on a plain white background, in 1:1 "
            f"proportion. {negatives}"
        ),
    ]


def fallback_scene(company_name: str) -> str:
    return f"A scene that represents the main benefit of {company_name}'s product or service."


def banner_prompts(company_name: str, scene: str, target_language: str) -> List[Tuple[str, str]]:
    """Return (aspect ratio, prompt) pairs in square, vertical, horizontal order."""
    negatives = BANNER_NEGATIVES.format(language=target_language)
    return [
        (
            ratio,
            f'Create an advertising banner in {ratio} ({orientation}) format for "{company_name}". '
            f"The scene should be: {scene}. Use a {palette} colour palette aligned with the "
            f"brand identity. {style} style. Leave a clean, prominent space for text. {negatives}",
        )
        for ratio, orientation, palette, style in BANNER_FORMATS
    ]
