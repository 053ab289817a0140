"""
Description composition: turn matched properties into output strings.

Two renderers share the same category order and gating:

- :func:`render_audio` builds a space-separated stream of police scanner
  audio file basenames.
- :func:`render_text` builds an English sentence fragment.

Categories are always emitted in the order RaceSex, Build, Hair, Clothing,
whatever order the properties were matched in. A category missing from the
mask is skipped and a category with no matched properties produces nothing.
Extras are never rendered.
"""

from typing import Iterable

from .models import CategoryMask, DescriptionProperty, PropertyCategory, properties_in


AUDIO_LEAD_IN = "A_WITHOUT_HESITATION"
AUDIO_PAUSE = "200MS_SILENCE"
AUDIO_WITH = "WITH"
AUDIO_WEARING = "WEARING"

# Clothing phrases that read wrong with "a " in front of them.
NO_ARTICLE_WORDS = ("pants", "shorts", "jeans", "sneakers", "shoes", "boots", "tracksuit")
TITLE_CASE_WORDS = ("hispanic", "asian")


def render_audio(properties: Iterable[DescriptionProperty], categories: CategoryMask) -> str:
    """
    Render matched properties as audio tokens.

    Example:
        >>> render_audio(props, category_mask("RaceSex", "Clothing"))
        'A_WITHOUT_HESITATION MALE 200MS_SILENCE WEARING  CLOTHING_DARK_JEANS 200MS_SILENCE'
    """
    properties = list(properties)
    output: list[str] = []

    if PropertyCategory.RACE_SEX in categories:
        race_sex = properties_in(properties, PropertyCategory.RACE_SEX)
        # Only one race/sex is ever described.
        if race_sex:
            output.append(f"{AUDIO_LEAD_IN} {race_sex[0].audio} ")

    if PropertyCategory.BUILD in categories:
        for prop in properties_in(properties, PropertyCategory.BUILD):
            output.append(f"{AUDIO_PAUSE} {prop.audio} ")

    if PropertyCategory.HAIR in categories:
        for prop in properties_in(properties, PropertyCategory.HAIR):
            output.append(f"{AUDIO_PAUSE} {AUDIO_WITH} {prop.audio} ")

    if PropertyCategory.CLOTHING in categories:
        clothing = properties_in(properties, PropertyCategory.CLOTHING)
        if clothing:
            output.append(f"{AUDIO_PAUSE} {AUDIO_WEARING} ")
            for prop in clothing:
                output.append(f" {prop.audio} {AUDIO_PAUSE} ")

    return "".join(output).rstrip()


def _race_sex_phrase(text: str) -> str:
    if any(word in text for word in TITLE_CASE_WORDS):
        return text[:1].upper() + text[1:]
    return text


def _needs_article(text: str) -> bool:
    lowered = text.lower()
    if lowered.startswith("no"):
        return False
    return not any(word in lowered for word in NO_ARTICLE_WORDS)


def render_text(properties: Iterable[DescriptionProperty], categories: CategoryMask) -> str:
    """
    Render matched properties as a human-readable description.

    Example:
        >>> render_text(props, category_mask("RaceSex", "Clothing"))
        'Hispanic male wearing dark jeans, a leather jacket'
    """
    properties = list(properties)
    output = ""

    if PropertyCategory.RACE_SEX in categories:
        race_sex = properties_in(properties, PropertyCategory.RACE_SEX)
        if race_sex:
            output += _race_sex_phrase(race_sex[0].text) + " "

    if PropertyCategory.BUILD in categories:
        for prop in properties_in(properties, PropertyCategory.BUILD):
            if output.endswith(" "):
                output = output[:-1]
            output += f", {prop.text}, "

    if PropertyCategory.HAIR in categories:
        for prop in properties_in(properties, PropertyCategory.HAIR):
            output += f"with {prop.text} "

    if PropertyCategory.CLOTHING in categories:
        clothing = properties_in(properties, PropertyCategory.CLOTHING)
        if clothing:
            output += "wearing "
            for prop in clothing:
                if _needs_article(prop.text):
                    output += "a "
                output += f"{prop.text}, "

    return output.rstrip(", ")
