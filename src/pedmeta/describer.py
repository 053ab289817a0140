"""
PedDescriber - one-call text and audio descriptions of host entities.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .composer import render_audio, render_text
from .matcher import EntityAccessor, MatchResult, MatchStatus, VariantMatcher
from .models import ALL_CATEGORIES, MAX_COMPONENT_INDEX, CategoryMask
from .store import RuleStore

logger = logging.getLogger("pedmeta.describer")


@dataclass(frozen=True)
class Description:
    """Both renderings of one entity.

    ``text`` and ``audio`` are None when matching could not be attempted.
    """
    status: MatchStatus
    model: str | None
    text: str | None
    audio: str | None


class PedDescriber:
    """
    Describes host entities from the rules in a :class:`RuleStore`.

    Example:
        >>> store = RuleStore(["Plugins/PedMeta/PedModelMeta"])
        >>> describer = PedDescriber(store, accessor)
        >>> describer.text_description(ped, category_mask("RaceSex", "Clothing"))
        'Hispanic male wearing dark jeans'
    """

    def __init__(
        self,
        store: RuleStore,
        accessor: EntityAccessor,
        max_component_index: int = MAX_COMPONENT_INDEX,
    ):
        self.store = store
        self.matcher = VariantMatcher(store, accessor, max_component_index)

    def match(self, handle: Any) -> MatchResult:
        return self.matcher.match_entity(handle)

    def audio_description(self, handle: Any, categories: CategoryMask = ALL_CATEGORIES) -> str | None:
        """Audio tokens describing the entity, or None if it cannot be described."""
        result = self.match(handle)
        if not result:
            return None
        return render_audio(result.properties, categories)

    def text_description(self, handle: Any, categories: CategoryMask = ALL_CATEGORIES) -> str | None:
        """Text describing the entity, or None if it cannot be described."""
        result = self.match(handle)
        if not result:
            return None
        return render_text(result.properties, categories)

    def describe(self, handle: Any, categories: CategoryMask = ALL_CATEGORIES) -> Description:
        """Match once and render both descriptions."""
        result = self.match(handle)
        if not result:
            return Description(result.status, result.model, None, None)
        if result.status is MatchStatus.PARTIAL:
            logger.debug(f"Describing {result.model} from a partial match")
        return Description(
            status=result.status,
            model=result.model,
            text=render_text(result.properties, categories),
            audio=render_audio(result.properties, categories),
        )
