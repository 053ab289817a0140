"""
Variant matching: select the description properties that apply to a live entity.

The entity belongs to the host and can be destroyed at any moment, so it is
reached only through an :class:`EntityAccessor` and its validity is checked
again before every component read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .errors import PedMetaError
from .models import MAX_COMPONENT_INDEX, CategoryMask, ComponentVariant, DescriptionProperty
from .store import RuleStore

logger = logging.getLogger("pedmeta.matcher")


@runtime_checkable
class EntityAccessor(Protocol):
    """Host capability for reading a live entity's appearance.

    ``handle`` is opaque to pedmeta; only the accessor knows what it is.
    """

    def is_valid(self, handle: Any) -> bool:
        ...

    def model_name_of(self, handle: Any) -> str:
        ...

    def variant_of(self, handle: Any, slot: int) -> ComponentVariant:
        ...


class MatchStatus(str, Enum):
    """Outcome of a matching pass."""
    MATCHED = "matched"
    PARTIAL = "partial"  # entity became invalid mid-scan
    INVALID_SUBJECT = "invalid_subject"
    UNKNOWN_MODEL = "unknown_model"
    STORE_UNAVAILABLE = "store_unavailable"  # rule store failed to build


@dataclass(frozen=True)
class MatchResult:
    """Properties matched for one entity and how the match went.

    A falsy result means matching could not be attempted; an ``ok`` result
    with no properties means there is simply nothing to describe.
    """
    status: MatchStatus
    model: str | None = None
    properties: tuple[DescriptionProperty, ...] = field(default_factory=tuple)
    scanned_slots: int = 0

    @property
    def ok(self) -> bool:
        return self.status in (MatchStatus.MATCHED, MatchStatus.PARTIAL)

    def __bool__(self) -> bool:
        return self.ok


class VariantMatcher:
    """Matches entities against the rules held in a :class:`RuleStore`."""

    def __init__(
        self,
        store: RuleStore,
        accessor: EntityAccessor,
        max_component_index: int = MAX_COMPONENT_INDEX,
    ):
        self.store = store
        self.accessor = accessor
        self.max_component_index = max_component_index

    def match_entity(self, handle: Any, categories: CategoryMask | None = None) -> MatchResult:
        """Match an entity using the model it reports."""
        if not self.accessor.is_valid(handle):
            logger.info("Cannot operate on a null or invalid entity")
            return MatchResult(MatchStatus.INVALID_SUBJECT)

        # Read once: the model name is unavailable once the entity goes invalid.
        try:
            model = self.accessor.model_name_of(handle)
        except Exception:
            if self.accessor.is_valid(handle):
                raise
            logger.info("Entity became invalid before its model could be read")
            return MatchResult(MatchStatus.INVALID_SUBJECT)

        return self.match_properties(model, handle, categories)

    def match_properties(
        self, model: str, handle: Any, categories: CategoryMask | None = None
    ) -> MatchResult:
        """
        Select the properties of ``model`` that apply to the entity.

        Unconditional properties come first, followed by the properties of
        each component slot in ascending slot order. Within each group the
        authoring order is kept.

        Args:
            model: Model identifier, any case
            handle: Host entity handle
            categories: Only keep properties in these categories (default: all)

        Returns:
            MatchResult. If the entity goes invalid partway through the slot
            scan, the properties collected so far are returned with status
            ``PARTIAL``.
        """
        if not self.accessor.is_valid(handle):
            logger.info("Cannot operate on a null or invalid entity")
            return MatchResult(MatchStatus.INVALID_SUBJECT, model=model)

        try:
            meta = self.store.lookup(model)
        except PedMetaError:
            logger.exception(
                "Failed to build the rule store. Properties cannot be matched for this entity"
            )
            return MatchResult(MatchStatus.STORE_UNAVAILABLE, model=model)

        if meta is None:
            logger.info(f"{model} does not appear in the rule store")
            return MatchResult(MatchStatus.UNKNOWN_MODEL, model=model)

        matched = list(meta.unconditional_properties())

        for slot in range(self.max_component_index):
            if not self.accessor.is_valid(handle):
                logger.info(
                    f"Entity became invalid while reading component {slot}, results incomplete"
                )
                return MatchResult(MatchStatus.PARTIAL, meta.model, _select(matched, categories), slot)

            try:
                variant = ComponentVariant(*self.accessor.variant_of(handle, slot))
            except Exception:
                if self.accessor.is_valid(handle):
                    raise
                logger.info(
                    f"Entity became invalid while reading component {slot}, results incomplete"
                )
                return MatchResult(MatchStatus.PARTIAL, meta.model, _select(matched, categories), slot)

            matched.extend(meta.properties_for(slot, variant))

        return MatchResult(
            MatchStatus.MATCHED, meta.model, _select(matched, categories), self.max_component_index
        )


def _select(
    properties: list[DescriptionProperty], categories: CategoryMask | None
) -> tuple[DescriptionProperty, ...]:
    if categories is None:
        return tuple(properties)
    return tuple(p for p in properties if p.category in categories)
