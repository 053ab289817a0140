"""
In-memory host entities.

Used by the command line demo and by tests to stand in for entities owned by
a game runtime.
"""

from dataclasses import dataclass, field

from .models import ComponentVariant

DEFAULT_VARIANT = ComponentVariant(0, 0)


@dataclass
class StaticEntity:
    """An entity whose appearance is set explicitly.

    Slots without an entry in ``variants`` report drawable 0, texture 0.
    """
    model: str
    variants: dict[int, ComponentVariant] = field(default_factory=dict)
    valid: bool = True

    def set_variant(self, slot: int, drawable: int, texture: int) -> None:
        self.variants[slot] = ComponentVariant(drawable, texture)

    def invalidate(self) -> None:
        """Mark the entity as destroyed."""
        self.valid = False


class StaticEntityAccessor:
    """:class:`pedmeta.matcher.EntityAccessor` for :class:`StaticEntity` handles.

    ``None`` is accepted as a handle and is always invalid.
    """

    def is_valid(self, handle: StaticEntity | None) -> bool:
        return handle is not None and handle.valid

    def model_name_of(self, handle: StaticEntity) -> str:
        if not self.is_valid(handle):
            raise RuntimeError("entity is no longer valid")
        return handle.model

    def variant_of(self, handle: StaticEntity, slot: int) -> ComponentVariant:
        if not self.is_valid(handle):
            raise RuntimeError("entity is no longer valid")
        return handle.variants.get(slot, DEFAULT_VARIANT)
