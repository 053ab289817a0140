"""
Data models for ped model description metadata.

A model's metadata is an ordered list of description properties. Each
property belongs to one category and is either unconditional or bound to an
exact drawable/texture pair on one component slot.
"""

from enum import Enum
from typing import Iterable, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


UNCONDITIONAL_COMPONENT = -1
"""Component value of a property that applies regardless of component state."""

MAX_COMPONENT_INDEX = 9
"""Component slots 0 up to (not including) this index are inspected."""


class PropertyCategory(str, Enum):
    """Descriptive grouping of a property.

    Declaration order is the order categories are rendered in.
    """
    RACE_SEX = "RaceSex"
    BUILD = "Build"
    HAIR = "Hair"
    CLOTHING = "Clothing"
    EXTRAS = "Extras"

    @classmethod
    def parse(cls, value: "str | PropertyCategory") -> "PropertyCategory":
        """Resolve a category from its name, case-insensitively.

        Accepts both the metadata spelling ("RaceSex") and the member name
        ("RACE_SEX").

        Raises:
            ValueError: If the name is not a known category
        """
        if isinstance(value, cls):
            return value
        wanted = str(value).strip().replace("_", "").lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"Unknown property category: {value!r}")


CategoryMask = frozenset[PropertyCategory]
"""Set of :class:`PropertyCategory` values selected for rendering."""

ALL_CATEGORIES: CategoryMask = frozenset(PropertyCategory)
EMPTY_MASK: CategoryMask = frozenset()


def category_mask(*categories: "str | PropertyCategory") -> CategoryMask:
    """Build a category mask from enum members or category names."""
    return frozenset(PropertyCategory.parse(c) for c in categories)


def parse_category_mask(text: str) -> CategoryMask:
    """Parse a mask such as ``"RaceSex|Clothing"`` or ``"build, hair"``.

    ``"all"`` selects every category and an empty string selects none.
    """
    parts = [p for p in text.replace(",", "|").split("|") if p.strip()]
    if any(p.strip().lower() == "all" for p in parts):
        return ALL_CATEGORIES
    return category_mask(*parts)


class ComponentVariant(NamedTuple):
    """Drawable and texture indices currently active on one component slot."""
    drawable: int
    texture: int


class DescriptionProperty(BaseModel):
    """One descriptive fact about a model variant.

    Attributes:
        category: Category the fact belongs to
        component: Component slot the fact is bound to, or
                   ``UNCONDITIONAL_COMPONENT`` if it always applies
        drawable: Drawable index the slot must report
        texture: Texture index the slot must report
        audio: Police scanner audio token (e.g. "CLOTHING_DARK_JEANS")
        text: Human-readable phrase (e.g. "dark jeans")
    """
    model_config = ConfigDict(frozen=True)

    category: PropertyCategory = Field(..., description="Property category")
    component: int = Field(default=UNCONDITIONAL_COMPONENT, description="Component slot index or -1")
    drawable: int = Field(default=-1, description="Drawable index to match")
    texture: int = Field(default=-1, description="Texture index to match")
    audio: str = Field(..., description="Audio token")
    text: str = Field(..., description="Text phrase")

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value):
        return PropertyCategory.parse(value)

    @model_validator(mode="after")
    def _check_condition(self) -> "DescriptionProperty":
        if self.component == UNCONDITIONAL_COMPONENT:
            return self
        if self.component < 0:
            raise ValueError(f"component must be >= 0 or {UNCONDITIONAL_COMPONENT}, got {self.component}")
        if self.drawable < 0 or self.texture < 0:
            raise ValueError(
                f"component {self.component} property needs a drawable and texture >= 0"
            )
        return self

    @property
    def is_unconditional(self) -> bool:
        return self.component == UNCONDITIONAL_COMPONENT

    def matches(self, slot: int, variant: ComponentVariant) -> bool:
        """Whether this property applies to ``slot`` wearing ``variant``."""
        return (
            self.component == slot
            and self.drawable == variant.drawable
            and self.texture == variant.texture
        )


class ModelMeta(BaseModel):
    """All description properties of a named model, in authoring order."""
    model: str = Field(..., min_length=1, description="Model identifier")
    properties: list[DescriptionProperty] = Field(default_factory=list)

    @field_validator("model")
    @classmethod
    def _strip_model(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("model identifier must not be blank")
        return value

    @field_validator("properties", mode="before")
    @classmethod
    def _empty_properties(cls, value):
        # An empty ``properties:`` key in YAML reads as None.
        return [] if value is None else value

    @property
    def key(self) -> str:
        """Store key: the upper-cased model identifier."""
        return self.model.upper()

    def unconditional_properties(self) -> list[DescriptionProperty]:
        return [p for p in self.properties if p.is_unconditional]

    def properties_for(self, slot: int, variant: ComponentVariant) -> list[DescriptionProperty]:
        return [p for p in self.properties if p.matches(slot, variant)]

    def categories(self) -> set[PropertyCategory]:
        return {p.category for p in self.properties}


def properties_in(
    properties: Iterable[DescriptionProperty], category: PropertyCategory
) -> list[DescriptionProperty]:
    """Filter ``properties`` to one category, keeping order."""
    return [p for p in properties if p.category == category]
