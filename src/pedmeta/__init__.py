"""
pedmeta - metadata-driven descriptions of ped models.

Maps a character's per-component drawable/texture variants to text and police
scanner audio descriptions, using per-model rules loaded from metadata files.
"""

from .composer import render_audio, render_text
from .config import PedMetaSettings, load_settings
from .describer import Description, PedDescriber
from .entities import StaticEntity, StaticEntityAccessor
from .errors import MalformedRecordError, MetadataFileError, PedMetaError, SourceNotFoundError
from .loader import MetadataLoader
from .matcher import EntityAccessor, MatchResult, MatchStatus, VariantMatcher
from .models import (
    ALL_CATEGORIES,
    EMPTY_MASK,
    MAX_COMPONENT_INDEX,
    UNCONDITIONAL_COMPONENT,
    CategoryMask,
    ComponentVariant,
    DescriptionProperty,
    ModelMeta,
    PropertyCategory,
    category_mask,
    parse_category_mask,
)
from .store import RuleStore

__version__ = "0.1.0"

__all__ = [
    # Models
    "ALL_CATEGORIES",
    "EMPTY_MASK",
    "MAX_COMPONENT_INDEX",
    "UNCONDITIONAL_COMPONENT",
    "CategoryMask",
    "ComponentVariant",
    "DescriptionProperty",
    "ModelMeta",
    "PropertyCategory",
    "category_mask",
    "parse_category_mask",
    # Store and matching
    "MetadataLoader",
    "RuleStore",
    "EntityAccessor",
    "MatchResult",
    "MatchStatus",
    "VariantMatcher",
    # Composition
    "render_audio",
    "render_text",
    "Description",
    "PedDescriber",
    # Host entities
    "StaticEntity",
    "StaticEntityAccessor",
    # Config and errors
    "PedMetaSettings",
    "load_settings",
    "PedMetaError",
    "SourceNotFoundError",
    "MetadataFileError",
    "MalformedRecordError",
]
