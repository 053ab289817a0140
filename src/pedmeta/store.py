"""
RuleStore - in-memory index of model identifiers to their description rules.

The store is an explicit service object: construct it once with the list of
metadata directories and hand it to whoever needs to match entities. It
builds itself on the first lookup if it is still empty, but is never rebuilt
automatically afterwards; call :meth:`RuleStore.rebuild` to pick up metadata
changes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Any, Iterable, Iterator, Protocol

from pydantic import ValidationError

from .errors import MalformedRecordError
from .loader import MetadataLoader
from .models import ModelMeta

logger = logging.getLogger("pedmeta.store")


class RecordLoader(Protocol):
    """Anything that can turn a source location into raw model records."""

    def load(self, directory: Path | str) -> list[dict[str, Any]]:
        ...


def parse_model_record(record: dict[str, Any]) -> ModelMeta:
    """Validate a raw loader record into a :class:`ModelMeta`.

    Raises:
        MalformedRecordError: If the record is structurally invalid
    """
    if not isinstance(record, dict):
        raise MalformedRecordError(f"model record must be a mapping, got {type(record).__name__}")
    if not record.get("model"):
        raise MalformedRecordError("model record has no model identifier")
    try:
        return ModelMeta.model_validate(record)
    except ValidationError as e:
        raise MalformedRecordError(f"invalid model record {record.get('model')!r}: {e}") from e


class RuleStore:
    """
    Maps upper-cased model identifiers to their :class:`ModelMeta`.

    Sources are scanned in the configured order and the first definition of
    a model wins: later definitions with the same identifier, whether from
    the same source or another, are discarded. This lets several metadata
    packs coexist without overriding each other.

    Building is guarded by a lock and the new entries are published in one
    step, so concurrent callers see either the old mapping or the fully built
    one, never a partially populated store.
    """

    def __init__(
        self,
        sources: Iterable[Path | str] = (),
        loader: RecordLoader | None = None,
        auto_build: bool = True,
    ):
        """
        Initialize an empty store.

        Args:
            sources: Metadata directories to scan, in priority order
            loader: Record loader, defaults to :class:`MetadataLoader`
            auto_build: Build on the first lookup while the store is empty
        """
        self.sources: list[Path] = [Path(s) for s in sources]
        self.loader = loader or MetadataLoader()
        self.auto_build = auto_build
        self._models: dict[str, ModelMeta] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        return len(self._models)

    def __contains__(self, model: object) -> bool:
        if not isinstance(model, str):
            return False
        return model.upper() in self._models

    @property
    def is_built(self) -> bool:
        """Whether the store holds any models.

        This is not "a build has run": a build over sources that define no
        models leaves the store empty, so ``ensure_built`` scans them again
        on the next lookup.
        """
        return bool(self._models)

    def model_names(self) -> list[str]:
        """Store keys in insertion order."""
        return list(self._models.keys())

    def models(self) -> Iterator[ModelMeta]:
        return iter(list(self._models.values()))

    # =========================================================================
    # Building
    # =========================================================================

    def build(self) -> int:
        """
        Scan every configured source and add models not yet in the store.

        Running it again without clearing adds nothing, since existing keys
        block re-insertion.

        Returns:
            Number of models added

        Raises:
            SourceNotFoundError: If any configured source does not exist.
                Nothing from this build is added in that case.
        """
        with self._lock:
            staged = self._scan(existing=self._models)
            # Publish by swapping in a new dict; readers never see a half-filled one.
            self._models = {**self._models, **staged}

        logger.info(f"Rule store built: {len(staged)} model(s) added, {len(self._models)} total")
        return len(staged)

    def rebuild(self) -> int:
        """Discard all models and build again from the sources."""
        with self._lock:
            staged = self._scan(existing={})
            self._models = staged

        logger.info(f"Rule store rebuilt: {len(staged)} model(s)")
        return len(staged)

    def ensure_built(self) -> bool:
        """Build the store if it is empty.

        Returns:
            True if a build ran
        """
        if self._models:
            return False
        with self._lock:
            # Another caller may have finished building while we waited.
            if self._models:
                return False
            self.build()
            return True

    def clear(self) -> None:
        with self._lock:
            self._models = {}

    def add(self, meta: ModelMeta) -> bool:
        """Insert a single model unless its identifier is already present.

        Returns:
            True if the model was added
        """
        with self._lock:
            if meta.key in self._models:
                return False
            self._models = {**self._models, meta.key: meta}
            return True

    def _scan(self, existing: dict[str, ModelMeta]) -> dict[str, ModelMeta]:
        staged: dict[str, ModelMeta] = {}
        for source in self.sources:
            for record in self.loader.load(source):
                origin = record.get("_source", source) if isinstance(record, dict) else source
                try:
                    meta = parse_model_record(record)
                except MalformedRecordError as e:
                    logger.warning(f"Failed to create model metadata from {origin}, skipping it: {e}")
                    continue

                key = meta.key
                if key in existing or key in staged:
                    logger.debug(f"Already have metadata for {key}, ignoring the one in {origin}")
                    continue
                staged[key] = meta
        return staged

    # =========================================================================
    # Lookup
    # =========================================================================

    def lookup(self, model: str) -> ModelMeta | None:
        """
        Get the metadata of a model, case-insensitively.

        Builds the store first if it is empty and ``auto_build`` is set.

        Returns:
            ModelMeta if known, None otherwise

        Raises:
            SourceNotFoundError: If an automatic build fails
        """
        if self.auto_build:
            self.ensure_built()
        return self._models.get(model.upper())
