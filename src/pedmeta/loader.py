"""
Metadata loader for ped model description files.

Reads every supported file in a metadata directory and returns the raw model
records it contains. Records are plain dicts; validation into
:class:`pedmeta.models.ModelMeta` happens in the rule store so that one bad
record can be skipped without losing the rest of the file.

Supported formats:

- ``.xml`` - the plugin's native format::

    <PedModelMeta>
      <Ped Model="A_M_Y_STLAT_02">
        <Property Type="RaceSex" Audio="..." Text="hispanic male" />
        <Property Type="Clothing" Component="4" Drawable="12" Texture="0"
                  Audio="CLOTHING_DARK_JEANS" Text="dark jeans" />
      </Ped>
    </PedModelMeta>

- ``.yaml`` / ``.yml`` / ``.json``::

    models:
      - model: A_M_Y_STLAT_02
        properties:
          - {category: RaceSex, audio: ..., text: hispanic male}
          - {category: Clothing, component: 4, drawable: 12, texture: 0,
             audio: CLOTHING_DARK_JEANS, text: dark jeans}
"""

import json
import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import Any

import yaml

from .errors import MetadataFileError, SourceNotFoundError


logger = logging.getLogger("pedmeta.loader")

ROOT_TAG = "PedModelMeta"
MODEL_TAG = "Ped"
PROPERTY_TAG = "Property"

# XML attribute -> record key
_XML_FIELDS = {
    "type": "category",
    "category": "category",
    "component": "component",
    "drawable": "drawable",
    "texture": "texture",
    "audio": "audio",
    "text": "text",
}


class MetadataLoader:
    """Turns a metadata directory into a list of raw model records.

    Each returned record has the keys ``model`` and ``properties`` plus a
    ``_source`` entry naming the file it came from.
    """

    SUPPORTED_EXTENSIONS = {".xml", ".json", ".yaml", ".yml"}

    def load(self, directory: Path | str) -> list[dict[str, Any]]:
        """Load all records from every supported file in ``directory``.

        Files are read in name order. A file that cannot be read or parsed is
        logged and skipped.

        Raises:
            SourceNotFoundError: If ``directory`` does not exist
            MetadataFileError: If ``directory`` cannot be listed
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise SourceNotFoundError(directory)

        try:
            paths = sorted(directory.iterdir())
        except OSError as e:
            raise MetadataFileError(directory, str(e)) from e

        records: list[dict[str, Any]] = []
        for path in paths:
            if not path.is_file() or path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
                continue
            try:
                file_records = self.read_file(path)
            except MetadataFileError as e:
                logger.warning(f"Skipping metadata file: {e}")
                continue
            logger.debug(f"Read {len(file_records)} model record(s) from {path}")
            records.extend(file_records)
        return records

    def read_file(self, path: Path) -> list[dict[str, Any]]:
        """Read the model records of a single file.

        Raises:
            MetadataFileError: If the file cannot be read or parsed
        """
        suffix = path.suffix.lower()
        try:
            raw_content = path.read_bytes()
        except OSError as e:
            raise MetadataFileError(path, str(e)) from e

        if suffix == ".xml":
            # Bytes, so the parser honours the document's encoding declaration.
            records = self._parse_xml(path, raw_content)
        else:
            try:
                text = raw_content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise MetadataFileError(path, str(e)) from e
            records = self._parse_structured(path, suffix, text)

        for record in records:
            record["_source"] = path.name
        return records

    def _parse_xml(self, path: Path, raw_content: bytes) -> list[dict[str, Any]]:
        try:
            root = ElementTree.fromstring(raw_content)
        except ElementTree.ParseError as e:
            raise MetadataFileError(path, f"invalid XML: {e}") from e

        if root.tag != ROOT_TAG:
            logger.warning(f"{path.name}: root element is <{root.tag}>, expected <{ROOT_TAG}>")
            return []

        records = []
        for node in root.iter(MODEL_TAG):
            records.append({
                "model": _xml_value(node, "Model"),
                "properties": [_xml_property(p) for p in node.iter(PROPERTY_TAG)],
            })
        return records

    def _parse_structured(self, path: Path, suffix: str, raw_content: str) -> list[dict[str, Any]]:
        try:
            if suffix == ".json":
                data = json.loads(raw_content)
            else:
                data = yaml.safe_load(raw_content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise MetadataFileError(path, f"failed to parse {suffix} file: {e}") from e

        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("models", [])
        if not isinstance(data, list):
            raise MetadataFileError(path, "expected a list of models or a 'models' key")

        # Non-mapping entries are kept so the store reports them as malformed.
        return [dict(item) if isinstance(item, dict) else {"model": None, "raw": item} for item in data]


def _xml_value(node: ElementTree.Element, name: str) -> str | None:
    """Read ``name`` from an attribute or, failing that, a child element."""
    for key, value in node.attrib.items():
        if key.lower() == name.lower():
            return value
    for child in node:
        if child.tag.lower() == name.lower():
            return (child.text or "").strip()
    return None


def _xml_property(node: ElementTree.Element) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for key, value in node.attrib.items():
        field = _XML_FIELDS.get(key.lower())
        if field:
            record[field] = value
    for child in node:
        field = _XML_FIELDS.get(child.tag.lower())
        if field and field not in record:
            record[field] = (child.text or "").strip()
    return record
