"""
Pytest configuration and fixtures for pedmeta tests.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add src directory to Python path to allow importing pedmeta
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from pedmeta.models import DescriptionProperty, ModelMeta  # noqa: E402


STLAT_XML = """<?xml version="1.0" encoding="utf-8"?>
<PedModelMeta>
  <Peds>
    <Ped Model="A_M_Y_STLAT_02">
      <Property Type="RaceSex" Audio="A_WITHOUT_HESITATION" Text="hispanic male" />
      <Property Type="Clothing" Component="4" Drawable="12" Texture="0"
                Audio="CLOTHING_DARK_JEANS" Text="dark jeans" />
    </Ped>
  </Peds>
</PedModelMeta>
"""

BUSINESS_MODELS = {
    "models": [
        {
            "model": "a_m_y_business_01",
            "properties": [
                {"category": "RaceSex", "audio": "WHITE_MALE", "text": "white male"},
                {"category": "Build", "audio": "THIN", "text": "thin build"},
                {"category": "Hair", "audio": "SHORT_HAIR", "text": "short brown hair"},
                {"category": "Clothing", "component": 3, "drawable": 1, "texture": 0,
                 "audio": "CLOTHING_LEATHER_JACKET", "text": "leather jacket"},
                {"category": "Clothing", "component": 6, "drawable": 0, "texture": 2,
                 "audio": "CLOTHING_LIGHT_SNEAKERS", "text": "light sneakers"},
            ],
        }
    ]
}


def _prop(category, audio="AUDIO", text="text", component=-1, drawable=-1, texture=-1):
    """Shorthand for building a DescriptionProperty in tests."""
    return DescriptionProperty(
        category=category,
        component=component,
        drawable=drawable,
        texture=texture,
        audio=audio,
        text=text,
    )


@pytest.fixture
def stlat_meta() -> ModelMeta:
    return ModelMeta(
        model="A_M_Y_STLAT_02",
        properties=[
            _prop("RaceSex", "A_WITHOUT_HESITATION", "hispanic male"),
            _prop("Clothing", "CLOTHING_DARK_JEANS", "dark jeans", component=4, drawable=12, texture=0),
        ],
    )


@pytest.fixture
def metadata_dir(tmp_path: Path) -> Path:
    """A metadata directory holding one XML and one YAML file."""
    directory = tmp_path / "PedModelMeta"
    directory.mkdir()
    (directory / "stlat.xml").write_text(STLAT_XML, encoding="utf-8")
    with open(directory / "business.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(BUSINESS_MODELS, f)
    return directory


@pytest.fixture
def make_prop():
    return _prop
