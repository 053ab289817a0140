"""
Tests for audio and text description composition.
"""

import pytest

from pedmeta.composer import render_audio, render_text
from pedmeta.models import ALL_CATEGORIES, EMPTY_MASK, category_mask


@pytest.fixture
def stlat_props(make_prop):
    return [
        make_prop("RaceSex", "A_WITHOUT_HESITATION", "hispanic male"),
        make_prop("Clothing", "CLOTHING_DARK_JEANS", "dark jeans", component=4, drawable=12, texture=0),
    ]


@pytest.fixture
def full_props(make_prop):
    # Deliberately out of category order.
    return [
        make_prop("Clothing", "CLOTHING_LEATHER_JACKET", "leather jacket", component=3, drawable=1, texture=0),
        make_prop("Hair", "SHORT_HAIR", "short brown hair"),
        make_prop("Extras", "TATTOOS", "tattoos"),
        make_prop("Build", "THIN", "thin build"),
        make_prop("RaceSex", "WHITE_MALE", "white male"),
        make_prop("Clothing", "CLOTHING_DARK_JEANS", "dark jeans", component=4, drawable=12, texture=0),
    ]


class TestRenderAudio:
    """Test audio token rendering."""

    def test_race_sex_and_clothing(self, stlat_props) -> None:
        assert render_audio(stlat_props, category_mask("RaceSex", "Clothing")) == (
            "A_WITHOUT_HESITATION A_WITHOUT_HESITATION 200MS_SILENCE WEARING  "
            "CLOTHING_DARK_JEANS 200MS_SILENCE"
        )

    def test_full_category_order(self, full_props) -> None:
        assert render_audio(full_props, ALL_CATEGORIES) == (
            "A_WITHOUT_HESITATION WHITE_MALE "
            "200MS_SILENCE THIN "
            "200MS_SILENCE WITH SHORT_HAIR "
            "200MS_SILENCE WEARING  CLOTHING_LEATHER_JACKET 200MS_SILENCE  "
            "CLOTHING_DARK_JEANS 200MS_SILENCE"
        )

    def test_only_first_race_sex(self, make_prop) -> None:
        props = [make_prop("RaceSex", "WHITE_MALE"), make_prop("RaceSex", "BLACK_MALE")]
        assert render_audio(props, ALL_CATEGORIES) == "A_WITHOUT_HESITATION WHITE_MALE"

    def test_no_stray_tokens_for_empty_categories(self, make_prop) -> None:
        props = [make_prop("Build", "HEAVY")]
        assert render_audio(props, ALL_CATEGORIES) == "200MS_SILENCE HEAVY"

    def test_empty_mask(self, full_props) -> None:
        assert render_audio(full_props, EMPTY_MASK) == ""

    def test_masked_categories_skipped(self, full_props) -> None:
        assert render_audio(full_props, category_mask("Hair")) == "200MS_SILENCE WITH SHORT_HAIR"

    def test_no_properties(self) -> None:
        assert render_audio([], ALL_CATEGORIES) == ""


class TestRenderText:
    """Test natural-language rendering."""

    def test_end_to_end_phrase(self, stlat_props) -> None:
        assert render_text(stlat_props, category_mask("RaceSex", "Clothing")) == "Hispanic male wearing dark jeans"

    @pytest.mark.parametrize("phrase,expected", [
        ("hispanic male", "Hispanic male"),
        ("asian female", "Asian female"),
        ("white male", "white male"),
        ("Hispanic male", "Hispanic male"),
        ("south asian male", "South asian male"),
    ])
    def test_race_sex_title_case(self, make_prop, phrase: str, expected: str) -> None:
        assert render_text([make_prop("RaceSex", text=phrase)], ALL_CATEGORIES) == expected

    def test_title_case_is_case_sensitive(self, make_prop) -> None:
        assert render_text([make_prop("RaceSex", text="black ASIAN")], ALL_CATEGORIES) == "black ASIAN"

    def test_full_description(self, full_props) -> None:
        assert render_text(full_props, ALL_CATEGORIES) == (
            "white male, thin build, with short brown hair "
            "wearing a leather jacket, dark jeans"
        )

    def test_build_strips_one_space(self, make_prop) -> None:
        props = [
            make_prop("RaceSex", text="white male"),
            make_prop("Build", text="thin build"),
            make_prop("Build", text="tall"),
        ]
        assert render_text(props, ALL_CATEGORIES) == "white male, thin build,, tall"

    @pytest.mark.parametrize("phrase,expected", [
        ("dark jeans", "wearing dark jeans"),
        ("leather jacket", "wearing a leather jacket"),
        ("Grey Tracksuit", "wearing Grey Tracksuit"),
        ("light SNEAKERS", "wearing light SNEAKERS"),
        ("cargo shorts", "wearing cargo shorts"),
        ("work boots", "wearing work boots"),
        ("dress shoes", "wearing dress shoes"),
        ("khaki pants", "wearing khaki pants"),
        ("no shirt", "wearing no shirt"),
        ("None visible", "wearing None visible"),
        ("hoodie", "wearing a hoodie"),
    ])
    def test_clothing_article(self, make_prop, phrase: str, expected: str) -> None:
        props = [make_prop("Clothing", text=phrase, component=3, drawable=0, texture=0)]
        assert render_text(props, ALL_CATEGORIES) == expected

    def test_clothing_list_punctuation(self, make_prop) -> None:
        props = [
            make_prop("Clothing", text="leather jacket", component=3, drawable=0, texture=0),
            make_prop("Clothing", text="dark jeans", component=4, drawable=0, texture=0),
            make_prop("Clothing", text="white sneakers", component=6, drawable=0, texture=0),
        ]
        assert render_text(props, category_mask("Clothing")) == (
            "wearing a leather jacket, dark jeans, white sneakers"
        )

    def test_extras_never_rendered(self, make_prop) -> None:
        assert render_text([make_prop("Extras", text="tattoos")], ALL_CATEGORIES) == ""

    def test_empty_mask(self, full_props) -> None:
        assert render_text(full_props, EMPTY_MASK) == ""

    def test_hair_only(self, full_props) -> None:
        assert render_text(full_props, category_mask("Hair")) == "with short brown hair"
