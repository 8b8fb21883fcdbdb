from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parent.parent))
from document_generator import describe_report_options
from render_options import REPORT_STYLES, RenderOptions, ReportSettings, SectionsToInclude, options_from_settings
from report_errors import InvalidOptionsError


def test_defaults():
    options = RenderOptions()
    assert options.page_size == "a4"
    assert options.orientation == "portrait"
    assert options.primary_color == (14, 124, 123)
    assert options.secondary_color == (74, 85, 104)
    assert options.font_size.body_text == 9
    assert options.include_cover_page is True
    assert options.include_table_of_contents is False
    assert options.sections_to_include.treatments is True


def test_from_mapping_accepts_camel_case():
    options = RenderOptions.from_mapping(
        {
            "pageSize": "letter",
            "orientation": "landscape",
            "includeExpertCv": False,
            "sectionsToInclude": {"lifeStyleImpact": False},
            "fontSize": {"bodyText": 10},
        }
    )
    assert options.page_size == "letter"
    assert options.include_expert_cv is False
    assert options.sections_to_include.lifestyle_impact is False
    assert options.font_size.body_text == 10
    assert options.page_dimensions == (279.4, 215.9)
    assert RenderOptions.from_mapping(None) == RenderOptions()


@pytest.mark.parametrize(
    "bad",
    [
        {"primaryColor": [300, 0, 0]},
        {"secondaryColor": [0, -1, 0]},
        {"fontSize": {"bodyText": 0}},
        {"pageSize": "a3"},
        {"fontFamily": "comic sans"},
        {"style": "neon"},
    ],
)
def test_from_mapping_rejects_invalid_values(bad):
    with pytest.raises(InvalidOptionsError):
        RenderOptions.from_mapping(bad)


def test_styles():
    classic = RenderOptions().with_style("classic")
    assert classic.style == "classic"
    assert classic.primary_color == REPORT_STYLES["classic"].primary_color
    with pytest.raises(InvalidOptionsError):
        RenderOptions().with_style("neon")


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MEDCO_REPORT_PAGE_SIZE", "letter")
    monkeypatch.setenv("MEDCO_REPORT_STYLE", "classic")
    monkeypatch.setenv("MEDCO_REPORT_INCLUDE_TABLE_OF_CONTENTS", "true")
    settings = ReportSettings()
    assert settings.log_level == "INFO"
    options = options_from_settings(settings)
    assert options.page_size == "letter"
    assert options.include_table_of_contents is True
    assert options.primary_color == (31, 56, 100)


def test_describe_report_options():
    options = RenderOptions(sections_to_include=SectionsToInclude(treatments=False))
    summary = describe_report_options(options)
    assert "A4 portrait (210 x 297 mm)" in summary
    assert "~~Treatments~~ (excluded)" in summary
    assert "1. Claimant Details" in summary
    assert "5. Psychological Injuries" in summary
    assert "6. Impact On Daily Life" in summary
    assert "Medical Expert's Curriculum Vitae" in summary
    assert "8. Overall Prognosis" in summary


def test_named_style_sets_colours():
    classic = RenderOptions.from_mapping({"style": "classic"})
    assert classic.primary_color == (31, 56, 100)
    assert classic.secondary_color == (90, 90, 90)
    assert "**Style**: classic" in describe_report_options(classic)

    custom = RenderOptions.from_mapping({"style": "classic", "primaryColor": [1, 2, 3]})
    assert custom.primary_color == (1, 2, 3)
    assert custom.secondary_color == (90, 90, 90)
    assert RenderOptions(style="monochrome").primary_color == (40, 40, 40)
