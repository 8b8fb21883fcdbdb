# render_options.py
# Immutable render configuration passed into the report assembler at call time,
# plus the environment-driven defaults the app builds it from.

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings

from report_errors import InvalidOptionsError

Channel = Annotated[int, Field(ge=0, le=255)]
Color = Tuple[Channel, Channel, Channel]
StyleName = Literal["medco", "classic", "monochrome"]

# Page sizes in millimetres, portrait.
PAGE_FORMATS: Dict[str, Tuple[float, float]] = {
    "a4": (210.0, 297.0),
    "letter": (215.9, 279.4),
}

_OPTION_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class FontSizes(BaseModel):
    model_config = _OPTION_CONFIG

    title: float = Field(18, gt=0)
    subtitle: float = Field(14, gt=0)
    section_header: float = Field(11, gt=0)
    body_text: float = Field(9, gt=0)


class SectionsToInclude(BaseModel):
    """Per-section switches; a False flag drops the whole section."""

    model_config = _OPTION_CONFIG

    claimant_details: bool = True
    accident_details: bool = True
    physical_injury: bool = True
    psychological_injury: bool = True
    treatments: bool = True
    lifestyle_impact: bool = Field(
        True,
        validation_alias=AliasChoices("lifeStyleImpact", "lifestyleImpact", "lifestyle_impact"),
    )
    family_history: bool = True
    expert_details: bool = True
    prognosis: bool = True


class ReportStyle(BaseModel):
    """A named colour scheme. Replaces per-variant copies of the generator."""

    model_config = ConfigDict(frozen=True)

    name: StyleName
    primary_color: Color
    secondary_color: Color


REPORT_STYLES: Dict[str, ReportStyle] = {
    "medco": ReportStyle(name="medco", primary_color=(14, 124, 123), secondary_color=(74, 85, 104)),
    "classic": ReportStyle(name="classic", primary_color=(31, 56, 100), secondary_color=(90, 90, 90)),
    "monochrome": ReportStyle(name="monochrome", primary_color=(40, 40, 40), secondary_color=(80, 80, 80)),
}


class RenderOptions(BaseModel):
    model_config = _OPTION_CONFIG

    page_size: Literal["a4", "letter"] = "a4"
    orientation: Literal["portrait", "landscape"] = "portrait"
    font_family: Literal["helvetica", "times", "courier"] = "helvetica"
    style: StyleName = "medco"
    primary_color: Color = (14, 124, 123)
    secondary_color: Color = (74, 85, 104)
    font_size: FontSizes = Field(default_factory=FontSizes)

    include_cover_page: bool = True
    include_table_of_contents: bool = False
    include_expert_cv: bool = True
    include_declaration: bool = True
    include_footer_on_every_page: bool = True
    include_section_numbers: bool = True
    sections_to_include: SectionsToInclude = Field(default_factory=SectionsToInclude)

    signature_image: Optional[Union[Path, bytes]] = None
    report_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def _style_colours(cls, data: Any) -> Any:
        # A named style supplies any colour the caller leaves out.
        if isinstance(data, Mapping) and isinstance(data.get("style"), str) and data["style"] in REPORT_STYLES:
            style = REPORT_STYLES[data["style"]]
            data = dict(data)
            for field, value in (
                ("primary_color", style.primary_color),
                ("secondary_color", style.secondary_color),
            ):
                if field not in data and to_camel(field) not in data:
                    data[field] = value
        return data

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "RenderOptions":
        """Build options from an untrusted mapping (camelCase or snake_case keys)."""
        if not data:
            return cls()
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise InvalidOptionsError(f"Invalid render options: {exc}") from exc

    def with_style(self, name: str) -> "RenderOptions":
        try:
            style = REPORT_STYLES[name]
        except KeyError:
            raise InvalidOptionsError(
                f"Unknown report style {name!r}; expected one of {', '.join(REPORT_STYLES)}"
            ) from None
        return self.model_copy(
            update={
                "style": style.name,
                "primary_color": style.primary_color,
                "secondary_color": style.secondary_color,
            }
        )

    @property
    def page_dimensions(self) -> Tuple[float, float]:
        width, height = PAGE_FORMATS[self.page_size]
        if self.orientation == "landscape":
            return height, width
        return width, height


class ReportSettings(BaseSettings):
    """Process defaults for rendering.

    Env vars use ``MEDCO_REPORT_`` prefix::

        export MEDCO_REPORT_PAGE_SIZE=letter
        export MEDCO_REPORT_STYLE=classic
    """

    model_config = {"env_prefix": "MEDCO_REPORT_"}

    page_size: Literal["a4", "letter"] = "a4"
    orientation: Literal["portrait", "landscape"] = "portrait"
    font_family: Literal["helvetica", "times", "courier"] = "helvetica"
    style: StyleName = "medco"
    include_table_of_contents: bool = False
    signature_image: Optional[Path] = None
    log_level: str = "INFO"


def options_from_settings(settings: Optional[ReportSettings] = None) -> RenderOptions:
    settings = settings or ReportSettings()
    options = RenderOptions(
        page_size=settings.page_size,
        orientation=settings.orientation,
        font_family=settings.font_family,
        include_table_of_contents=settings.include_table_of_contents,
        signature_image=settings.signature_image,
    )
    return options.with_style(settings.style)
