"""Pydantic models describing how elements and the window are styled.

Styles are plain validated data. They can be built in code or loaded from the
YAML configuration, and are compared by value: two fragments with equal styles
and the same font are drawn in a single call.
"""

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

Color = Tuple[int, int, int, int]


def check_color(v: Color) -> Color:
    """Ensure every channel of an RGBA color is a valid 8-bit value."""
    if any(not 0 <= channel <= 255 for channel in v):
        raise ValueError(f"Color channels must be between 0 and 255, got {v}")
    return v


class Margin(BaseModel):
    """Spacing around an element, in pixels."""

    model_config = ConfigDict(frozen=True)

    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


class Position(BaseModel):
    """Absolute placement of an element relative to the window's top-left corner."""

    model_config = ConfigDict(frozen=True)

    top: float = 0
    left: float = 0


class Style(BaseModel):
    """Style of a text or image element, or of a single text fragment."""

    model_config = ConfigDict(frozen=True)

    font_size: float = Field(32, gt=0, description="The font size in pixels.")
    color: Color = Field((0, 0, 0, 255), description="The RGBA text color.")
    line_height: float = Field(1.5, gt=0, description="Line height as a multiple of the font size.")
    text_align: Literal["left", "center", "right"] = Field("left", description="Horizontal alignment of text lines.")
    margin: Margin = Field(default_factory=Margin, description="Spacing around the element.")
    max_width: Optional[float] = Field(None, gt=0, description="Wrap width for text. Defaults to the window content width.")
    position: Optional[Position] = Field(None, description="If set, the element is placed absolutely and does not flow.")

    @field_validator("color")
    def validate_color(cls, v: Color) -> Color:
        return check_color(v)


class WindowStyle(BaseModel):
    """Size and background of the generated image."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(1200, gt=0, description="The image width in pixels.")
    height: int = Field(630, gt=0, description="The image height in pixels.")
    background_color: Color = Field((255, 255, 255, 255), description="The RGBA fill of a new canvas.")
    padding: Margin = Field(default_factory=Margin, description="Space between the image border and its content.")

    @field_validator("background_color")
    def validate_background_color(cls, v: Color) -> Color:
        return check_color(v)
