"""Reusable Pydantic field annotations."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, StrictStr

type JsonValue = dict[str, object] | list[object] | str | int | float | bool | None
type JsonDict = dict[str, object]

NonEmptyString = Annotated[StrictStr, Field(min_length=1, frozen=True)]

# ARGB or RGB hex color, e.g. "#C8F0F0F0" or "#000000"
HexColor = Annotated[
    StrictStr,
    Field(
        pattern=r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$",
        description="Hex color in '#RRGGBB' or '#AARRGGBB' format",
    ),
]

Opacity = Annotated[float, Field(ge=0.0, le=1.0)]

__all__ = [
    "HexColor",
    "JsonDict",
    "JsonValue",
    "NonEmptyString",
    "Opacity",
]
