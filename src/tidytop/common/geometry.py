"""Screen-space value types shared by icons, fences and layouts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0

    def snapped(self, grid_size: int) -> Point:
        """Round both coordinates to the nearest multiple of ``grid_size``."""
        if grid_size <= 1:
            return self
        return Point(
            x=round(self.x / grid_size) * grid_size,
            y=round(self.y / grid_size) * grid_size,
        )


class Size(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
