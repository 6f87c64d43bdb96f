"""Response DTOs for the parts of the Giphy API we read.

Only the fields needed to build a `Gif` are modelled; everything else in the
provider payload is ignored.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .favorites import Gif


class GiphyImage(BaseModel):
    url: str = ""


class GiphyImages(BaseModel):
    fixed_width_small_still: GiphyImage = Field(default_factory=GiphyImage)
    downsized: GiphyImage = Field(default_factory=GiphyImage)


class GiphyGifData(BaseModel):
    id: str = ""
    url: str = ""
    images: GiphyImages = Field(default_factory=GiphyImages)

    def to_gif(self) -> Gif:
        return Gif(
            id=self.id,
            url=self.url,
            still_url=self.images.fixed_width_small_still.url,
            downsized_url=self.images.downsized.url,
        )


class GiphyGetResponse(BaseModel):
    """Body of GET /gifs/{id}."""
    data: Optional[GiphyGifData] = None

    @field_validator("data", mode="before")
    @classmethod
    def _empty_data(cls, v):
        # Unknown ids come back with an empty list or object instead of a GIF
        if not isinstance(v, dict) or not v:
            return None
        return v


class GiphySearchResponse(BaseModel):
    """Body of GET /gifs/search."""
    data: List[GiphyGifData] = Field(default_factory=list)
