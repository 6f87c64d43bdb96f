from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Gif(BaseModel):
    """A GIF as exposed by the API: search results and saved favorites alike."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1, description="Provider GIF id")
    url: str = Field("", description="Provider page URL")
    still_url: str = Field("", description="Small still image URL")
    downsized_url: str = Field("", description="Downsized animated image URL")


class Tag(BaseModel):
    """A label attached to one favorite."""
    model_config = ConfigDict(from_attributes=True)

    favorite: str = Field(..., min_length=1, description="Favorite (GIF) id")
    tag: str = Field(..., min_length=1, description="Tag name")
