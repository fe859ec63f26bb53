"""Song metadata as delivered by the player."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Song(BaseModel):
    """Identity and artwork reference of a playable track."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    artist: str = ""
    album_art_url: str = Field(default="", alias="albumArtUrl")
