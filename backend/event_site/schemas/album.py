"""Album Schemas — gallery photos, batch insert and reordering."""

from datetime import datetime

from pydantic import Field

from event_site.schemas.common import ApiModel, StrictApiModel


class AlbumPhotoCreate(StrictApiModel):
    gallery: str = Field(min_length=1, max_length=100)
    image: str = Field(min_length=1, max_length=500)
    title: str = Field("", max_length=200)
    position: int = Field(0, ge=0)
    active: bool = True


class AlbumPhotoUpdate(StrictApiModel):
    gallery: str | None = Field(None, min_length=1, max_length=100)
    image: str | None = Field(None, min_length=1, max_length=500)
    title: str | None = Field(None, max_length=200)
    position: int | None = Field(None, ge=0)
    active: bool | None = None


class AlbumBatchItem(StrictApiModel):
    gallery: str = Field(min_length=1, max_length=100)
    image: str = Field(min_length=1, max_length=500)
    title: str = Field("", max_length=200)
    active: bool = True


class AlbumBatchCreate(StrictApiModel):
    photos: list[AlbumBatchItem] = Field(min_length=1)


class ActiveToggle(StrictApiModel):
    active: bool


class PhotoPosition(StrictApiModel):
    id: int
    position: int = Field(ge=0)


class AlbumReorder(StrictApiModel):
    photos: list[PhotoPosition] = Field(min_length=1)


class AlbumPhotoResponse(ApiModel):
    id: int
    gallery: str
    image: str
    title: str
    position: int
    active: bool
    created_at: datetime
    updated_at: datetime


class UploadedFile(ApiModel):
    filename: str
    path: str
    original_name: str


class AlbumUploadResponse(ApiModel):
    message: str = "Images uploaded successfully"
    files: list[UploadedFile]


class AlbumBatchResponse(ApiModel):
    message: str = "Photos added successfully"
    photos: list[AlbumPhotoResponse]
