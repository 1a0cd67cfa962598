from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class UploadedImage(BaseModel):
    model_config = ConfigDict(extra="allow")

    source: str
    public_id: str | None = None
    asset_id: str | None = None
    version: int | None = None
    version_id: str | None = None
    signature: str | None = None
    width: int | None = None
    height: int | None = None
    format: str | None = None
    resource_type: str | None = None
    created_at: str | None = None
    tags: list[str] = []
    pages: int | None = None
    bytes: int | None = None
    type: str | None = None
    etag: str | None = None
    placeholder: bool | None = None
    url: str | None = None
    secure_url: str | None = None
    access_mode: str | None = None
    original_filename: str | None = None
    moderation: list[Any] | None = None
    phash: str | None = None
    unparsed: dict[str, Any] = {}

    @classmethod
    def from_response(cls, fields: Mapping[str, Any]) -> "UploadedImage":
        values = dict(fields)
        unparsed: dict[str, Any] = {}
        if "unparsed" in values:
            unparsed["unparsed"] = values.pop("unparsed")
        while True:
            try:
                return cls.model_validate({**values, "unparsed": unparsed})
            except ValidationError as exc:
                rejected = {error["loc"][0] for error in exc.errors() if error["loc"]}
                # only known response fields may be demoted, and each at most once
                movable = {name for name in rejected if name in values and name != "source"}
                if not movable or movable != rejected:
                    raise
                for name in movable:
                    unparsed[name] = values.pop(name)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [tag for tag in value.split(",") if tag]
        return value

    @property
    def extras(self) -> dict[str, Any]:
        return {**(self.model_extra or {}), **self.unparsed}


class DeletedImage(BaseModel):
    public_id: str | None = None
    prefix: str | None = None
