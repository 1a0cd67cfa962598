from pathlib import Path
from typing import Any

import structlog

from cloudup.core.config import get_settings
from cloudup.core.constants import DeleteMode
from cloudup.integrations.cloudinary.client import CloudinaryClient
from cloudup.integrations.cloudinary.factory import get_cloudinary_client
from cloudup.schemas.common import Result
from cloudup.schemas.media import DeletedImage, UploadedImage
from cloudup.utils.urls import image_url

logger = structlog.get_logger()


class MediaService:
    def __init__(self, client: CloudinaryClient | None = None, delivery_base_url: str | None = None):
        self.client = client or get_cloudinary_client()
        self.delivery_base_url = delivery_base_url or get_settings().cloudinary_delivery_base_url

    def upload(self, item: str | Path, tags: list[str] | None = None, **options: Any) -> Result[UploadedImage]:
        opts = dict(options)
        if tags:
            opts["tags"] = tags
        result = self.client.upload(item, opts)
        if result.ok:
            logger.debug("media_uploaded", public_id=result.value.public_id, source=result.value.source)
        return result

    def delete_by_public_id(self, public_id: str) -> Result[DeletedImage]:
        return self.client.delete(public_id, {"type": DeleteMode.PUBLIC_ID})

    def delete_by_prefix(self, prefix: str) -> Result[DeletedImage]:
        return self.client.delete(prefix, {"type": DeleteMode.PREFIX})

    def image_url(
        self,
        public_id: str,
        version: int | str | None = None,
        format: str | None = None,
        **transformations: Any,
    ) -> str:
        return image_url(
            self.client.credentials.get("cloud_name"),
            public_id,
            transformations=transformations,
            version=version,
            format=format,
            base_url=self.delivery_base_url,
        )
