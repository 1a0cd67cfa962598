from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import structlog

from cloudup.core.config import Credentials
from cloudup.core.constants import DEFAULT_API_BASE_URL, URL_SCHEMES
from cloudup.core.errors import TransportError
from cloudup.core.security import current_timestamp, normalize_options, sign_params
from cloudup.integrations.cloudinary.base import DeleteRequest, FileUpload, UploadTarget, UrlUpload
from cloudup.integrations.cloudinary.builder import (
    build_delete_request,
    build_upload_request,
    prepare_upload_params,
)
from cloudup.integrations.cloudinary.responses import map_delete_response, map_upload_transport_response
from cloudup.integrations.cloudinary.transport import HttpTransport
from cloudup.schemas.common import Result
from cloudup.schemas.media import DeletedImage, UploadedImage

logger = structlog.get_logger()


def resolve_upload_target(item: str | Path) -> UploadTarget:
    if isinstance(item, Path):
        return FileUpload(path=str(item))
    if item.startswith(URL_SCHEMES):
        return UrlUpload(url=item)
    return FileUpload(path=item)


class CloudinaryClient:
    def __init__(
        self,
        credentials: Credentials,
        transport: HttpTransport | None = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
        clock: Callable[[], int] = current_timestamp,
    ) -> None:
        self.credentials = credentials
        self.transport = transport or HttpTransport()
        self.api_base_url = api_base_url
        self.clock = clock

    def upload(self, item: Any, opts: Mapping[Any, Any] | None = None) -> Result[UploadedImage]:
        if not isinstance(item, (str, Path)):
            return Result.failure(f"upload only accepts a str or Path, received: {item!r}")
        return self.upload_target(resolve_upload_target(item), opts)

    def upload_target(self, target: UploadTarget, opts: Mapping[Any, Any] | None = None) -> Result[UploadedImage]:
        params = prepare_upload_params(target, normalize_options(opts))
        signed = sign_params(
            params,
            secret=self.credentials.get("secret"),
            api_key=self.credentials.get("api_key"),
            now_seconds=self.clock(),
        )
        request = build_upload_request(target, signed, self.credentials, self.api_base_url)
        logger.debug("cloudinary_upload", kind=target.kind.value, source=target.source)
        try:
            response = self.transport.send(request)
        except TransportError as exc:
            return Result.failure(str(exc), exc)
        result = map_upload_transport_response(response, target.source)
        if not result.ok:
            logger.debug("cloudinary_upload_failed", source=target.source, error=result.error)
        return result

    def delete(self, item: Any, opts: Mapping[Any, Any] | None = None) -> Result[DeletedImage]:
        if not isinstance(item, str):
            return Result.failure(f"delete only accepts a public id string, received: {item!r}")
        request = DeleteRequest.from_options(item, opts)
        transport_request = build_delete_request(request, self.credentials, self.api_base_url)
        logger.debug("cloudinary_delete", mode=request.mode.value, identifier=request.identifier)
        try:
            outcome = self.transport.send(transport_request)
        except TransportError as exc:
            outcome = exc
        result = map_delete_response(outcome, request)
        if not result.ok:
            logger.debug("cloudinary_delete_failed", identifier=request.identifier, error=result.error)
        return result
