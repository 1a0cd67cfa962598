from contextlib import ExitStack
from pathlib import Path

import httpx
import structlog

from cloudup.core.constants import FILE_FIELD
from cloudup.core.errors import TransportError
from cloudup.integrations.cloudinary.base import TransportRequest, TransportResponse

logger = structlog.get_logger()


class HttpTransport:
    def __init__(self, timeout: float = 50.0, transport: httpx.BaseTransport | None = None) -> None:
        self.timeout = httpx.Timeout(timeout)
        self._transport = transport

    def send(self, request: TransportRequest) -> TransportResponse:
        with ExitStack() as stack:
            files = None
            if request.file_path is not None:
                try:
                    handle = stack.enter_context(open(request.file_path, "rb"))
                except OSError as exc:
                    raise TransportError(f"cannot read file {request.file_path}: {exc}") from exc
                files = {FILE_FIELD: (Path(request.file_path).name, handle)}

            try:
                with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                    response = client.request(
                        request.method,
                        request.url,
                        headers=request.headers,
                        data=request.data,
                        files=files,
                        auth=request.auth,
                    )
            except httpx.HTTPError as exc:
                logger.debug("cloudinary_transport_error", method=request.method, error=str(exc))
                raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        logger.debug("cloudinary_response", method=request.method, status=response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.content)
