import json
from collections.abc import Mapping
from json import JSONDecodeError
from typing import Any

from pydantic import ValidationError

from cloudup.core.constants import DeleteMode
from cloudup.core.errors import DecodeError, RemoteServiceError, TransportError
from cloudup.integrations.cloudinary.base import DeleteRequest, TransportResponse
from cloudup.schemas.common import Result
from cloudup.schemas.media import DeletedImage, UploadedImage


def decode_body(body: bytes | str) -> dict[str, Any]:
    try:
        decoded = json.loads(body)
    except (JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON response: {exc}") from exc
    if not isinstance(decoded, dict):
        raise DecodeError(f"expected a JSON object, received {type(decoded).__name__}")
    return decoded


def remote_error_message(decoded: Mapping[str, Any]) -> str | None:
    error = decoded.get("error")
    if isinstance(error, Mapping) and "message" in error:
        return str(error["message"])
    return None


def map_upload_response(decoded: Mapping[str, Any], source: str) -> Result[UploadedImage]:
    message = remote_error_message(decoded)
    if message is not None:
        return Result.failure(message, RemoteServiceError(message))
    fields = {str(key): value for key, value in decoded.items()}
    fields["source"] = source
    try:
        return Result.success(UploadedImage.from_response(fields))
    except ValidationError as exc:
        return Result.failure(f"unexpected upload response: {exc}", DecodeError(str(exc)))


def _status_failure(action: str, response: TransportResponse) -> Result[Any]:
    error = TransportError(
        f"{action} failed with status {response.status_code}",
        status_code=response.status_code,
        body=response.body,
    )
    return Result.failure(str(error), error)


def map_upload_transport_response(response: TransportResponse, source: str) -> Result[UploadedImage]:
    try:
        decoded = decode_body(response.body)
    except DecodeError as exc:
        if not response.is_success:
            return _status_failure("upload", response)
        return Result.failure(str(exc), exc)
    # non-2xx bodies usually carry error.message, which wins over the bare status
    if not response.is_success and remote_error_message(decoded) is None:
        return _status_failure("upload", response)
    return map_upload_response(decoded, source)


def map_delete_response(
    outcome: TransportResponse | TransportError,
    request: DeleteRequest,
) -> Result[DeletedImage]:
    if isinstance(outcome, TransportError):
        return Result.failure(str(outcome), outcome)
    if not outcome.is_success:
        return _status_failure("delete", outcome)
    if request.mode is DeleteMode.PUBLIC_ID:
        return Result.success(DeletedImage(public_id=request.identifier))
    return Result.success(DeletedImage(prefix=request.identifier))
