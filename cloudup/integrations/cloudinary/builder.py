from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from cloudup.core.config import Credentials
from cloudup.core.constants import FILE_FIELD, FORM_CONTENT_TYPE, JSON_ACCEPT_HEADERS
from cloudup.core.security import render_value
from cloudup.integrations.cloudinary.base import (
    DeleteRequest,
    FileUpload,
    TransportRequest,
    UploadTarget,
    UrlUpload,
)


def _https(base_url: str) -> str:
    base = base_url.rstrip("/")
    if base.startswith("http://"):
        return "https://" + base.removeprefix("http://")
    return base


def upload_endpoint(base_url: str, cloud_name: str) -> str:
    return f"{_https(base_url)}/{quote(cloud_name, safe='')}/image/upload"


def delete_endpoint(base_url: str, cloud_name: str) -> str:
    return f"{_https(base_url)}/{quote(cloud_name, safe='')}/resources/image/upload"


def prepare_upload_params(target: UploadTarget, params: Mapping[str, Any]) -> dict[str, Any]:
    prepared = {key: value for key, value in params.items() if key != FILE_FIELD}
    if isinstance(target, UrlUpload):
        prepared[FILE_FIELD] = target.url
    return prepared


def build_upload_request(
    target: UploadTarget,
    signed: Mapping[str, Any],
    credentials: Credentials,
    base_url: str,
) -> TransportRequest:
    url = upload_endpoint(base_url, credentials.get("cloud_name"))
    fields = {key: render_value(value) for key, value in signed.items() if key != FILE_FIELD}
    headers = dict(JSON_ACCEPT_HEADERS)

    if isinstance(target, FileUpload):
        return TransportRequest(
            method="POST",
            url=url,
            headers=headers,
            source=target.source,
            data=fields,
            file_path=target.path,
        )

    headers["Content-Type"] = FORM_CONTENT_TYPE
    fields[FILE_FIELD] = target.url
    return TransportRequest(method="POST", url=url, headers=headers, source=target.source, data=fields)


def build_delete_request(request: DeleteRequest, credentials: Credentials, base_url: str) -> TransportRequest:
    endpoint = delete_endpoint(base_url, credentials.get("cloud_name"))
    query = f"{request.mode.query_param}={quote(request.identifier, safe='/')}"
    return TransportRequest(
        method="DELETE",
        url=f"{endpoint}?{query}",
        headers={**JSON_ACCEPT_HEADERS, "Content-Type": FORM_CONTENT_TYPE},
        source=request.identifier,
        auth=(credentials.get("api_key"), credentials.get("secret")),
    )
