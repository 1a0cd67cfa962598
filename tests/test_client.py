import json
from urllib.parse import parse_qs

import httpx
import pytest
from structlog.testing import capture_logs

from cloudup.core.config import Credentials, Settings
from cloudup.core.constants import DEFAULT_API_BASE_URL
from cloudup.core.errors import MissingCredentialError, TransportError, UnknownDeleteModeError
from cloudup.integrations.cloudinary.client import CloudinaryClient
from cloudup.integrations.cloudinary.transport import HttpTransport

CREDS = Credentials(cloud_name="demo", api_key="1234", secret="abcd")


def make_client(handler, credentials: Credentials = CREDS) -> tuple[CloudinaryClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        request.read()
        seen.append(request)
        return handler(request)

    transport = HttpTransport(timeout=5, transport=httpx.MockTransport(record))
    return CloudinaryClient(credentials, transport=transport, clock=lambda: 1315060510), seen


def test_url_upload_is_signed_and_form_encoded():
    client, seen = make_client(lambda r: httpx.Response(200, json={"public_id": "sample_image", "width": 640}))
    result = client.upload("https://example.com/a.png", {"public_id": "sample_image"})

    assert result.ok
    assert result.value.public_id == "sample_image"
    assert result.value.source == "https://example.com/a.png"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert request.headers["accept"] == "application/json"
    form = {key: values[0] for key, values in parse_qs(request.content.decode()).items()}
    assert form == {
        "public_id": "sample_image",
        "file": "https://example.com/a.png",
        "timestamp": "1315060510",
        "signature": "b4ad47fb4e25c7bf5f92a20089f9db59bc302313",
        "api_key": "1234",
    }


def test_file_upload_sends_multipart(tmp_path):
    image = tmp_path / "a.png"
    image.write_bytes(b"fake-png-bytes")
    client, seen = make_client(lambda r: httpx.Response(200, json={"public_id": "a"}))

    result = client.upload(str(image), {"tags": ["x", "y"]})

    assert result.ok
    assert result.value.source == str(image)
    request = seen[0]
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.content
    assert b"fake-png-bytes" in body
    assert b'name="file"; filename="a.png"' in body
    assert b'name="tags"' in body and b"x,y" in body
    assert b'name="signature"' in body


def test_upload_rejects_non_string_input():
    client, seen = make_client(lambda r: httpx.Response(200, json={}))
    result = client.upload(123, {})
    assert not result.ok
    assert "123" in result.error
    assert seen == []


def test_upload_missing_file_is_error_result(tmp_path):
    client, seen = make_client(lambda r: httpx.Response(200, json={}))
    result = client.upload(str(tmp_path / "missing.png"))
    assert not result.ok
    assert isinstance(result.cause, TransportError)
    assert seen == []


def test_upload_remote_error_message():
    client, _ = make_client(lambda r: httpx.Response(401, json={"error": {"message": "Invalid Signature"}}))
    result = client.upload("http://example.com/a.png")
    assert result.error == "Invalid Signature"


def test_upload_malformed_json_is_error_result():
    client, _ = make_client(lambda r: httpx.Response(200, content=b"not json"))
    result = client.upload("https://example.com/a.png")
    assert not result.ok
    assert "invalid JSON" in result.error


def test_connection_error_is_error_result():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(refuse)
    result = client.upload("https://example.com/a.png")
    assert not result.ok
    assert isinstance(result.cause, TransportError)
    deleted = client.delete("abc", {"type": "public_id"})
    assert not deleted.ok


def test_delete_uses_basic_auth_and_query():
    client, seen = make_client(lambda r: httpx.Response(200, json={"deleted": {"abc123": "deleted"}}))
    result = client.delete("abc123", {"type": "public_id"})

    assert result.ok
    assert result.value.public_id == "abc123"
    request = seen[0]
    assert request.method == "DELETE"
    assert request.url.path == "/v1_1/demo/resources/image/upload"
    assert request.url.params["public_ids[]"] == "abc123"
    assert request.headers["authorization"].startswith("Basic ")


def test_delete_by_prefix():
    client, seen = make_client(lambda r: httpx.Response(200, content=json.dumps({}).encode()))
    result = client.delete("folder/", {"type": "prefix"})
    assert result.value.prefix == "folder/"
    assert seen[0].url.params["prefix"] == "folder/"


def test_delete_non_2xx_is_error_result():
    client, _ = make_client(lambda r: httpx.Response(500, content=b"oops"))
    result = client.delete("abc", {"type": "prefix"})
    assert not result.ok
    assert result.cause.status_code == 500


def test_delete_rejects_non_string_and_unknown_mode():
    client, seen = make_client(lambda r: httpx.Response(200, json={}))
    assert not client.delete(42, {"type": "public_id"}).ok
    with pytest.raises(UnknownDeleteModeError):
        client.delete("abc123", {"type": "unknown"})
    assert seen == []


def test_missing_secret_is_configuration_error():
    client, _ = make_client(lambda r: httpx.Response(200, json={}), Credentials("demo", "1234", ""))
    with pytest.raises(MissingCredentialError):
        client.upload("https://example.com/a.png")


def test_client_logs_only_at_debug_level():
    client, _ = make_client(lambda r: httpx.Response(500, content=b"oops"))
    with capture_logs() as logs:
        client.upload("https://example.com/a.png")
        client.delete("abc", {"type": "public_id"})
    events = {entry["event"] for entry in logs}
    assert {"cloudinary_upload", "cloudinary_upload_failed", "cloudinary_delete", "cloudinary_delete_failed"} <= events
    assert {entry["log_level"] for entry in logs} == {"debug"}


def test_default_base_url_matches_settings():
    client = CloudinaryClient(CREDS)
    assert client.api_base_url == Settings(_env_file=None).cloudinary_api_base_url == DEFAULT_API_BASE_URL
