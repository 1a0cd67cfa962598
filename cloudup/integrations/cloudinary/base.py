from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from cloudup.core.constants import DeleteMode, UploadKind
from cloudup.core.errors import UnknownDeleteModeError


@dataclass(frozen=True)
class FileUpload:
    path: str
    kind: UploadKind = field(default=UploadKind.FILE, init=False)

    @property
    def source(self) -> str:
        return self.path


@dataclass(frozen=True)
class UrlUpload:
    url: str
    kind: UploadKind = field(default=UploadKind.URL, init=False)

    @property
    def source(self) -> str:
        return self.url


UploadTarget = FileUpload | UrlUpload


@dataclass(frozen=True)
class DeleteRequest:
    identifier: str
    mode: DeleteMode

    @classmethod
    def from_options(cls, identifier: str, opts: Mapping[Any, Any] | None) -> "DeleteRequest":
        raw = (opts or {}).get("type")
        try:
            mode = DeleteMode(raw)
        except ValueError:
            raise UnknownDeleteModeError(f"unknown delete type: {raw!r}") from None
        return cls(identifier=identifier, mode=mode)


@dataclass
class TransportRequest:
    method: str
    url: str
    headers: dict[str, str]
    source: str
    data: dict[str, str] | None = None
    file_path: str | None = None
    auth: tuple[str, str] | None = None


@dataclass
class TransportResponse:
    status_code: int
    body: bytes

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
