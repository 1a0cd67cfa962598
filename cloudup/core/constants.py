from enum import StrEnum


class UploadKind(StrEnum):
    FILE = "file"
    URL = "url"


class DeleteMode(StrEnum):
    PUBLIC_ID = "public_id"
    PREFIX = "prefix"

    @property
    def query_param(self) -> str:
        return DELETE_QUERY_PARAMS[self]


DELETE_QUERY_PARAMS = {
    DeleteMode.PUBLIC_ID: "public_ids[]",
    DeleteMode.PREFIX: "prefix",
}

URL_SCHEMES = ("http://", "https://")
FILE_FIELD = "file"

JSON_ACCEPT_HEADERS = {"Accept": "application/json"}
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

DEFAULT_API_BASE_URL = "https://api.cloudinary.com/v1_1"
DEFAULT_DELIVERY_BASE_URL = "https://res.cloudinary.com"
