from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from urllib.parse import unquote, urlsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudup.core.constants import DEFAULT_API_BASE_URL, DEFAULT_DELIVERY_BASE_URL
from cloudup.core.errors import MissingCredentialError

BASE_DIR = Path(__file__).resolve().parents[2]

CREDENTIAL_KEYS = ("cloud_name", "api_key", "secret")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_secret: str = ""
    cloudinary_url: str = ""

    cloudinary_api_base_url: str = DEFAULT_API_BASE_URL
    cloudinary_delivery_base_url: str = DEFAULT_DELIVERY_BASE_URL
    cloudinary_timeout_seconds: float = Field(default=50.0, gt=0)

    log_level: str = "INFO"
    log_json: bool = True

    @property
    def parsed_cloudinary_url(self) -> dict[str, str]:
        if not self.cloudinary_url:
            return {}
        parts = urlsplit(self.cloudinary_url)
        if parts.scheme != "cloudinary":
            return {}
        return {
            "cloud_name": parts.hostname or "",
            "api_key": unquote(parts.username or ""),
            "secret": unquote(parts.password or ""),
        }


@dataclass(frozen=True)
class Credentials:
    cloud_name: str
    api_key: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credentials":
        from_url = settings.parsed_cloudinary_url
        return cls(
            cloud_name=settings.cloudinary_cloud_name or from_url.get("cloud_name", ""),
            api_key=settings.cloudinary_api_key or from_url.get("api_key", ""),
            secret=settings.cloudinary_secret or from_url.get("secret", ""),
        )

    def get(self, key: str) -> str:
        if key not in CREDENTIAL_KEYS:
            raise MissingCredentialError(f"unknown credential: {key}")
        value = getattr(self, key)
        if not value:
            raise MissingCredentialError(f"credential is not configured: {key}")
        return value

    def __repr__(self) -> str:
        return f"Credentials(cloud_name={self.cloud_name!r}, api_key={self.api_key!r}, secret='***')"


@lru_cache
def get_settings() -> Settings:
    return Settings()
