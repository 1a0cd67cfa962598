from cloudup.core.config import Credentials, get_settings
from cloudup.integrations.cloudinary.client import CloudinaryClient
from cloudup.integrations.cloudinary.transport import HttpTransport


def get_cloudinary_client() -> CloudinaryClient:
    settings = get_settings()
    return CloudinaryClient(
        credentials=Credentials.from_settings(settings),
        transport=HttpTransport(timeout=settings.cloudinary_timeout_seconds),
        api_base_url=settings.cloudinary_api_base_url,
    )
