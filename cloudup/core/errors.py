class CloudupError(Exception):
    pass


class CloudupConfigError(CloudupError):
    pass


class MissingCredentialError(CloudupConfigError):
    pass


class UnknownDeleteModeError(CloudupConfigError):
    pass


class TransportError(CloudupError):
    def __init__(self, message: str, status_code: int | None = None, body: bytes = b"") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(CloudupError):
    pass


class RemoteServiceError(CloudupError):
    pass
