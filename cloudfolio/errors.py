"""Exceptions raised by cloudfolio."""


class CloudfolioError(Exception):
    """Base class for errors the command-line tools report and exit on."""


class ConfigError(CloudfolioError):
    """Credentials or settings are missing."""


class TransportError(CloudfolioError):
    """A call to the Cloudinary API failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
