from __future__ import annotations


class NcCookbookError(Exception):
    pass


class ConfigError(NcCookbookError):
    pass


class ConfigurationMissing(NcCookbookError):
    pass


class ApiError(NcCookbookError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConnectionFailed(NcCookbookError):
    pass


class FetchError(NcCookbookError):
    pass


FetchFailed = FetchError


class ImageUnavailable(NcCookbookError):
    pass
