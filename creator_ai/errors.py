from __future__ import annotations

from pathlib import Path


class CreatorAIError(Exception):
    """Base error surfaced to callers with a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CreatorAIError):
    pass


class MalformedDocumentError(CreatorAIError):
    def __init__(self, path: Path | str, detail: str):
        super().__init__(f"Malformed document {path}: {detail}")
        self.path = Path(path)


class StorageIOError(CreatorAIError):
    pass


class SerializationError(StorageIOError):
    pass


class ConfigurationMissingError(CreatorAIError):
    pass


class SecretNotFoundError(ConfigurationMissingError):
    def __init__(self, endpoint_id: str):
        super().__init__(f"No API key stored for endpoint '{endpoint_id}'")
        self.endpoint_id = endpoint_id


class NetworkError(CreatorAIError):
    pass


class UpstreamError(CreatorAIError):
    def __init__(self, action: str, status_code: int, body: str):
        super().__init__(f"{action} failed: HTTP {status_code} {body}".rstrip())
        self.status_code = status_code
        self.body = body


class ResponseShapeError(CreatorAIError):
    pass
