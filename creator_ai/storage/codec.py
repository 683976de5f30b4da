from __future__ import annotations

from functools import lru_cache
import os
from pathlib import Path
from typing import Any, TypeVar

import orjson
from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from creator_ai.errors import MalformedDocumentError, NotFoundError, SerializationError, StorageIOError

T = TypeVar("T")

_MISSING: Any = object()


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def encode_document(value: Any) -> bytes:
    try:
        return orjson.dumps(_to_jsonable(value), option=orjson.OPT_INDENT_2)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Serialization failed: {exc}") from exc


def decode_document(raw: bytes | str, schema: Any, *, path: Path | str = "<memory>") -> Any:
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedDocumentError(path, str(exc)) from exc
    try:
        return _adapter(schema).validate_python(payload)
    except ValidationError as exc:
        raise MalformedDocumentError(path, str(exc)) from exc


def temp_path_for(path: Path) -> Path:
    return path.with_name(f"{path.name}.tmp")


def ensure_dir(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageIOError(f"Unable to create directory {directory}: {exc}") from exc


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write ``data`` so readers only ever see the old or the new file.

    The payload goes to a sibling ``*.tmp`` file which is flushed, fsynced and
    then renamed over ``path``. A temp file left behind by a failed rename is
    overwritten by the next attempt.
    """
    path = Path(path)
    ensure_dir(path.parent)
    tmp = temp_path_for(path)
    try:
        with open(tmp, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError as exc:
        raise StorageIOError(f"Write failed {tmp}: {exc}") from exc
    try:
        os.replace(tmp, path)
    except OSError as exc:
        raise StorageIOError(f"Save failed {path}: {exc}") from exc
    logger.debug("Wrote {} ({} bytes)", path, len(data))


def atomic_write_json(path: Path, value: Any) -> None:
    atomic_write_bytes(path, encode_document(value))


def atomic_write_text(path: Path, text: str) -> None:
    atomic_write_bytes(path, text.encode("utf-8"))


def read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(f"File not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageIOError(f"Unable to read {path}: {exc}") from exc


def read_document(path: Path, schema: Any, *, default: Any = _MISSING) -> Any:
    path = Path(path)
    if not path.exists():
        if default is _MISSING:
            raise NotFoundError(f"File not found: {path}")
        return default
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise StorageIOError(f"Unable to read {path}: {exc}") from exc
    return decode_document(raw, schema, path=path)


def remove_quietly(path: Path) -> bool:
    """Best-effort delete; a missing file is not an error."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("Unable to delete {}: {}", path, exc)
        return False
    return True
