"""
Flat-file JSON storage for user documents.

Every user lives in its own ``<id>.json`` file inside a single
directory (``settings.data_dir``).  The helpers here are synchronous;
services call them through ``asyncio.to_thread`` so that file I/O
does not block the event loop.  There is no locking: concurrent
read-modify-write sequences on the same id follow last-write-wins.

Every failure is raised as ``StorageError``.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

from .config import settings
from .errors import StorageError

DOCUMENT_SUFFIX = ".json"


def get_data_dir() -> Path:
    """Compute the directory holding user documents.

    If ``settings.data_dir`` is absolute it is used directly, otherwise
    it is resolved relative to the project root.
    """
    data_dir = Path(settings.data_dir)
    if data_dir.is_absolute():
        return data_dir
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return (base_dir / data_dir).resolve()


def ensure_data_dir() -> Path:
    """Create the data directory (and parents) if it is missing."""
    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"Cannot create data directory: {exc}", str(data_dir)) from exc
    return data_dir


def user_file_path(user_id: str) -> Path:
    """Return the document path for ``user_id``.

    Ids that would escape the flat namespace are rejected.
    """
    if not user_id or user_id in {".", ".."} or "/" in user_id or "\\" in user_id or "\x00" in user_id:
        raise StorageError(f"Invalid user id {user_id!r}")
    return get_data_dir() / f"{user_id}{DOCUMENT_SUFFIX}"


def document_exists(path: Path) -> bool:
    return path.is_file()


def read_document(path: Path) -> Dict[str, Any]:
    """Load and parse a single JSON document."""
    try:
        raw = path.read_text(encoding="utf-8")
        document = json.loads(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StorageError(f"Cannot read {path.name}: {exc}", str(path)) from exc
    if not isinstance(document, dict):
        raise StorageError(f"{path.name} does not contain a JSON object", str(path))
    return document


def write_document(path: Path, document: Dict[str, Any]) -> None:
    """Serialize ``document`` as pretty-printed JSON and write it to ``path``."""
    try:
        payload = json.dumps(document, indent=2, ensure_ascii=False)
        path.write_text(payload, encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        raise StorageError(f"Cannot write {path.name}: {exc}", str(path)) from exc


def list_entries() -> List[str]:
    """Return every entry name in the data directory, creating it first."""
    data_dir = ensure_data_dir()
    try:
        return os.listdir(data_dir)
    except OSError as exc:
        raise StorageError(f"Cannot list data directory: {exc}", str(data_dir)) from exc


def list_document_paths(entries: List[str]) -> List[Path]:
    """Filter directory ``entries`` down to user documents, keeping their order."""
    data_dir = get_data_dir()
    return [data_dir / name for name in entries if name.endswith(DOCUMENT_SUFFIX)]
