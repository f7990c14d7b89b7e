"""
JSON document helpers shared by the repositories.

Filesystem and decode failures are re-raised as StorageError so callers only
deal with one error family.
"""

from __future__ import annotations

from pathlib import Path
import json

from .errors import StorageError


def read_document(path: Path):
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Malformed JSON document {path}: {exc}", path) from exc
    except OSError as exc:
        raise StorageError(f"Cannot read {path}: {exc}", path) from exc


def write_document(path: Path, payload, *, indent: int | None = None) -> None:
    try:
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=indent), encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Cannot write {path}: {exc}", path) from exc


def remove_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        raise StorageError(f"Cannot remove {path}: {exc}", path) from exc


def move_file(source: Path, target: Path) -> None:
    """Move source over target, replacing target when it already exists."""
    try:
        source.replace(target)
    except OSError as exc:
        raise StorageError(f"Cannot move {source} to {target}: {exc}", source) from exc


def ensure_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"Cannot create directory {path}: {exc}", path) from exc
    return path
