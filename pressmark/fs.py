"""
Filesystem helpers.

The blocking calls run in worker threads so the build graph can overlap
reads, renders and writes on the event loop.
"""

import asyncio
import logging
import os
from typing import Callable, Iterable, List, Optional, Tuple

from .errors import DirectoryCreateError, WriteError
from .models import SourceFile

logger = logging.getLogger('pressmark.fs')


def _read(path):
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _write(dir_path, name, data):
    file_path = os.path.join(dir_path, name)
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(data)
    except (IOError, OSError, PermissionError) as e:
        raise WriteError(f"Failed to write {file_path}: {e}") from e
    logger.debug(f"Wrote {file_path}")


def _ensure_dir(path):
    try:
        os.makedirs(path, exist_ok=True)
    except (IOError, OSError, PermissionError) as e:
        raise DirectoryCreateError(f"Failed to create directory {path}: {e}") from e


async def read(path: str) -> str:
    return await asyncio.to_thread(_read, path)


async def write(dir_path: str, name: str, data: str) -> None:
    await asyncio.to_thread(_write, dir_path, name, data)


async def write_many(items: Iterable[Tuple[str, str, str]]) -> None:
    """Write (dir, name, data) triples concurrently."""
    await asyncio.gather(*(write(dir_path, name, data) for dir_path, name, data in items))


async def ensure_dir_created(path: str) -> None:
    """Create ``path`` and any missing parents; existing directories are fine."""
    await asyncio.to_thread(_ensure_dir, path)


async def read_files_in_dir(dir_path: str,
                            predicate: Optional[Callable[[str], bool]] = None) -> List[SourceFile]:
    """
    Read the regular files directly inside ``dir_path``.

    Files are returned sorted by name. ``predicate`` receives each file name.
    """
    names = await asyncio.to_thread(os.listdir, dir_path)
    paths = []
    for name in sorted(names):
        path = os.path.join(dir_path, name)
        if not os.path.isfile(path):
            continue
        if predicate is not None and not predicate(name):
            continue
        paths.append((name, path))
    contents = await asyncio.gather(*(read(path) for _, path in paths))
    return [SourceFile(name, path, data) for (name, path), data in zip(paths, contents)]
