"""Resolve and create the input and output directory trees."""

import logging
import os
from typing import Dict

from . import fs
from .models import DirSpec

logger = logging.getLogger('pressmark.dirs')


async def prepare_dirs(dir_spec: DirSpec, ensure_dir=None) -> Dict[str, str]:
    """
    Resolve each role's sub-path against the base dir and create it.

    Directories are created one after another; siblings may share a parent
    that does not exist yet.

    Returns:
        Mapping of role name to absolute path.
    """
    ensure_dir = ensure_dir or fs.ensure_dir_created
    logger.debug(f"Start resolve: {dir_spec.dir} {dir_spec.dirs}")
    full = {}
    for role, sub_path in dir_spec.dirs.items():
        full_dir = os.path.abspath(os.path.join(dir_spec.dir, sub_path))
        full[role] = full_dir
        await ensure_dir(full_dir)
        logger.debug(f"created {role}: {full_dir}")
    logger.debug("End resolve")
    return full
