"""Searching configured probing directories for files."""

import logging
import os
from pathlib import Path
from typing import Iterable, Union

LOGGER = logging.getLogger(__name__)


def resolve_file(directories: Iterable[Union[Path, str]], file_name: str,
                 recursive: bool = True) -> Union[Path, None]:
    """Find file_name in the given directories.

    Directories are searched in the order given. Within each directory the
    file is looked for directly first, then (when recursive) in each
    subdirectory, walking them in sorted order so the result doesn't
    depend on file system ordering. Directories that don't exist are
    skipped.

    Only plain file names are searched for. Names with a directory part,
    such as absolute paths or '../name', never match, so a result is always
    inside one of the directories.

    :return: The absolute path to the first match, or None.
    """

    if file_name in ('', '.', '..') or Path(file_name).name != file_name:
        LOGGER.debug("Refusing to probe for '%s', which is not a plain "
                     "file name.", file_name)
        return None

    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            LOGGER.debug("Skipping missing probing directory '%s'.",
                         directory)
            continue

        candidate = directory/file_name
        if candidate.is_file():
            LOGGER.debug("Found '%s' at '%s'.", file_name, candidate)
            return candidate.resolve()

        if not recursive:
            continue

        for base_dir, sub_dirs, files in os.walk(str(directory)):
            sub_dirs.sort()
            if file_name in files:
                found = Path(base_dir)/file_name
                LOGGER.debug("Found '%s' at '%s'.", file_name, found)
                return found.resolve()

    return None
