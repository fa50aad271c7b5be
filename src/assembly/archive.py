"""Helpers for reading members out of the installer package (a zip file)."""
from __future__ import annotations

import logging
import os
import posixpath
import shutil
import zipfile
import zlib
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# Raised by zipfile while opening or reading members of a damaged or unusual
# archive: corrupt deflate data, unsupported compression, encrypted members.
READ_ERRORS = (
    OSError,
    EOFError,
    KeyError,
    RuntimeError,
    NotImplementedError,
    zipfile.BadZipFile,
    zlib.error,
)


def find_member(archive: zipfile.ZipFile, name: str) -> Optional[str]:
    """Return the shallowest member whose base name equals name.

    Members may sit at any depth inside the archive; ties at the same depth
    keep archive order.
    """
    matches = [
        info.filename
        for info in archive.infolist()
        if not info.is_dir() and posixpath.basename(info.filename) == name
    ]
    if not matches:
        return None
    return min(matches, key=lambda member: member.count("/"))


def find_first_member(archive: zipfile.ZipFile, names: Iterable[str]) -> Optional[str]:
    """Return the member for the first name in names that the archive holds."""
    for name in names:
        member = find_member(archive, name)
        if member is not None:
            return member
    return None


def extract_member(archive: zipfile.ZipFile, member: str, dest_dir: str) -> str:
    """Copy one member into dest_dir under its base name and return the path."""
    os.makedirs(dest_dir, exist_ok=True)
    dest_path = os.path.join(dest_dir, posixpath.basename(member))
    with archive.open(member) as src:
        try:
            with open(dest_path, "wb") as dst:
                shutil.copyfileobj(src, dst)
        except READ_ERRORS:
            _discard(dest_path)
            raise
    logger.debug("Extracted %s to %s", member, dest_path)
    return dest_path


def extract_named(archive_path: str, names: Iterable[str], dest_dir: str) -> str:
    """Extract the first of names found in the zip at archive_path.

    Raises:
        FileNotFoundError: None of the names is present.
        zipfile.BadZipFile: archive_path is not a zip file.
        Any of READ_ERRORS when a member cannot be decompressed; the partial
        output file is removed first.
    """
    names = list(names)
    with zipfile.ZipFile(archive_path) as archive:
        member = find_first_member(archive, names)
        if member is None:
            raise FileNotFoundError(f"None of {', '.join(names)} found in {archive_path}")
        return extract_member(archive, member, dest_dir)


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        logger.debug("Could not remove partial extraction: %s", path)
