"""
Directory Listing Parser Module
Turns `ls -lA` output from the device into FileEntry records.

Toybox, toolbox and busybox all print long listings slightly differently:
owner/group and link-count columns come and go, symlinks carry a
``name -> target`` suffix and file names may contain spaces. Parsing is
lenient; lines that cannot be read are counted and dropped.
"""

import logging
import re
from typing import Optional

from .adb_models import DirectoryListing, FileEntry, FileType


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')

# Split into at most this many fields; the last keeps the remaining text intact
MAX_FIELDS = 9
MIN_FIELDS = 8

SYMLINK_SEPARATOR = " -> "


def split_name_fields(parts: list[str]) -> tuple[str, str, str]:
    """
    Pick (name, date, time) out of the tokens of one listing line.

    Canonical lines have date and time at tokens 5 and 6 and the name in
    everything after. Shorter lines give up time, then date. If nothing
    yields a name, the last token is the name and the two before it are
    time and date.
    """
    name = date = time = ""

    if len(parts) >= 8:
        date = parts[5]
        time = parts[6]
        name = " ".join(parts[7:])
    elif len(parts) == 7:
        date = parts[5]
        name = parts[6]
    elif len(parts) == 6:
        name = parts[5]

    if not name and parts:
        name = parts[-1]
        if len(parts) >= 3:
            time = parts[-2]
            date = parts[-3]

    return name.strip(), date.strip(), time.strip()


def parse_ls_line(line: str, min_fields: int = MIN_FIELDS) -> Optional[FileEntry]:
    """Parse one trimmed listing line, or return None if it is too short."""
    parts = _WHITESPACE.split(line, maxsplit=MAX_FIELDS - 1)
    if len(parts) < min_fields:
        return None

    permissions = parts[0]
    file_type = FileType.from_permissions(permissions)

    size = parts[4] if len(parts) > 4 else ""
    if file_type in (FileType.DIRECTORY, FileType.SYMLINK):
        size = ""

    name, date, time = split_name_fields(parts)

    if file_type == FileType.SYMLINK:
        name = name.split(SYMLINK_SEPARATOR)[0]

    return FileEntry(
        name=name,
        type=file_type,
        size=size,
        permissions=permissions,
        date=date,
        time=time,
    )


def parse_ls_output(output: str, min_fields: int = MIN_FIELDS) -> DirectoryListing:
    """
    Parse the output of `ls -lA` into entries, preserving line order.

    Args:
        output: Raw listing text.
        min_fields: Minimum tokens for a line to count as an entry.

    Returns:
        DirectoryListing with the entries and the number of skipped lines.
    """
    listing = DirectoryListing()

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line or line.startswith('total'):
            continue

        entry = parse_ls_line(line, min_fields)
        if entry is None:
            logger.debug("Skipping malformed listing line: %r", line)
            listing.skipped += 1
            continue

        listing.entries.append(entry)

    return listing
