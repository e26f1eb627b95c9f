"""Tests for parsing remote `ls -lA` output."""

from core.adb_models import FileType
from core.listing import parse_ls_output, parse_ls_line, split_name_fields


SAMPLE_LISTING = """total 48
drwxrwx--x 4 root sdcard_rw 3452 2024-01-15 10:30 Android
drwxrwx--x 2 root sdcard_rw 3452 2024-02-01 08:05 DCIM
-rw-rw---- 1 root sdcard_rw 4096 2024-01-15 10:30 my file.txt
lrwxrwxrwx 1 root root        21 2024-01-15 10:30 link.txt -> target.txt

-rw-r--r-- 1 u0_a123 u0_a123 0 2023-12-31 23:59 .nomedia
"""


def test_regular_file_with_spaces_in_name() -> None:
    entry = parse_ls_line("-rw-r--r-- 1 root root 4096 2024-01-15 10:30 my file.txt")

    assert entry is not None
    assert entry.type == FileType.FILE
    assert entry.size == "4096"
    assert entry.date == "2024-01-15"
    assert entry.time == "10:30"
    assert entry.name == "my file.txt"
    assert entry.permissions == "-rw-r--r--"


def test_symlink_keeps_only_link_name() -> None:
    entry = parse_ls_line("lrwxrwxrwx 1 root root 21 2024-01-15 10:30 link.txt -> target.txt")

    assert entry.type == FileType.SYMLINK
    assert entry.name == "link.txt"
    assert entry.size == ""


def test_symlink_name_with_spaces() -> None:
    entry = parse_ls_line("lrwxrwxrwx 1 root root 21 2024-01-15 10:30 My Docs -> /storage/emulated/0/Documents")

    assert entry.name == "My Docs"


def test_directory_size_is_blank() -> None:
    entry = parse_ls_line("drwxrwx--x 2 root sdcard_rw 3452 2024-02-01 08:05 DCIM")

    assert entry.type == FileType.DIRECTORY
    assert entry.is_directory
    assert entry.size == ""
    assert entry.name == "DCIM"


def test_listing_preserves_order_and_skips_summary_and_blanks() -> None:
    listing = parse_ls_output(SAMPLE_LISTING)

    assert [e.name for e in listing] == ["Android", "DCIM", "my file.txt", "link.txt", ".nomedia"]
    assert [e.type for e in listing] == [
        FileType.DIRECTORY, FileType.DIRECTORY, FileType.FILE, FileType.SYMLINK, FileType.FILE,
    ]
    assert listing.skipped == 0


def test_short_lines_are_counted_as_skipped() -> None:
    output = "total 8\n-rw-r--r-- root root 12 file.txt\n-rw-r--r-- 1 root root 12 2024-01-01 00:00 ok.txt\n"

    listing = parse_ls_output(output)

    assert len(listing) == 1
    assert listing.entries[0].name == "ok.txt"
    assert listing.skipped == 1


def test_windows_line_endings() -> None:
    listing = parse_ls_output("total 4\r\n-rw-r--r-- 1 root root 5 2024-01-01 12:00 a.txt\r\n")

    assert listing.entries[0].name == "a.txt"


def test_empty_output() -> None:
    listing = parse_ls_output("")

    assert listing.entries == []
    assert listing.skipped == 0


def test_to_dict_uses_text_labels() -> None:
    entry = parse_ls_line("-rw-r--r-- 1 root root 4096 2024-01-15 10:30 a.txt")

    assert entry.to_dict()["type"] == "File"


def test_degraded_token_counts_still_yield_a_name() -> None:
    name, date, time = split_name_fields(["-rw-r--r--", "root", "root", "12", "x", "2024-01-01", "a.txt"])
    assert name == "a.txt"
    assert date == "2024-01-01"

    name, _, _ = split_name_fields(["drwxr-xr-x", "root", "root", "x", "y", "dir"])
    assert name == "dir"
