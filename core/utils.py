"""
Shared Utilities Module
Size formatting helpers used by the info readers and the CLI.
"""


def kb_to_gb(kilobytes: float) -> float:
    """Convert binary kilobytes (KiB) to gibibytes."""
    return kilobytes / 1024 / 1024


def format_gb(kilobytes: float) -> str:
    """Format a KiB count as gibibytes with one decimal, e.g. '7.8 GB'."""
    return f"{kb_to_gb(kilobytes):.1f} GB"


def format_size(size_bytes: int) -> str:
    """Format bytes to human readable string."""
    if size_bytes >= 1024 ** 3:
        return f"{size_bytes / (1024**3):.2f} GB"
    elif size_bytes >= 1024 ** 2:
        return f"{size_bytes / (1024**2):.2f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.2f} KB"
    return f"{size_bytes} B"
