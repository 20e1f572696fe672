"""Human-readable formatting of durations and sizes."""


def format_duration(ms: float) -> str:
    """Format milliseconds, e.g. "245ms" or "1.50s"."""
    if ms < 1000:
        return f"{round(ms)}ms"
    return f"{ms / 1000:.2f}s"


def format_bytes(size: float) -> str:
    """Format a byte count, e.g. "512 B", "85.00 KB" or "1.20 MB"."""
    if size < 1024:
        return f"{size:g} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"
