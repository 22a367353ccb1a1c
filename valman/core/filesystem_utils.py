"""Filesystem helpers for human-readable sizes and safe backup paths."""

from pathlib import Path


def format_file_size(num_bytes):
    """Format bytes into a human-readable string (B/KB/MB/GB/TB)."""
    value = float(max(0, num_bytes or 0))
    units = ["B", "KB", "MB", "GB", "TB"]
    idx = 0
    while value >= 1024 and idx < len(units) - 1:
        value /= 1024
        idx += 1
    if idx == 0:
        return f"{int(value)} {units[idx]}"
    return f"{value:.1f} {units[idx]}"


def safe_filename_in_dir(base_dir, filename):
    """Validate and return a direct-child filename within ``base_dir``."""
    if not filename:
        return None
    name = Path(filename).name
    if name != filename or name in {".", ".."}:
        return None
    base_dir = Path(base_dir)
    candidate = base_dir / name
    try:
        base_resolved = base_dir.resolve()
        candidate_resolved = candidate.resolve()
    except OSError:
        return None
    try:
        candidate_resolved.relative_to(base_resolved)
    except ValueError:
        return None
    if not candidate_resolved.exists() or not candidate_resolved.is_file():
        return None
    return name
