"""Time code formatting for playheads and project durations."""

TIME_CODE_FORMATS = ("MM:SS", "HH:MM:SS", "HH:MM:SS:CS")


def format_time_code(seconds: float, fmt: str = "MM:SS") -> str:
    """Format *seconds* (negative values clamp to 0) as a time code.

    Formats: "MM:SS", "HH:MM:SS", "HH:MM:SS:CS" (CS = centiseconds).
    """
    if fmt not in TIME_CODE_FORMATS:
        raise ValueError(f"Unknown time code format: {fmt!r}")
    total = max(0.0, seconds)
    hours = int(total // 3600)
    minutes = int((total % 3600) // 60)
    secs = int(total % 60)
    centis = int(total * 100) % 100

    if fmt == "HH:MM:SS":
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    if fmt == "HH:MM:SS:CS":
        return f"{hours:02d}:{minutes:02d}:{secs:02d}:{centis:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_duration(seconds: float) -> str:
    """MM:SS below one hour, HH:MM:SS from one hour up."""
    if seconds >= 3600:
        return format_time_code(seconds, "HH:MM:SS")
    return format_time_code(seconds, "MM:SS")
