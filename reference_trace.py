import re

PAGE_SIZE = 4 * 1024  # Each page is 4KB
PTE_SIZE = 4  # Bytes per entry in a single-level page table

SIZE_SUFFIXES = {
    'KB': 1024,
    'MB': 1024 * 1024,
    'GB': 1024 * 1024 * 1024,
}

DIGITS = re.compile(r"[+-]?[0-9]+")


def parse_memory_size(size_str):
    """
    Convert a memory size such as "8MB", "16kb" or "4096" to bytes.

    Suffixes are powers of 1024. A bare number is taken as bytes.
    """
    text = size_str.strip().upper()
    multiplier = 1
    for suffix, factor in SIZE_SUFFIXES.items():
        if text.endswith(suffix):
            multiplier = factor
            text = text[:-len(suffix)]
            break

    # Plain ASCII digits only, no underscores or other unicode digits
    if not DIGITS.fullmatch(text):
        raise ValueError(f"Invalid memory size: {size_str!r}")
    value = int(text)

    if value < 0:
        raise ValueError(f"Memory size cannot be negative: {size_str!r}")
    return value * multiplier


def frames_for_memory(memory_bytes, page_size=PAGE_SIZE):
    num_frames = memory_bytes // page_size
    if num_frames < 1:
        raise ValueError(
            f"Memory size must be at least {page_size} bytes (one page), "
            f"got {memory_bytes}")
    return num_frames


def read_trace(filename):
    """Read one page id per line, keeping order and duplicates."""
    with open(filename, 'r', newline='\n') as f:
        return tuple(strip_line_ending(line) for line in f)


def strip_line_ending(line):
    """Drop the newline, then at most one carriage return before it."""
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line
