"""Raw-text checks against a cue sheet -- no structured parsing."""

import re
from pathlib import Path

import chardet
from loguru import logger

from .models import CUE_FORMAT_MARKERS, FIRST_TRACK_AT_ZERO

log = logger.bind(stage="cuesheet")

_INDEX_LINE = re.compile(r"INDEX\s+0([01])\b", re.IGNORECASE)

# chardet names for the 8-bit Cyrillic code pages --cyrillic is meant for
CYRILLIC_ENCODINGS: frozenset[str] = frozenset(
    {"windows-1251", "koi8-r", "maccyrillic", "iso-8859-5", "ibm866", "ibm855"}
)


def read_cue_text(cue_file: Path) -> str:
    """Read a cue sheet byte-for-byte as text.

    latin-1 maps every byte to one character, so ASCII markers are found
    whatever the sheet's real encoding is.
    """
    return cue_file.read_bytes().decode("latin-1")


def has_supported_format(text: str) -> bool:
    """True if the sheet mentions a .ape/.flac/.wav/.wv file (any case)."""
    lowered = text.lower()
    return any(marker in lowered for marker in CUE_FORMAT_MARKERS)


def starts_at_zero(text: str) -> bool:
    """True if track 1 starts at 00:00:00 (no pre-gap)."""
    return FIRST_TRACK_AT_ZERO in text


def pregap_lines(text: str) -> list[str]:
    """INDEX 00/01 lines up to and including the first INDEX 01."""
    lines = []
    for line in text.splitlines():
        match = _INDEX_LINE.search(line)
        if not match:
            continue
        lines.append(line.strip())
        if match.group(1) == "1":
            break
    return lines


def detect_encoding(cue_file: Path) -> str | None:
    """Best-guess encoding name (lowercase) of the sheet, or None."""
    result = chardet.detect(cue_file.read_bytes())
    encoding = result.get("encoding") if result else None
    if not encoding:
        return None
    log.debug(
        f"Detected {encoding} (confidence {result.get('confidence', 0):.0%}) "
        f"for {cue_file.name}"
    )
    return encoding.lower()


def looks_cyrillic(cue_file: Path) -> bool:
    """True if the sheet appears to use an 8-bit Cyrillic code page."""
    return detect_encoding(cue_file) in CYRILLIC_ENCODINGS
