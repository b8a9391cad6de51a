"""Project-wide configuration and constants."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
INPUT_DIR = DATA_DIR / "documents"
OUTPUT_DIR = DATA_DIR / "extracted"
LOG_DIR = DATA_DIR / "logs"

# Character class of border symbols stripped by `trim_to_boundary_delimiters`.
SPECIAL_CHARACTERS = (
    r"[ \[\]\^\-_*×―()$%~!@#…&￥—+=<>《》！?？/:：•`·、。，；,.;\"‘’“”]"
)

DEFAULT_LOOKAROUND_FLAGS = re.MULTILINE | re.DOTALL
NULL_TOKEN = "null"


@dataclass(slots=True, frozen=True)
class ExtractionConfig:
    """Parameters controlling the batch extraction CLI."""

    input_glob: str = "*.json"
    text_field: str = "text"
    max_documents: int | None = None
