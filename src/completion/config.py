# completion/config.py
from __future__ import annotations
from dataclasses import dataclass

# Candidate list
MAX_CANDIDATES: int = 8
MIN_PREFIX_LENGTH: int = 1
USER_VARIABLE_DESCRIPTION: str = "user defined variable"

# Text surface metrics: 14px monospace, 1.625 line height, 24px inner padding
CHAR_WIDTH_PX: float = 8.4
LINE_HEIGHT_PX: float = 22.75
ANCHOR_PADDING_PX: float = 24.0

# Environment switch for INFO logging (same as --verbose)
VERBOSE_ENV: str = "AUTOCOMPLETE_VERBOSE"


@dataclass(frozen=True, slots=True)
class CompletionOptions:
    """
    Tuning knobs for one editing session.

    Defaults mirror the module constants. Invalid values raise ValueError
    on construction so a bad configuration never reaches a keystroke.
    """
    max_candidates: int = MAX_CANDIDATES
    min_prefix_length: int = MIN_PREFIX_LENGTH
    char_width_px: float = CHAR_WIDTH_PX
    line_height_px: float = LINE_HEIGHT_PX
    anchor_padding_px: float = ANCHOR_PADDING_PX

    def __post_init__(self) -> None:
        if self.max_candidates <= 0:
            raise ValueError(f"max_candidates must be positive, got {self.max_candidates}")
        if self.min_prefix_length < 1:
            raise ValueError(f"min_prefix_length must be at least 1, got {self.min_prefix_length}")
        if self.char_width_px <= 0:
            raise ValueError(f"char_width_px must be positive, got {self.char_width_px}")
        if self.line_height_px <= 0:
            raise ValueError(f"line_height_px must be positive, got {self.line_height_px}")
        if self.anchor_padding_px < 0:
            raise ValueError(f"anchor_padding_px must not be negative, got {self.anchor_padding_px}")


DEFAULT_OPTIONS = CompletionOptions()
