# src/e2e/test_config_options.py

import pytest

from completion.config import CompletionOptions, DEFAULT_OPTIONS
from completion.engine import AutocompleteController


def test_defaults():
    assert DEFAULT_OPTIONS.max_candidates == 8
    assert DEFAULT_OPTIONS.min_prefix_length == 1


@pytest.mark.parametrize("kwargs", [
    {"max_candidates": 0},
    {"max_candidates": -3},
    {"min_prefix_length": 0},
    {"char_width_px": 0},
    {"line_height_px": -1},
    {"anchor_padding_px": -0.5},
])
def test_bad_options_fail_at_construction(kwargs):
    with pytest.raises(ValueError):
        CompletionOptions(**kwargs)


def test_controller_rejects_bad_options_before_any_event():
    with pytest.raises(ValueError):
        AutocompleteController(options=CompletionOptions(max_candidates=0))
