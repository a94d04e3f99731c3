"""Utility helpers shared across the Quantum32 package."""

from .io import load_jsonl, load_yaml_or_json, save_json, save_yaml_or_json
from .random import ensure_rng
from .text import STOP_WORDS, clean_and_tokenize, clean_text, sliding_window, tokenize

__all__ = [
    "STOP_WORDS",
    "clean_and_tokenize",
    "clean_text",
    "ensure_rng",
    "load_jsonl",
    "load_yaml_or_json",
    "save_json",
    "save_yaml_or_json",
    "sliding_window",
    "tokenize",
]
