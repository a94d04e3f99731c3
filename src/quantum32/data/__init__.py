"""Bundled data for the Quantum32 package."""

from __future__ import annotations

import json
from importlib import resources
from typing import Dict


def load_sample_document() -> Dict[str, str]:
    """Return the bundled ``{"title", "language", "text"}`` sample article."""
    with resources.files(__package__).joinpath("sample_document.json").open("r", encoding="utf-8") as stream:
        return json.load(stream)


__all__ = ["load_sample_document"]
