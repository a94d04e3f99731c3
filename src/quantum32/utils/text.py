"""Text cleaning and tokenisation helpers used throughout the Quantum32 package."""

from __future__ import annotations

import re
from typing import Iterable, List

# ``\w`` is ASCII-only here so that accented letters outside the Spanish set
# are treated as punctuation.
_STRIP_RE = re.compile(r"[^\w\sáéíóúñü]", re.ASCII)
_SPACE_RE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset(
    {
        # articles
        "el", "la", "los", "las", "un", "una", "unos", "unas",
        # pronouns
        "yo", "tú", "él", "ella", "nosotros", "vosotros", "ellos", "ellas",
        "me", "te", "le", "se", "nos", "os", "les", "lo", "mi", "tu", "su",
        "este", "esta", "estos", "estas", "ese", "esa", "esos", "esas",
        "aquel", "aquella", "aquellos", "aquellas", "esto", "eso", "aquello",
        # prepositions
        "a", "ante", "bajo", "con", "contra", "de", "desde", "durante", "en",
        "entre", "hacia", "hasta", "mediante", "para", "por", "según", "sin",
        "sobre", "tras", "versus", "vía",
        # conjunctions
        "y", "e", "ni", "que", "o", "u", "pero", "mas", "sino", "aunque",
        "porque", "pues", "si", "como", "cuando", "donde",
        # common verbs
        "ser", "estar", "haber", "tener", "hacer", "poder", "decir", "ir",
        "ver", "dar", "saber", "querer", "llegar", "pasar", "deber", "poner",
        "parecer", "quedar", "creer", "hablar", "llevar", "dejar", "seguir",
        "encontrar", "llamar", "venir", "pensar", "salir", "volver", "tomar",
        # common adverbs
        "no", "muy", "más", "menos", "aún", "también", "tampoco", "sí",
        "ya", "siempre", "nunca", "jamás", "además", "así", "ahora",
        "después", "luego", "entonces", "bien", "mal", "solo", "solamente",
        "tan", "tanto", "mucho", "poco", "demasiado", "bastante",
        # other frequent words
        "todo", "cada", "alguno", "ninguno", "otro", "mismo", "tal",
        "vez", "año", "día", "tiempo", "parte", "caso", "cosa", "modo",
        "vida", "hombre", "mujer", "mundo", "país", "ciudad", "lugar",
        "forma", "tipo", "obra", "gran", "grande", "nuevo", "primera",
        "primero", "dos", "tres", "cuatro", "cinco", "número", "cual",
        "cuales", "qué", "quién", "cuál", "cuándo", "cómo", "dónde",
        # linking words
        "conforme", "incluso", "excepto", "salvo",
    }
)


def clean_text(value: str) -> str:
    """Lowercase ``value``, blank out punctuation and collapse whitespace."""
    lowered = value.lower()
    stripped = _STRIP_RE.sub(" ", lowered)
    return _SPACE_RE.sub(" ", stripped).strip()


def tokenize(value: str) -> List[str]:
    """Split cleaned text into tokens, dropping short tokens and stop-words."""
    return [
        token
        for token in value.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def clean_and_tokenize(value: str) -> List[str]:
    """Run :func:`clean_text` followed by :func:`tokenize`."""
    if not value:
        return []
    return tokenize(clean_text(value))


def sliding_window(tokens: Iterable[str], size: int) -> Iterable[List[str]]:
    """Yield windows of ``size`` tokens from ``tokens``."""
    buffer: List[str] = []
    for token in tokens:
        buffer.append(token)
        if len(buffer) == size:
            yield list(buffer)
            buffer.pop(0)
