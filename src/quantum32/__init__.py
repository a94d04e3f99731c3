"""Quantum32 package."""

from .config import Quantum32Config, load_config
from .debate import DebateOutcome, DebatePhase, DebateSimulator
from .errors import (
    DebatePhaseError,
    DegenerateInputWarning,
    DocumentNotFoundError,
    FetchError,
    Quantum32Error,
    SessionStateError,
)
from .fetch import WikipediaFetcher, fetch_document
from .model import AnalysisResult, Document, Quantum32Pipeline
from .protocol import analysis_frame, build_frame
from .quantum import BulkMask, Quantum32Adapter, Quantum32State
from .semantic import SemanticAnalyzer
from .session import Session
from .vectorizer import TfidfVectorizer

__all__ = [
    "AnalysisResult",
    "BulkMask",
    "DebateOutcome",
    "DebatePhase",
    "DebatePhaseError",
    "DebateSimulator",
    "DegenerateInputWarning",
    "Document",
    "DocumentNotFoundError",
    "FetchError",
    "Quantum32Adapter",
    "Quantum32Config",
    "Quantum32Error",
    "Quantum32Pipeline",
    "Quantum32State",
    "SemanticAnalyzer",
    "Session",
    "SessionStateError",
    "TfidfVectorizer",
    "WikipediaFetcher",
    "analysis_frame",
    "build_frame",
    "fetch_document",
    "load_config",
]

__version__ = "0.1.0"
