"""Session state: the current analysis, the controller link and the debate simulator."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Optional, Sequence

from .config import Quantum32Config
from .debate import DebateOutcome, DebateSimulator
from .errors import SessionStateError
from .fetch import WikipediaFetcher
from .logging import get_logger
from .model import AnalysisResult, Document, Quantum32Pipeline
from .protocol import SIMPLE_COMMANDS, analysis_frame, debate_winner_command, encode_command
from .utils.random import RandomSource

LOGGER = get_logger(__name__)

Writer = Callable[[bytes], None]

# Most recent commands kept on the session for inspection.
SENT_HISTORY = 64


@dataclass
class Session:
    """Owns the single current analysis and the connection to the controller.

    The transport itself lives outside the package: :meth:`connect` takes a
    callable that writes one framed command, and every command goes through
    it as a single call.
    """

    config: Quantum32Config = field(default_factory=Quantum32Config)
    fetcher: Optional[WikipediaFetcher] = None
    current_result: Optional[AnalysisResult] = None
    sent: Deque[str] = field(default_factory=lambda: deque(maxlen=SENT_HISTORY))

    def __post_init__(self) -> None:
        self.pipeline = Quantum32Pipeline(config=self.config)
        self.debate = DebateSimulator(self.config.debate)
        self._writer: Optional[Writer] = None

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        return self._writer is not None

    def connect(self, writer: Writer) -> None:
        self._writer = writer
        LOGGER.info("Controller connected")

    def disconnect(self) -> None:
        if self._writer is not None:
            self._writer = None
            LOGGER.info("Controller disconnected")

    def send(self, command: str) -> None:
        if self._writer is None:
            raise SessionStateError("Controller is not connected")
        self._writer(encode_command(command))
        self.sent.append(command)
        LOGGER.info("Sent: %s", command)

    def send_simple(self, command: str) -> None:
        if command not in SIMPLE_COMMANDS:
            raise ValueError(f"Unknown command: {command!r}")
        self.send(command)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------
    def analyze(
        self,
        document: Document,
        corpus: Optional[Sequence[str]] = None,
        rng: RandomSource = None,
    ) -> AnalysisResult:
        """Analyse ``document`` and make it the current result."""
        self.current_result = self.pipeline.analyze(document, corpus=corpus, rng=rng)
        return self.current_result

    def analyze_title(self, title: str, language: Optional[str] = None) -> AnalysisResult:
        """Fetch ``title`` and analyse it; fetch failures leave the current result untouched."""
        if self.fetcher is None:
            self.fetcher = WikipediaFetcher(self.config.fetch)
        document = self.fetcher.fetch_document(title, language)
        return self.analyze(document)

    def clear(self) -> None:
        self.current_result = None

    def require_result(self) -> AnalysisResult:
        if self.current_result is None:
            raise SessionStateError("No analysis available")
        return self.current_result

    def analysis_frame(self) -> str:
        return analysis_frame(self.require_result(), title_limit=self.config.protocol.title_limit)

    def send_analysis(self) -> str:
        frame = self.analysis_frame()
        self.send(frame)
        return frame

    # ------------------------------------------------------------------
    # Debate
    # ------------------------------------------------------------------
    def run_debate(self) -> DebateOutcome:
        """Debate over the current result and notify the controller when connected."""
        outcome = self.debate.run(self.require_result())
        if self.connected:
            self.send(debate_winner_command(outcome.winner_id))
        return outcome
