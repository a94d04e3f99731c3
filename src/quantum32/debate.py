# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Debate between the four boundary agents over which category dominates a document.

Each agent owns one boundary partition and one semantic category. A debate
runs through ``IDLE -> ARGUMENTS_PRESENTED -> VOTES_COLLECTED ->
WINNER_DECLARED -> IDLE``:

1. **Arguments.** Every agent argues with its boundary intensity
   (strength), its category share (relevance) and the document's
   holographic coherence, each on a 0-255 scale.
2. **Votes.** Every agent scores every other agent's argument with a fixed
   rubric, one point less for direct neighbours, capped at ``vote_cap``.
3. **Tally.** The agent with the most received votes wins; earlier agents
   win ties.
4. **Conclusion.** Win/loss counters are updated and the debate is appended
   to the history.

Phases must be called in order; a new debate requires a fresh
:meth:`DebateSimulator.initialise`.
"""

from __future__ import annotations

import copy
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from .config import DebateConfig
from .errors import DebatePhaseError
from .logging import get_logger
from .quantum import MAX_INTENSITY, round_half_up

if TYPE_CHECKING:
    from .model import AnalysisResult

LOGGER = get_logger(__name__)

AGENT_NAMES = ("Entities", "Actions", "Concepts", "Properties")

JUSTIFICATIONS = {
    0: (
        "This document is dominated by ENTITIES (people, places, organisations). "
        "It centres on specific actors and their identities, so it is most likely a "
        "biography, a historical article or a report on individuals or institutions."
    ),
    1: (
        "This document is dominated by ACTIONS (verbs, processes, procedures). "
        "It centres on how things are done, so it is most likely a tutorial, a "
        "practical guide or an instruction manual."
    ),
    2: (
        "This document is dominated by CONCEPTS (theories, ideas, abstract principles). "
        "It centres on explaining complex ideas, so it is most likely a scientific "
        "article, a philosophical essay or an academic text."
    ),
    3: (
        "This document is dominated by PROPERTIES (characteristics, types, "
        "classifications). It centres on describing attributes and taxonomies, so it "
        "is most likely an encyclopedia entry, a catalogue or a descriptive document."
    ),
}

# (threshold, points) pairs, checked from the top.
STRENGTH_RUBRIC = ((200, 4), (150, 3), (100, 2), (50, 1))
RELEVANCE_RUBRIC = ((200, 3), (150, 2), (100, 1))
COHERENCE_RUBRIC = ((200, 3), (150, 2), (100, 1))

# Cosmetic pauses in seconds, scaled by ``DebateConfig.pace``.
OPENING_PAUSE = 1.0
ARGUMENT_PAUSE = 0.8
PHASE_PAUSE = 1.5
VOTER_PAUSE = 0.5
TALLY_PAUSE = 0.8


class DebatePhase(str, Enum):
    IDLE = "idle"
    ARGUMENTS_PRESENTED = "arguments_presented"
    VOTES_COLLECTED = "votes_collected"
    WINNER_DECLARED = "winner_declared"


@dataclass
class Agent:
    id: int
    name: str
    boundary_intensity: int
    semantic_weight_share: float
    win_count: int = 0
    loss_count: int = 0


@dataclass(frozen=True)
class Vote:
    voter_id: int
    value: int


@dataclass
class Argument:
    agent_id: int
    strength: int
    relevance: int
    coherence: int
    score: int
    received_votes: List[Vote] = field(default_factory=list)

    @property
    def total_votes(self) -> int:
        return sum(vote.value for vote in self.received_votes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "strength": self.strength,
            "relevance": self.relevance,
            "coherence": self.coherence,
            "score": self.score,
            "received_votes": [vote.__dict__ for vote in self.received_votes],
            "total_votes": self.total_votes,
        }


@dataclass
class DebateRecord:
    title: str
    winner_id: int
    timestamp: datetime
    arguments: List[Argument]


@dataclass
class DebateOutcome:
    """Result of one complete debate."""

    title: str
    winner_id: int
    winner_name: str
    justification: str
    arguments: List[Argument]
    ranking: List[int]
    transcript: List[str]
    max_votes: int

    @property
    def totals(self) -> List[int]:
        return [argument.total_votes for argument in self.arguments]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "winner_id": self.winner_id,
            "winner_name": self.winner_name,
            "justification": self.justification,
            "totals": self.totals,
            "max_votes": self.max_votes,
            "ranking": list(self.ranking),
            "arguments": [argument.to_dict() for argument in self.arguments],
        }


def _rubric_points(value: int, rubric: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in rubric:
        if value > threshold:
            return points
    return 0


def argument_verdict(score: int) -> str:
    if score > 600:
        return "a VERY STRONG and convincing argument"
    if score > 450:
        return "a SOLID and reasonable argument"
    if score > 300:
        return "a VALID but moderate argument"
    return "a WEAK argument that needs more evidence"


def vote_remark(vote: int) -> str:
    if vote >= 8:
        return "Exceptional argument, voting with conviction."
    if vote >= 6:
        return "Solid and well-founded argument."
    if vote >= 4:
        return "Acceptable argument, but it could improve."
    return "Weak argument, insufficiently supported."


def _bar(value: float, maximum: float, width: int) -> str:
    filled = min(width, max(0, round_half_up(value / maximum * width))) if maximum else 0
    return "█" * filled + "░" * (width - filled)


class DebateSimulator:
    """Run debates between the four boundary agents.

    Win and loss counters survive across debates for the lifetime of the
    simulator; arguments are rebuilt on every :meth:`initialise`.
    """

    def __init__(
        self,
        config: DebateConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or DebateConfig()
        self._sleep = sleep
        self.phase = DebatePhase.IDLE
        self.agents: List[Agent] = []
        self.arguments: List[Argument] = []
        self.history: List[DebateRecord] = []
        self.transcript: List[str] = []
        self._result: Optional["AnalysisResult"] = None
        self._winner: Optional[int] = None

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------
    def _say(self, line: str = "") -> None:
        self.transcript.append(line)
        if line:
            LOGGER.info(line)

    def _pause(self, seconds: float) -> None:
        if self.config.pace > 0:
            self._sleep(seconds * self.config.pace)

    def _require(self, phase: DebatePhase) -> None:
        if self.phase is not phase:
            msg = f"Debate is in phase {self.phase.value!r}, expected {phase.value!r}"
            raise DebatePhaseError(msg)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def initialise(self, result: "AnalysisResult") -> List[Agent]:
        """Build the agents for ``result`` and reset the debate to ``IDLE``."""
        previous = {agent.id: agent for agent in self.agents}
        shares = list(result.categories.values())
        states = result.boundary_states
        self.agents = []
        for index, name in enumerate(AGENT_NAMES):
            prior = previous.get(index)
            self.agents.append(
                Agent(
                    id=index,
                    name=name,
                    boundary_intensity=states[index] if index < len(states) else 0,
                    semantic_weight_share=shares[index] if index < len(shares) else 0.0,
                    win_count=prior.win_count if prior else 0,
                    loss_count=prior.loss_count if prior else 0,
                )
            )
        self.arguments = []
        self.transcript = []
        self._result = result
        self._winner = None
        self.phase = DebatePhase.IDLE

        self._say(f'A debate is convened on "{result.title}".')
        self._say("The four Quantum32 agents meet to decide which semantic aspect dominates the document.")
        self._say("Arguments weigh boundary intensity, category relevance and document coherence.")
        self._say()
        self._pause(OPENING_PAUSE)
        return self.agents

    def present_arguments(self) -> List[Argument]:
        self._require(DebatePhase.IDLE)
        if self._result is None:
            raise DebatePhaseError("Debate has not been initialised")
        coherence = round_half_up(self._result.holographic_coherence * MAX_INTENSITY)

        self._say("PHASE 1: ARGUMENTS")
        for agent in self.agents:
            relevance = round_half_up(agent.semantic_weight_share * MAX_INTENSITY)
            strength = agent.boundary_intensity
            argument = Argument(
                agent_id=agent.id,
                strength=strength,
                relevance=relevance,
                coherence=coherence,
                score=strength + relevance + coherence,
            )
            self.arguments.append(argument)
            self._say(f"Agent {agent.id} ({agent.name}) takes the floor:")
            self._say(f"  Strength:   {strength}/255 [{_bar(strength, MAX_INTENSITY, 10)}]")
            self._say(f"  Relevance:  {relevance}/255 [{_bar(relevance, MAX_INTENSITY, 10)}]")
            self._say(f"  Coherence:  {coherence}/255 [{_bar(coherence, MAX_INTENSITY, 10)}]")
            self._say(f"  This is {argument_verdict(argument.score)}.")
            self._say()
            self._pause(ARGUMENT_PAUSE)

        self.phase = DebatePhase.ARGUMENTS_PRESENTED
        self._pause(PHASE_PAUSE)
        return self.arguments

    def calculate_vote(self, voter_id: int, candidate_id: int, argument: Argument) -> int:
        vote = (
            _rubric_points(argument.strength, STRENGTH_RUBRIC)
            + _rubric_points(argument.relevance, RELEVANCE_RUBRIC)
            + _rubric_points(argument.coherence, COHERENCE_RUBRIC)
        )
        if abs(voter_id - candidate_id) == 1:
            vote = max(0, vote - 1)
        return min(self.config.vote_cap, vote)

    def collect_votes(self) -> List[Argument]:
        self._require(DebatePhase.ARGUMENTS_PRESENTED)
        self._say("PHASE 2: CROSS VOTING")
        for voter in self.agents:
            self._say(f"Agent {voter.id} ({voter.name}) evaluates:")
            for argument in self.arguments:
                if argument.agent_id == voter.id:
                    continue
                vote = self.calculate_vote(voter.id, argument.agent_id, argument)
                argument.received_votes.append(Vote(voter_id=voter.id, value=vote))
                self._say(
                    f"  -> Agent {argument.agent_id}: {vote}/{self.config.vote_cap} points. "
                    f'"{vote_remark(vote)}"'
                )
            self._say()
            self._pause(VOTER_PAUSE)

        self.phase = DebatePhase.VOTES_COLLECTED
        self._pause(PHASE_PAUSE)
        return self.arguments

    def tally(self) -> int:
        self._require(DebatePhase.VOTES_COLLECTED)
        self._say("PHASE 3: TALLY")
        best = -1
        winner = 0
        for argument, agent in zip(self.arguments, self.agents):
            total = argument.total_votes
            share = total / self.config.max_votes * 100 if self.config.max_votes else 0.0
            breakdown = ", ".join(f"A{vote.voter_id}:{vote.value}" for vote in argument.received_votes)
            self._say(
                f"Agent {agent.id} ({agent.name}): {total}/{self.config.max_votes} votes ({share:.1f}%) "
                f"[{_bar(total, self.config.max_votes, 20)}] {breakdown}"
            )
            if total > best:
                best = total
                winner = argument.agent_id
        self._winner = winner
        self.phase = DebatePhase.WINNER_DECLARED
        self._pause(TALLY_PAUSE)
        return winner

    def conclude(self) -> DebateOutcome:
        self._require(DebatePhase.WINNER_DECLARED)
        result = self._result
        if result is None or self._winner is None:
            raise DebatePhaseError("Debate has no declared winner")
        winner = self.agents[self._winner]
        argument = self.arguments[self._winner]
        justification = JUSTIFICATIONS[winner.id]

        self._say()
        self._say("CONCLUSION")
        self._say(f"The winner is Agent {winner.id} ({winner.name}).")
        self._say(f'"{result.title}" is classified as a {winner.name.upper()} text.')
        self._say(justification)
        self._say(f"  Strength:  {argument.strength}/255 ({argument.strength / MAX_INTENSITY * 100:.1f}%)")
        self._say(f"  Relevance: {argument.relevance}/255 ({argument.relevance / MAX_INTENSITY * 100:.1f}%)")
        self._say(f"  Coherence: {argument.coherence}/255 ({argument.coherence / MAX_INTENSITY * 100:.1f}%)")
        self._say(f"  Votes:     {argument.total_votes}/{self.config.max_votes}")

        for agent in self.agents:
            if agent.id == winner.id:
                agent.win_count += 1
            else:
                agent.loss_count += 1

        snapshot = copy.deepcopy(self.arguments)
        self.history.append(
            DebateRecord(
                title=result.title,
                winner_id=winner.id,
                timestamp=datetime.now(timezone.utc),
                arguments=snapshot,
            )
        )
        ranking = [
            item.agent_id
            for item in sorted(self.arguments, key=lambda item: item.total_votes, reverse=True)
        ]
        outcome = DebateOutcome(
            title=result.title,
            winner_id=winner.id,
            winner_name=winner.name,
            justification=justification,
            arguments=snapshot,
            ranking=ranking,
            transcript=list(self.transcript),
            max_votes=self.config.max_votes,
        )
        self.phase = DebatePhase.IDLE
        self._result = None
        self._winner = None
        return outcome

    def run(self, result: "AnalysisResult") -> DebateOutcome:
        """Run every phase of a debate over ``result``."""
        self.initialise(result)
        self.present_arguments()
        self.collect_votes()
        self.tally()
        return self.conclude()
