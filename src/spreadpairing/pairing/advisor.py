"""Pairing policy advisor.

Rates each pairing strategy against ten tournament-design goals and
recommends a strategy for a director's stated intent (competitive level,
field size and primary aim). The ratings are fixed editorial judgements, not
measurements; they do not influence how rounds are paired.
"""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from spreadpairing.exceptions import InvalidConfigurationException
from spreadpairing.models.policy import PairingKind
from spreadpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class PairingGoal:
    """One design goal a pairing strategy can serve."""

    id: str
    name: str
    description: str
    importance: str


PAIRING_GOALS: Dict[str, PairingGoal] = {
    goal.id: goal
    for goal in (
        PairingGoal(
            "aristomachy",
            "Aristomachy",
            "Top players meet late in the tournament to maximize suspense",
            "high",
        ),
        PairingGoal(
            "division_sizing",
            "Division Sizing",
            "Flexibility with varying player numbers and late registrations",
            "medium",
        ),
        PairingGoal(
            "exagony",
            "Exagony",
            "Avoid players from same country, team, or club playing each other",
            "medium",
        ),
        PairingGoal(
            "fairness",
            "Fairness",
            "Rankings accurately reflect actual performance and skill",
            "critical",
        ),
        PairingGoal(
            "implementability",
            "Implementability",
            "Manual or computational feasibility for tournament directors",
            "high",
        ),
        PairingGoal(
            "incentivization",
            "Incentivization",
            "No reward for strategic loss or sandbagging",
            "critical",
        ),
        PairingGoal(
            "inclusivity",
            "Inclusivity",
            "Allow underdogs a realistic shot at winning prizes",
            "high",
        ),
        PairingGoal(
            "monagony",
            "Monagony",
            "Avoid repeat matchups between the same players",
            "medium",
        ),
        PairingGoal(
            "monotony",
            "Monotony",
            "Stronger players should generally stay ahead of weaker ones",
            "high",
        ),
        PairingGoal(
            "suspense",
            "Suspense",
            "Tournament outcome remains unresolved until the final round",
            "high",
        ),
    )
}

# Goal scores out of 10, in PAIRING_GOALS order
GOAL_SCORES: Dict[PairingKind, Tuple[int, ...]] = {
    PairingKind.SWISS: (8, 9, 6, 9, 8, 9, 7, 8, 8, 7),
    PairingKind.FONTE_SWISS: (9, 8, 6, 10, 7, 10, 8, 7, 9, 8),
    PairingKind.KING_OF_HILL: (3, 7, 5, 6, 9, 8, 9, 4, 5, 10),
    PairingKind.ROUND_ROBIN: (5, 3, 2, 10, 4, 10, 6, 1, 8, 6),
    PairingKind.QUARTILE: (6, 7, 5, 7, 8, 8, 8, 6, 7, 7),
    PairingKind.MANUAL: (10, 10, 10, 5, 2, 5, 8, 10, 7, 10),
}

STRENGTHS: Dict[PairingKind, List[str]] = {
    PairingKind.SWISS: [
        "Excellent fairness and ranking accuracy",
        "Handles any player count",
        "No incentive for strategic losses",
        "Avoids rematches when possible",
    ],
    PairingKind.FONTE_SWISS: [
        "Maximum fairness through score-group pairing",
        "Excellent competitive balance",
        "Strong incentive structure",
        "Good suspense maintenance",
    ],
    PairingKind.KING_OF_HILL: [
        "Maximum suspense and excitement",
        "Very simple to implement",
        "Great for underdog stories",
        "Easy to understand",
    ],
    PairingKind.ROUND_ROBIN: [
        "Perfect fairness",
        "Excellent incentive structure",
        "Clear, unambiguous results",
    ],
    PairingKind.QUARTILE: [
        "Good balance of fairness and excitement",
        "Creates competitive games at all levels",
        "Relatively simple to implement",
    ],
    PairingKind.MANUAL: [
        "Perfect control over all aspects",
        "Can optimize for any specific goal",
        "Maximum flexibility",
    ],
}

WEAKNESSES: Dict[PairingKind, List[str]] = {
    PairingKind.SWISS: [
        "May lack excitement in early rounds",
        "Leaders can become apparent before final round",
    ],
    PairingKind.FONTE_SWISS: [
        "More complex to implement",
        "May create uneven table counts",
    ],
    PairingKind.KING_OF_HILL: [
        "Poor aristomachy (top players meet early)",
        "May force unwanted rematches",
        "Can be unfair to middle-tier players",
    ],
    PairingKind.ROUND_ROBIN: [
        "Only works with very small fields",
        "Requires many rounds",
        "No team/club separation possible",
    ],
    PairingKind.QUARTILE: [
        "May create artificial barriers between quartiles",
        "Less optimal than Swiss for pure fairness",
    ],
    PairingKind.MANUAL: [
        "Extremely difficult to implement well",
        "Prone to director bias",
        "Very time-consuming",
    ],
}

BEST_FOR: Dict[PairingKind, List[str]] = {
    PairingKind.SWISS: [
        "Competitive tournaments",
        "Large player fields",
        "When fairness is paramount",
    ],
    PairingKind.FONTE_SWISS: [
        "Elite competitive play",
        "When maximum fairness is required",
        "Tournaments with skilled directors",
    ],
    PairingKind.KING_OF_HILL: [
        "Casual tournaments",
        "Maximum suspense events",
        "Smaller player fields",
        "Entertainment-focused events",
    ],
    PairingKind.ROUND_ROBIN: [
        "Very small tournaments",
        "Qualification rounds",
        "Final championship rounds",
    ],
    PairingKind.QUARTILE: [
        "Mixed-skill tournaments",
        "Recreational events",
        "When you want multiple competitive tiers",
    ],
    PairingKind.MANUAL: [
        "Exhibition tournaments",
        "Special events",
        "Very experienced directors",
    ],
}

AVOID_IF: Dict[PairingKind, List[str]] = {
    PairingKind.SWISS: [
        "Maximum suspense is required",
        "Very small player fields (under 8)",
    ],
    PairingKind.FONTE_SWISS: [
        "Casual tournaments",
        "Directors unfamiliar with the system",
    ],
    PairingKind.KING_OF_HILL: [
        "Highly competitive tournaments",
        "When fairness is critical",
        "Large player fields",
    ],
    PairingKind.ROUND_ROBIN: [
        "More than 8-10 players",
        "Limited time/rounds",
        "Team separation needed",
    ],
    PairingKind.QUARTILE: [
        "Elite competitive events",
        "Very small or very large fields",
    ],
    PairingKind.MANUAL: [
        "Regular tournaments",
        "Inexperienced directors",
        "Large player fields",
    ],
}

# Contextual adjustments applied on top of the priority-goal totals
LEVEL_BONUSES: Dict[str, Dict[PairingKind, int]] = {
    "elite": {
        PairingKind.FONTE_SWISS: 20,
        PairingKind.SWISS: 15,
        PairingKind.KING_OF_HILL: -10,
    },
    "casual": {
        PairingKind.KING_OF_HILL: 15,
        PairingKind.QUARTILE: 10,
        PairingKind.FONTE_SWISS: -5,
    },
}
SMALL_FIELD = 8  # fewer players than this favours round-robin
LARGE_FIELD = 50  # more players than this rules round-robin out
SMALL_FIELD_BONUSES = {PairingKind.ROUND_ROBIN: 15, PairingKind.SWISS: -5}
LARGE_FIELD_BONUSES = {
    PairingKind.SWISS: 10,
    PairingKind.FONTE_SWISS: 5,
    PairingKind.ROUND_ROBIN: -30,
}
AIM_BONUSES: Dict[str, Dict[PairingKind, int]] = {
    "Max suspense": {PairingKind.KING_OF_HILL: 25, PairingKind.MANUAL: 15},
    "Max fairness": {
        PairingKind.FONTE_SWISS: 25,
        PairingKind.SWISS: 20,
        PairingKind.ROUND_ROBIN: 15,
    },
    "No repeats": {
        PairingKind.SWISS: 20,
        PairingKind.FONTE_SWISS: 15,
        PairingKind.ROUND_ROBIN: -50,  # everyone meets everyone
    },
}

QUICK_RECOMMENDATIONS: Dict[str, Tuple[PairingKind, str]] = {
    "max-suspense": (
        PairingKind.KING_OF_HILL,
        "Maximum excitement and unpredictability until the final round",
    ),
    "max-fairness": (
        PairingKind.FONTE_SWISS,
        "Most accurate rankings through score-group pairing",
    ),
    "no-repeats": (
        PairingKind.SWISS,
        "Best rematch avoidance while maintaining competitive balance",
    ),
    "casual-fun": (PairingKind.QUARTILE, "Competitive games at all skill levels"),
    "elite-competition": (
        PairingKind.FONTE_SWISS,
        "Professional-grade fairness and competitive integrity",
    ),
    "small-tournament": (
        PairingKind.ROUND_ROBIN,
        "Perfect fairness for small fields (8 players or fewer)",
    ),
}


def goal_score_label(score: int) -> str:
    """Verbal rating for a 0-10 goal score."""
    if score >= 9:
        return "Excellent"
    if score >= 7:
        return "Good"
    if score >= 5:
        return "Fair"
    if score >= 3:
        return "Poor"
    return "Critical"


@dataclass
class PolicyAnalysis:
    """How one strategy scores against the pairing goals."""

    kind: PairingKind
    goals: Dict[str, int] = field(default_factory=dict)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    best_for: List[str] = field(default_factory=list)
    avoid_if: List[str] = field(default_factory=list)

    @property
    def overall_score(self) -> int:
        """Mean goal score, rounded half up."""
        if not self.goals:
            return 0
        return int(sum(self.goals.values()) / len(self.goals) + 0.5)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "goals": {
                goal_id: {"score": score, "label": goal_score_label(score)}
                for goal_id, score in self.goals.items()
            },
            "overall_score": self.overall_score,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "best_for": list(self.best_for),
            "avoid_if": list(self.avoid_if),
        }


@dataclass
class DirectorIntent:
    """What a tournament director wants from the pairing system.

    Attributes:
        primary: Main aim, e.g. ``"Max suspense"``, ``"Max fairness"`` or
            ``"No repeats"``; anything else adds no bonus
        player_count: Expected field size
        rounds: Planned number of rounds
        competitive_level: ``"elite"``, ``"casual"`` or anything in between
        priority_goals: Goal ids from :data:`PAIRING_GOALS` to weight
    """

    primary: str = ""
    player_count: int = 32
    rounds: int = 7
    competitive_level: str = "competitive"
    priority_goals: List[str] = field(default_factory=list)


@dataclass
class PolicyRecommendation:
    primary: PairingKind
    alternatives: List[PairingKind]
    reasoning: str
    warnings: List[str]
    scores: Dict[PairingKind, int]


def analyze_policy(kind: PairingKind) -> PolicyAnalysis:
    """Rate one strategy against every pairing goal."""
    kind = PairingKind.parse(kind)
    return PolicyAnalysis(
        kind=kind,
        goals=dict(zip(PAIRING_GOALS, GOAL_SCORES[kind])),
        strengths=list(STRENGTHS[kind]),
        weaknesses=list(WEAKNESSES[kind]),
        best_for=list(BEST_FOR[kind]),
        avoid_if=list(AVOID_IF[kind]),
    )


def _add(scores: Dict[PairingKind, int], bonuses: Optional[Dict[PairingKind, int]]) -> None:
    for kind, bonus in (bonuses or {}).items():
        scores[kind] += bonus


def _context_warning(analysis: PolicyAnalysis, intent: DirectorIntent) -> bool:
    for condition in analysis.avoid_if:
        lowered = condition.lower()
        if "small" in lowered and intent.player_count < SMALL_FIELD:
            return True
        if "large" in lowered and intent.player_count > LARGE_FIELD:
            return True
        if "casual" in lowered and intent.competitive_level == "casual":
            return True
        if "competitive" in lowered and intent.competitive_level == "elite":
            return True
    return False


def recommend_policy(intent: DirectorIntent) -> PolicyRecommendation:
    """Recommend a pairing strategy for ``intent``.

    Each strategy earns the sum of its scores on the priority goals, then
    contextual bonuses for competitive level, field size and primary aim.
    Ties keep the declaration order of :class:`PairingKind`.

    Raises:
        InvalidConfigurationException: If a priority goal is unknown
    """
    unknown = [goal for goal in intent.priority_goals if goal not in PAIRING_GOALS]
    if unknown:
        raise InvalidConfigurationException(
            f"Unknown pairing goal(s): {', '.join(unknown)}"
        )

    analyses = {kind: analyze_policy(kind) for kind in PairingKind}
    scores = {
        kind: sum(analysis.goals[goal] for goal in intent.priority_goals)
        for kind, analysis in analyses.items()
    }
    _add(scores, LEVEL_BONUSES.get(intent.competitive_level))
    if intent.player_count < SMALL_FIELD:
        _add(scores, SMALL_FIELD_BONUSES)
    elif intent.player_count > LARGE_FIELD:
        _add(scores, LARGE_FIELD_BONUSES)
    _add(scores, AIM_BONUSES.get(intent.primary))

    ranked = sorted(scores, key=lambda kind: -scores[kind])
    best = ranked[0]
    analysis = analyses[best]
    goal_names = ", ".join(PAIRING_GOALS[goal].name for goal in intent.priority_goals)
    reasoning = (
        f"{best.display_name} is recommended because it scores highest on your "
        f"priority goals: {goal_names or 'none given'}. "
        f"{' and '.join(analysis.strengths[:2])}."
    )

    warnings: List[str] = []
    if analysis.weaknesses:
        warnings.append(f"Note: {analysis.weaknesses[0]}")
    if _context_warning(analysis, intent):
        warnings.append("This system may not be ideal for your tournament context")

    logger.debug("Policy scores for %s: %s", intent, scores)
    return PolicyRecommendation(
        primary=best,
        alternatives=ranked[1:4],
        reasoning=reasoning,
        warnings=warnings,
        scores=scores,
    )
