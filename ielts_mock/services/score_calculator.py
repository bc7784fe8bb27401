"""Heuristic band scores derived from AnalysisStats."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..models import AnalysisStats, min_words_for

BASE_SCORE = 6.0
# Practical band range of this heuristic; it never reports 0-3 or above 9.
MIN_BAND = 4.0
MAX_BAND = 9.0


@dataclass(frozen=True)
class CriterionScores:
    task_achievement: float
    coherence_and_cohesion: float
    lexical_resource: float
    grammatical_range_and_accuracy: float

    @property
    def overall(self) -> float:
        total = (
            self.task_achievement
            + self.coherence_and_cohesion
            + self.lexical_resource
            + self.grammatical_range_and_accuracy
        )
        return round_half_up(total / 4)


def round_half_up(value: float, places: int = 1) -> float:
    """Round halves away from zero, the way score reports are usually read."""
    quantum = Decimal(1).scaleb(-places)
    # Trim binary noise first so 6.25 is not read as 6.2499999...
    exact = Decimal(str(round(value, places + 3)))
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_score(score: float) -> float:
    """Clamp to the band range, rounded to one decimal to drop float residue."""
    return round(max(MIN_BAND, min(MAX_BAND, score)), 1)


def grammar_score(stats: AnalysisStats) -> float:
    score = BASE_SCORE

    if stats.avg_words_per_sentence > 20:
        score += 1.0
    elif stats.avg_words_per_sentence > 15:
        score += 0.5
    elif stats.avg_words_per_sentence < 8:
        score -= 0.5

    score -= min(2.0, stats.grammar_issue_hit_count * 0.1)
    return clamp_score(score)


def coherence_score(stats: AnalysisStats) -> float:
    score = BASE_SCORE

    if stats.paragraph_count >= 3:
        score += 0.5
    if stats.paragraph_count >= 4:
        score += 0.5

    if stats.transition_hit_count >= 5:
        score += 1.0
    elif stats.transition_hit_count >= 3:
        score += 0.5

    return clamp_score(score)


def lexical_score(stats: AnalysisStats) -> float:
    score = BASE_SCORE

    diversity = stats.lexical_diversity
    if diversity > 0.7:
        score += 1.5
    elif diversity > 0.6:
        score += 1.0
    elif diversity > 0.5:
        score += 0.5
    elif diversity < 0.4:
        score -= 0.5

    unique_words = stats.unique_word_count
    if unique_words > 120:
        score += 1.0
    elif unique_words > 100:
        score += 0.5
    elif unique_words < 70:
        score -= 0.5

    if stats.advanced_vocab_hit_count >= 5:
        score += 1.0
    elif stats.advanced_vocab_hit_count >= 3:
        score += 0.5

    return clamp_score(score)


def task_score(stats: AnalysisStats, task_type: str) -> float:
    score = BASE_SCORE
    min_words = min_words_for(task_type)
    word_count = stats.word_count

    if word_count >= min_words * 1.2:
        score += 0.5
    if word_count >= min_words * 1.5:
        score += 0.5
    if word_count < min_words:
        score -= 1.0
    if word_count < min_words * 0.8:
        score -= 1.0

    return clamp_score(score)


def calculate_scores(stats: AnalysisStats, task_type: str) -> CriterionScores:
    return CriterionScores(
        task_achievement=task_score(stats, task_type),
        coherence_and_cohesion=coherence_score(stats),
        lexical_resource=lexical_score(stats),
        grammatical_range_and_accuracy=grammar_score(stats),
    )
