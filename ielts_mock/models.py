"""Value objects shared by the feedback pipeline and the question generator."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

TASK1 = 'task1'
TASK2 = 'task2'
TASK_TYPES = (TASK1, TASK2)

# Minimum word counts required by the exam for each task
MIN_WORDS = {
    TASK1: 150,
    TASK2: 250,
}


class InvalidSubmissionError(ValueError):
    """Raised when a submission is missing its text or names an unknown task."""


def normalize_task_type(task_type: Optional[str]) -> str:
    """Lower-case and trim a task type, rejecting anything but task1/task2."""
    if task_type is not None and not isinstance(task_type, str):
        raise InvalidSubmissionError(f"Invalid task type: expected a string (got {type(task_type).__name__})")
    normalized = (task_type or '').strip().lower()
    if normalized not in TASK_TYPES:
        raise InvalidSubmissionError(f"Invalid task type: must be 'task1' or 'task2' (got {task_type!r})")
    return normalized


def min_words_for(task_type: str) -> int:
    return MIN_WORDS[task_type]


@dataclass(frozen=True)
class AnalysisStats:
    word_count: int
    sentence_count: int
    avg_words_per_sentence: float
    unique_word_count: int
    lexical_diversity: float
    paragraph_count: int
    transition_hit_count: int
    advanced_vocab_hit_count: int
    grammar_issue_hit_count: int


@dataclass
class CriterionScore:
    score: float
    feedback: str


@dataclass
class FeedbackResult:
    task_achievement: CriterionScore
    coherence_and_cohesion: CriterionScore
    lexical_resource: CriterionScore
    grammatical_range_and_accuracy: CriterionScore
    overall_score: float
    overall_feedback: str
    improved_version: str

    def criteria(self) -> Dict[str, CriterionScore]:
        return {
            'task_achievement': self.task_achievement,
            'coherence_and_cohesion': self.coherence_and_cohesion,
            'lexical_resource': self.lexical_resource,
            'grammatical_range_and_accuracy': self.grammatical_range_and_accuracy,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Question:
    id: int
    title: str
    description: str
    prompt: str
    time_limit_seconds: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
