"""
Feedback pipeline for IELTS writing responses.
Scores a response on the four IELTS criteria, writes band-appropriate
narrative feedback and an improved version of the text.
"""
from __future__ import annotations

import random
import time
from typing import Optional, Tuple

from flask import current_app, has_app_context

from ..models import (
    CriterionScore,
    FeedbackResult,
    InvalidSubmissionError,
    normalize_task_type,
)
from . import service_logger
from .feedback_bands import (
    coherence_feedback,
    grammar_feedback,
    lexical_feedback,
    overall_feedback,
    task_feedback,
)
from .rewrite_engine import generate_improved_version
from .score_calculator import calculate_scores
from .text_analyzer import analyze_text

NO_RESPONSE_TEXT = "No response provided."


def validate_submission(task_type: Optional[str], response_text: Optional[str]) -> Tuple[str, str]:
    """Return the normalized task type and text, or raise InvalidSubmissionError."""
    if response_text is not None and not isinstance(response_text, str):
        raise InvalidSubmissionError(
            f"Invalid response: expected a string (got {type(response_text).__name__})"
        )
    if not response_text or not response_text.strip():
        raise InvalidSubmissionError("Missing required parameters: a response text is required")
    return normalize_task_type(task_type), response_text


def default_feedback(response_text: Optional[str] = None) -> FeedbackResult:
    """Fixed result returned whenever the pipeline cannot produce a real one."""
    has_text = isinstance(response_text, str) and response_text.strip()
    improved = response_text if has_text else NO_RESPONSE_TEXT
    return FeedbackResult(
        task_achievement=CriterionScore(
            score=6.0,
            feedback="Your response addresses the task, but could be more comprehensive.",
        ),
        coherence_and_cohesion=CriterionScore(
            score=6.0,
            feedback="Your ideas are generally well-organized, but transitions could be improved.",
        ),
        lexical_resource=CriterionScore(
            score=6.0,
            feedback="You use a reasonable range of vocabulary with some errors in word choice.",
        ),
        grammatical_range_and_accuracy=CriterionScore(
            score=6.0,
            feedback="You demonstrate a mix of simple and complex sentences with some grammatical errors.",
        ),
        overall_score=6.0,
        overall_feedback=(
            "Your writing shows competence but needs improvement in several areas to achieve a higher band score."
        ),
        improved_version=improved,
    )


def _simulate_latency() -> None:
    if not has_app_context():
        return
    delay = float(current_app.config.get('ANALYSIS_DELAY_SECONDS', 0) or 0)
    if delay > 0:
        time.sleep(delay)


def generate_enhanced_feedback(task_type: str, response_text: str, rng: random.Random) -> FeedbackResult:
    """Run analysis, scoring, feedback and rewriting for a validated submission.

    Errors propagate; ``generate_feedback`` is the guarded entry point.
    """
    _simulate_latency()

    stats = analyze_text(response_text, task_type)
    scores = calculate_scores(stats, task_type)
    service_logger().info(
        "Scored %s response (word_count=%d, overall=%.1f)", task_type, stats.word_count, scores.overall
    )

    return FeedbackResult(
        task_achievement=CriterionScore(
            score=scores.task_achievement,
            feedback=task_feedback(scores.task_achievement, task_type, stats.word_count, rng),
        ),
        coherence_and_cohesion=CriterionScore(
            score=scores.coherence_and_cohesion,
            feedback=coherence_feedback(scores.coherence_and_cohesion, rng),
        ),
        lexical_resource=CriterionScore(
            score=scores.lexical_resource,
            feedback=lexical_feedback(scores.lexical_resource, rng),
        ),
        grammatical_range_and_accuracy=CriterionScore(
            score=scores.grammatical_range_and_accuracy,
            feedback=grammar_feedback(scores.grammatical_range_and_accuracy, rng),
        ),
        overall_score=scores.overall,
        overall_feedback=overall_feedback(scores.overall, task_type),
        improved_version=generate_improved_version(response_text, task_type, rng),
    )


def generate_feedback(
    task_type: Optional[str],
    response_text: Optional[str],
    rng: Optional[random.Random] = None,
) -> FeedbackResult:
    """Score a response; never raises.

    Invalid input and internal failures both yield ``default_feedback``.
    """
    try:
        normalized_task, text = validate_submission(task_type, response_text)
        return generate_enhanced_feedback(normalized_task, text, rng or random.Random())
    except InvalidSubmissionError as e:
        service_logger().warning(f"Rejected submission: {e}")
    except Exception as e:
        service_logger().error(f"Error generating feedback: {e}", exc_info=True)
    return default_feedback(response_text)
