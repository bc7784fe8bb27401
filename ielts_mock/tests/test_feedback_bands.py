import random

import pytest
from flask import Flask

from ielts_mock.services import feedback_bands
from ielts_mock.services.feedback_bands import (
    COHERENCE_BANDS,
    GRAMMAR_BANDS,
    LEXICAL_BANDS,
    TASK_BANDS,
    find_band,
    overall_feedback,
    pick_feedback,
    task_feedback,
    word_count_advisory,
)


@pytest.fixture(autouse=True)
def app_context():
    app = Flask(__name__)
    with app.app_context():
        yield


ALL_TABLES = (GRAMMAR_BANDS, COHERENCE_BANDS, LEXICAL_BANDS, TASK_BANDS)


@pytest.mark.parametrize("bands", ALL_TABLES)
def test_every_clamped_score_has_a_band(bands, monkeypatch):
    errors = []
    monkeypatch.setattr(feedback_bands, "service_logger", lambda: _RecordingLogger(errors))

    for tenths in range(40, 91):
        score = tenths / 10
        band = find_band(bands, score)
        assert band.lower_bound <= round(score, 1) <= band.upper_bound

    assert errors == []


@pytest.mark.parametrize("bands", ALL_TABLES)
def test_tables_are_five_bands_high_to_low(bands):
    assert [band.lower_bound for band in bands] == [8.0, 7.0, 6.0, 5.0, 0.0]
    assert all(2 <= len(band.candidates) <= 4 for band in bands)


def test_find_band_falls_back_to_lowest_band_for_unreachable_scores(monkeypatch):
    errors = []
    monkeypatch.setattr(feedback_bands, "service_logger", lambda: _RecordingLogger(errors))

    assert find_band(GRAMMAR_BANDS, 12.0) is GRAMMAR_BANDS[-1]
    assert find_band(GRAMMAR_BANDS, 7.94) is GRAMMAR_BANDS[1]
    assert len(errors) == 1


def test_pick_feedback_is_reproducible_with_seeded_rng():
    first = [pick_feedback(LEXICAL_BANDS, 7.5, random.Random(42)) for _ in range(3)]
    second = [pick_feedback(LEXICAL_BANDS, 7.5, random.Random(42)) for _ in range(3)]

    assert first == second
    assert first[0] in LEXICAL_BANDS[1].candidates


def test_word_count_advisory_below_minimum_mentions_counts():
    advisory = word_count_advisory(50, 150)

    assert "50 words" in advisory
    assert "150 words" in advisory
    assert "Task Achievement" in advisory


def test_word_count_advisory_meets_and_exceeds_minimum():
    assert word_count_advisory(160, 150) == "Your response meets the minimum word count requirement of 150 words."
    assert "exceeds" in word_count_advisory(180, 150)


def test_task_feedback_combines_band_sentence_and_advisory():
    feedback = task_feedback(4.0, "task2", 120, random.Random(1))

    assert any(feedback.startswith(candidate) for candidate in TASK_BANDS[-1].candidates)
    assert "120 words" in feedback
    assert "250 words" in feedback


@pytest.mark.parametrize("score, opening", [
    (9.0, "Excellent work!"),
    (8.0, "Excellent work!"),
    (7.9, "Good job!"),
    (6.0, "Your writing demonstrates a generally effective"),
    (5.4, "Your writing shows a modest"),
    (4.0, "Your writing demonstrates a limited"),
])
def test_overall_feedback_thresholds(score, opening):
    assert overall_feedback(score, "task2").startswith(opening)


def test_overall_feedback_mentions_task_focus():
    assert "data interpretation and description" in overall_feedback(6.5, "task1")
    assert "essay writing and argumentation" in overall_feedback(6.5, "task2")


class _RecordingLogger:
    def __init__(self, errors):
        self.errors = errors

    def error(self, message, *args):
        self.errors.append(message % args)
