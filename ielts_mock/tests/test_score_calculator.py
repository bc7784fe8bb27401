import pytest

from ielts_mock.models import AnalysisStats
from ielts_mock.services.score_calculator import (
    calculate_scores,
    clamp_score,
    coherence_score,
    grammar_score,
    lexical_score,
    round_half_up,
    task_score,
)
from ielts_mock.services.text_analyzer import analyze_text


def _stats(**overrides) -> AnalysisStats:
    values = dict(
        word_count=200,
        sentence_count=20,
        avg_words_per_sentence=10.0,
        unique_word_count=90,
        lexical_diversity=0.45,
        paragraph_count=1,
        transition_hit_count=0,
        advanced_vocab_hit_count=0,
        grammar_issue_hit_count=0,
    )
    values.update(overrides)
    return AnalysisStats(**values)


def _distinct_words(count: int) -> list:
    letters = 'bcdfghjklm'
    return [a + b + c for a in letters for b in letters for c in letters][:count]


def _varied_essay() -> str:
    words = _distinct_words(294)
    transitions = ['Furthermore', 'Moreover', 'However', 'Therefore', 'Consequently', 'Nevertheless']
    for index, transition in enumerate(transitions):
        words.insert(index * 50, transition)

    paragraphs = []
    for start in range(0, 300, 60):
        chunk = words[start:start + 60]
        sentences = [" ".join(chunk[i:i + 10]) + "." for i in range(0, 60, 10)]
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)


def test_clamp_score_bounds():
    assert clamp_score(2.0) == 4.0
    assert clamp_score(11.5) == 9.0
    assert clamp_score(6.5) == 6.5
    assert clamp_score(7.0 - 0.30000000000000004) == 6.7


def test_round_half_up():
    assert round_half_up(6.25) == 6.3
    assert round_half_up(6.125) == 6.1
    assert round_half_up((6.1 + 6.2 + 6.3 + 6.4) / 4) == 6.3


@pytest.mark.parametrize("avg, issues, expected", [
    (25.0, 0, 7.0),
    (17.0, 0, 6.5),
    (10.0, 0, 6.0),
    (5.0, 0, 5.5),
    (10.0, 3, 5.7),
    (10.0, 40, 4.0),
    (5.0, 40, 4.0),
])
def test_grammar_score(avg, issues, expected):
    stats = _stats(avg_words_per_sentence=avg, grammar_issue_hit_count=issues)

    assert grammar_score(stats) == pytest.approx(expected)


@pytest.mark.parametrize("paragraphs, transitions, expected", [
    (1, 0, 6.0),
    (3, 0, 6.5),
    (4, 0, 7.0),
    (2, 3, 6.5),
    (4, 5, 8.0),
])
def test_coherence_score(paragraphs, transitions, expected):
    stats = _stats(paragraph_count=paragraphs, transition_hit_count=transitions)

    assert coherence_score(stats) == pytest.approx(expected)


@pytest.mark.parametrize("diversity, unique, advanced, expected", [
    (0.45, 90, 0, 6.0),
    (0.75, 130, 5, 9.0),
    (0.65, 110, 3, 8.0),
    (0.55, 90, 0, 6.5),
    (0.3, 50, 0, 5.0),
])
def test_lexical_score(diversity, unique, advanced, expected):
    stats = _stats(lexical_diversity=diversity, unique_word_count=unique, advanced_vocab_hit_count=advanced)

    assert lexical_score(stats) == pytest.approx(expected)


@pytest.mark.parametrize("task_type, words, expected", [
    ("task1", 150, 6.0),
    ("task1", 180, 6.5),
    ("task1", 225, 7.0),
    ("task1", 130, 5.0),
    ("task1", 119, 4.0),
    ("task2", 249, 5.0),
    ("task2", 300, 6.5),
    ("task2", 375, 7.0),
])
def test_task_score(task_type, words, expected):
    assert task_score(_stats(word_count=words), task_type) == pytest.approx(expected)


def test_fifty_distinct_words_for_task1_clamps_task_score():
    text = " ".join(_distinct_words(50))

    scores = calculate_scores(analyze_text(text, "task1"), "task1")

    assert scores.task_achievement == 4.0


def test_structured_varied_essay_scores_high_on_coherence_and_lexis():
    text = _varied_essay()
    stats = analyze_text(text, "task2")

    scores = calculate_scores(stats, "task2")

    assert stats.word_count == 300
    assert stats.paragraph_count == 5
    assert stats.transition_hit_count == 6
    assert stats.lexical_diversity > 0.7
    assert 8.0 <= scores.coherence_and_cohesion <= 9.0
    assert scores.lexical_resource == pytest.approx(9.0)
    assert scores.task_achievement == pytest.approx(6.5)


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "word",
    "very " * 5000,
    ". . . ! ? ...",
    "\n\n\n\n",
    " ".join(_distinct_words(1000)),
])
def test_scores_always_within_band_range(text):
    for task_type in ("task1", "task2"):
        scores = calculate_scores(analyze_text(text, task_type), task_type)
        for value in (
            scores.task_achievement,
            scores.coherence_and_cohesion,
            scores.lexical_resource,
            scores.grammatical_range_and_accuracy,
        ):
            assert 4.0 <= value <= 9.0


def test_overall_is_rounded_mean():
    scores = calculate_scores(analyze_text(_varied_essay(), "task2"), "task2")
    mean = (
        scores.task_achievement
        + scores.coherence_and_cohesion
        + scores.lexical_resource
        + scores.grammatical_range_and_accuracy
    ) / 4

    assert scores.overall == round_half_up(mean)


def test_scoring_is_deterministic():
    text = _varied_essay()

    assert calculate_scores(analyze_text(text, "task1"), "task1") == calculate_scores(analyze_text(text, "task1"), "task1")
