"""Surface statistics for a submitted response.

Everything here is a pure function of the text: no randomness, no logging,
no app context required.
"""
from __future__ import annotations

import re
from re import Pattern
from typing import Iterable

from ..models import AnalysisStats

_SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')
_WORD_RE = re.compile(r'[a-z]+')
_PARAGRAPH_SPLIT_RE = re.compile(r'\n\s*\n')


def _patterns(*phrases: str) -> tuple[Pattern[str], ...]:
    return tuple(re.compile(rf'\b{phrase}\b', re.IGNORECASE) for phrase in phrases)


# Informal phrasing and overused intensifiers counted against grammar
GRAMMAR_ISSUE_PATTERNS = _patterns(
    r'i am',
    r'you are',
    r'they are',
    r'is not',
    r'are not',
    r'very',
    r'really',
    r'a lot',
    r'in conclusion',
    r'to sum up',
)

TRANSITION_PATTERNS = _patterns(
    r'firstly',
    r'secondly',
    r'thirdly',
    r'furthermore',
    r'moreover',
    r'in addition',
    r'however',
    r'nevertheless',
    r'on the other hand',
    r'consequently',
    r'therefore',
    r'as a result',
    r'in conclusion',
    r'to summarize',
    r'in summary',
)

ADVANCED_VOCAB_PATTERNS = _patterns(
    r'consequently',
    r'nevertheless',
    r'furthermore',
    r'significant',
    r'substantial',
    r'considerable',
    r'beneficial',
    r'detrimental',
    r'crucial',
    r'imperative',
    r'fundamental',
    r'phenomenon',
)


def count_words(text: str) -> int:
    return len((text or '').split())


def count_sentences(text: str) -> int:
    """Count sentences split on terminators; never less than one."""
    segments = [segment for segment in _SENTENCE_SPLIT_RE.split(text or '') if segment]
    return max(1, len(segments))


def count_unique_words(text: str) -> int:
    return len(set(_WORD_RE.findall((text or '').lower())))


def count_paragraphs(text: str) -> int:
    return len([p for p in _PARAGRAPH_SPLIT_RE.split(text or '') if p.strip()])


def count_pattern_hits(text: str, patterns: Iterable[Pattern[str]]) -> int:
    """Sum every match of every pattern across the whole text."""
    return sum(len(pattern.findall(text or '')) for pattern in patterns)


def analyze_text(text: str, task_type: str) -> AnalysisStats:
    """Compute the statistics bundle the score calculator consumes.

    ``task_type`` does not change any statistic today; it is accepted so the
    analyzer and scorer share one call signature.
    """
    word_count = count_words(text)
    sentence_count = count_sentences(text)
    unique_word_count = count_unique_words(text)

    return AnalysisStats(
        word_count=word_count,
        sentence_count=sentence_count,
        avg_words_per_sentence=word_count / sentence_count,
        unique_word_count=unique_word_count,
        lexical_diversity=unique_word_count / word_count if word_count else 0.0,
        paragraph_count=count_paragraphs(text),
        transition_hit_count=count_pattern_hits(text, TRANSITION_PATTERNS),
        advanced_vocab_hit_count=count_pattern_hits(text, ADVANCED_VOCAB_PATTERNS),
        grammar_issue_hit_count=count_pattern_hits(text, GRAMMAR_ISSUE_PATTERNS),
    )
