"""Rule-based rewriter that produces the "improved version" of a response.

The rewriter is literal: every transformation is a regex rule applied in
table order, so it may produce awkward phrasing.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from itertools import cycle, islice
from re import Match, Pattern
from typing import Callable, Iterable, List, Optional, Union

from . import service_logger

from ..models import TASK1, TASK2

Replacement = Union[str, Callable[[Match[str]], str]]

NO_ORIGINAL_NOTE = "[No original response was provided to improve upon.]"
MIN_IMPROVED_LENGTH = 150
MAX_BODY_UPGRADES = 4
SHORT_SENTENCE_WORDS = 10


@dataclass(frozen=True)
class RewriteRule:
    """A compiled pattern and what to replace each match with."""

    pattern: Pattern[str]
    replacement: Replacement
    count: int = 0

    def apply(self, text: str) -> tuple[str, int]:
        return self.pattern.subn(self.replacement, text, count=self.count)


def rule(pattern: str, replacement: Replacement, flags: int = re.IGNORECASE, count: int = 0) -> RewriteRule:
    return RewriteRule(re.compile(pattern, flags), replacement, count)


def apply_rules(text: str, rules: Iterable[RewriteRule], limit: Optional[int] = None) -> str:
    """Apply ``rules`` in order, stopping once ``limit`` of them have matched."""
    matched = 0
    for current in rules:
        if limit is not None and matched >= limit:
            break
        text, hits = current.apply(text)
        if hits:
            matched += 1
    return text


def keep_case(word: str) -> Callable[[Match[str]], str]:
    """Replacement that capitalizes ``word`` when the matched text was capitalized."""
    def _replace(match: Match[str]) -> str:
        if match.group(0)[:1].isupper():
            return word[:1].upper() + word[1:]
        return word
    return _replace


def lower_first(text: str) -> str:
    """Lower-case the first letter unless the first word is "I" or an acronym."""
    first_word = text.split(' ', 1)[0]
    if first_word == 'I' or first_word.startswith("I'") or (len(first_word) > 1 and first_word.isupper()):
        return text
    return text[:1].lower() + text[1:]


# ---------------------------------------------------------------------------
# Rule tables

TASK1_INTRO_RULES = (
    rule(r'^The (chart|graph|table|diagram) shows', r'The \1 illustrates', count=1),
    rule(r'^The (chart|graph|table|diagram) gives information about', r'The \1 provides a detailed breakdown of', count=1),
    rule(r'^The (chart|graph|table|diagram) is about', r'The \1 presents data regarding', count=1),
    rule(r'^This (chart|graph|table|diagram)', r'The provided \1', count=1),
    rule(r'^(In|On) this (chart|graph|table|diagram)', r'The presented \2', count=1),
)

TASK2_INTRO_RULES = (
    rule(r'^I (think|believe|feel) that', 'It is widely acknowledged that', count=1),
    rule(r'^In my opinion,?', 'From my perspective,', count=1),
    rule(r'^Nowadays,?', 'In contemporary society,', count=1),
    rule(r'^These days,?', 'In the modern era,', count=1),
)

FORMAL_VOCABULARY_RULES = (
    rule(r'\bvery important\b', keep_case('crucial')),
    rule(r'\bbig problem\b', keep_case('significant challenge')),
    rule(r'\ba lot of\b', keep_case('a substantial number of')),
    rule(r'\bmany people\b', keep_case('a considerable proportion of individuals')),
    rule(r'\bgood thing\b', keep_case('beneficial aspect')),
    rule(r'\bbad thing\b', keep_case('detrimental factor')),
)

# Literal, case-sensitive corrections
GRAMMAR_FIX_RULES = (
    rule(r'\bthey is\b', 'they are', flags=0),
    rule(r'\bthere is many\b', 'there are many', flags=0),
    rule(r'\bhave went\b', 'have gone', flags=0),
    rule(r"\bdidn't\b", 'did not', flags=0),
    rule(r"\bdoesn't\b", 'does not', flags=0),
    rule(r"\bdon't\b", 'do not', flags=0),
    rule(r"\bisn't\b", 'is not', flags=0),
    rule(r"\bcan't\b", 'cannot', flags=0),
    rule(r"\bwon't\b", 'will not', flags=0),
)

BODY_VOCABULARY_RULES = tuple(
    rule(rf'\b{plain}\b', keep_case(academic))
    for plain, academic in (
        ('good', 'beneficial'),
        ('bad', 'detrimental'),
        ('big', 'substantial'),
        ('lot', 'significant amount'),
        ('small', 'minimal'),
        ('problem', 'challenge'),
        ('help', 'facilitate'),
        ('hard', 'challenging'),
        ('easy', 'straightforward'),
        ('important', 'crucial'),
        ('show', 'demonstrate'),
        ('tell', 'indicate'),
        ('use', 'utilize'),
        ('make', 'produce'),
        ('get', 'obtain'),
        ('start', 'commence'),
        ('end', 'conclude'),
        ('people', 'individuals'),
        ('think', 'consider'),
        ('see', 'observe'),
    )
)

BODY_TRANSITIONS = (
    "Furthermore, ",
    "Moreover, ",
    "In addition, ",
    "Additionally, ",
    "What is more, ",
    "Another significant point is that ",
)

CONCLUSION_OPENERS = (
    "In conclusion, ",
    "To conclude, ",
    "In light of the above discussion, ",
    "Having considered the various aspects, ",
    "Based on the evidence presented, ",
    "Taking all factors into account, ",
)

_TASK1_FRAMING_RE = re.compile(r'compare|contrast|illustrate|demonstrate|depict|present|show|portray', re.IGNORECASE)
_TASK2_FRAMING_RE = re.compile(r'debate|discuss|controversy|perspective|viewpoint|opinion|argument', re.IGNORECASE)
_TASK1_FRAMING_RULE = rule(r'\.$', ', illustrating the key trends and patterns.', count=1)
TASK2_FRAMING_SENTENCE = " This issue warrants careful consideration of multiple perspectives."

_HAS_TRANSITION_RE = re.compile(
    r'^(Furthermore|Moreover|In addition|Additionally|Secondly|Another|Next|Subsequently|Following this)\b',
    re.IGNORECASE,
)
_AWKWARD_OPENER_RE = re.compile(r'^(The|This|These|Those|It|They)\b', re.IGNORECASE)
_STOCK_OPENER_RE = re.compile(r'^(In conclusion|To conclude|To sum up|In summary|Finally|Lastly)\b', re.IGNORECASE)
_STOCK_OPENER_PREFIX_RE = re.compile(r'^(In conclusion|To conclude|To sum up|In summary|Finally|Lastly),?\s+', re.IGNORECASE)

_TASK1_SUMMARY_RE = re.compile(r'overall|summary|summarize|trend|pattern|significant|noteworthy', re.IGNORECASE)
_TASK2_BALANCE_RE = re.compile(r'balance|weigh|consider|although|however|nevertheless|despite|future|recommend', re.IGNORECASE)
TASK1_CLOSING = " Overall, the data reveals significant patterns that highlight important trends in the subject matter."
TASK2_CLOSING = (
    " While there are valid arguments on both sides, a balanced approach that considers multiple perspectives "
    "would be most effective in addressing this issue."
)

_PARAGRAPH_BREAK_RE = re.compile(r'\n+')
_CONTENT_WORD_RE = re.compile(r'\b[a-zA-Z]{4,}\b')


def _combine_short_pair(match: Match[str]) -> str:
    first, second = match.group(1), match.group(2)
    leading = first[:len(first) - len(first.lstrip())]
    first, second = first.strip(), second.strip()
    if len(first.split()) < SHORT_SENTENCE_WORDS and len(second.split()) < SHORT_SENTENCE_WORDS:
        return f"{leading}{first.rstrip('.!?')}, which {lower_first(second)}"
    return match.group(0)


SENTENCE_COMBINING_RULE = rule(r'([^.!?]+[.!?]+)\s+([^.!?]+[.!?]+)', _combine_short_pair, flags=0)

PLACEHOLDERS = {
    TASK1: (
        "The graph illustrates the proportion of elderly population aged 65 and over across three different "
        f"countries between 1940 and 2040. {NO_ORIGINAL_NOTE}"
    ),
    TASK2: (
        "The question of whether universities should prioritize academic skills or employment preparation is a "
        f"matter of significant debate in educational circles. {NO_ORIGINAL_NOTE}"
    ),
}

# Used when the response offers no word of four letters or more
FALLBACK_TOPIC_WORDS = {
    TASK1: ['figures', 'categories', 'proportions', 'changes', 'periods', 'levels'],
    TASK2: ['education', 'society', 'government', 'individuals', 'technology', 'environment'],
}

RESTRUCTURE_TEMPLATES = {
    TASK1: (
        "The graph illustrates {0} over a specific time period. The data reveals several significant trends "
        "and patterns.\n\n"
        "First and foremost, there is a notable trend in {1}. This demonstrates important changes that occurred "
        "during the period shown.\n\n"
        "Furthermore, when comparing different categories, it is evident that {2} exhibited the most significant "
        "variations. This highlights the dynamic nature of the subject being analyzed.\n\n"
        "In conclusion, the data presents a comprehensive overview of {0}. The most noteworthy finding is the "
        "relationship between {3}, which provides valuable insights into the overall patterns."
    ),
    TASK2: (
        "In contemporary society, the issue of {0} has become increasingly significant. This essay will examine "
        "multiple perspectives on this matter.\n\n"
        "From one perspective, {1} play a crucial role in shaping how we approach this issue. Proponents of this "
        "view argue that these factors contribute substantially to addressing the challenges at hand.\n\n"
        "Conversely, others maintain that {2} should be the primary focus. This alternative approach emphasizes "
        "different priorities and methodologies for tackling the same problems.\n\n"
        "In conclusion, while both perspectives offer valuable insights, a balanced approach that gives careful "
        "consideration to {3} would be most effective. By integrating diverse perspectives, we can develop more "
        "effective strategies for addressing this important issue."
    ),
}


# ---------------------------------------------------------------------------
# Paragraph transforms

def improve_introduction(text: str, task_type: str) -> str:
    if task_type == TASK1:
        improved = apply_rules(text, TASK1_INTRO_RULES)
        if not _TASK1_FRAMING_RE.search(improved):
            improved = apply_rules(improved, (_TASK1_FRAMING_RULE,))
    else:
        improved = apply_rules(text, TASK2_INTRO_RULES)
        if not _TASK2_FRAMING_RE.search(improved):
            improved += TASK2_FRAMING_SENTENCE

    improved = apply_rules(improved, FORMAL_VOCABULARY_RULES)
    return apply_rules(improved, GRAMMAR_FIX_RULES)


def improve_body_paragraph(text: str, rng: random.Random) -> str:
    improved = text

    if not _HAS_TRANSITION_RE.match(text) and not _AWKWARD_OPENER_RE.match(text):
        improved = rng.choice(BODY_TRANSITIONS) + lower_first(improved)

    improved = apply_rules(improved, BODY_VOCABULARY_RULES, limit=MAX_BODY_UPGRADES)
    return apply_rules(improved, (SENTENCE_COMBINING_RULE,))


def improve_conclusion(text: str, task_type: str, rng: random.Random) -> str:
    if _STOCK_OPENER_RE.match(text):
        opener = rng.choice(CONCLUSION_OPENERS)
        improved = _STOCK_OPENER_PREFIX_RE.sub(lambda _match: opener, text, count=1)
    else:
        improved = "In conclusion, " + lower_first(text)

    if task_type == TASK1:
        if not _TASK1_SUMMARY_RE.search(improved):
            improved += TASK1_CLOSING
    elif not _TASK2_BALANCE_RE.search(improved):
        improved += TASK2_CLOSING

    return improved


# ---------------------------------------------------------------------------
# Restructuring

def extract_content_words(text: str) -> List[str]:
    """Distinct lower-cased words of four or more letters, in order of first use."""
    words = (word.lower() for word in _CONTENT_WORD_RE.findall(text or ''))
    return list(dict.fromkeys(words))


def content_word_groups(text: str, task_type: str, groups: int = 4, size: int = 3) -> List[str]:
    """Fill ``groups`` slots of ``size`` words each, recycling words when short."""
    pool = extract_content_words(text) or FALLBACK_TOPIC_WORDS[task_type]
    slots = list(islice(cycle(pool), groups * size))
    filled = []
    for start in range(0, groups * size, size):
        group = list(dict.fromkeys(slots[start:start + size]))
        filled.append(", ".join(group))
    return filled


def restructure_response(text: str, task_type: str) -> str:
    return RESTRUCTURE_TEMPLATES[task_type].format(*content_word_groups(text, task_type))


def generate_improved_version(text: str, task_type: str, rng: random.Random) -> str:
    if not text or not text.strip():
        return PLACEHOLDERS[task_type]

    paragraphs = _PARAGRAPH_BREAK_RE.split(text.strip())
    last_index = len(paragraphs) - 1

    improved_paragraphs = []
    for index, paragraph in enumerate(paragraphs):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        if index == 0:
            improved = improve_introduction(paragraph, task_type)
        elif index == last_index:
            improved = improve_conclusion(paragraph, task_type, rng)
        else:
            improved = improve_body_paragraph(paragraph, rng)
        if improved.strip():
            improved_paragraphs.append(improved)

    result = "\n\n".join(improved_paragraphs)
    original_paragraphs = sum(1 for paragraph in paragraphs if paragraph.strip())

    if len(result) < MIN_IMPROVED_LENGTH or original_paragraphs < 2:
        service_logger().debug(
            "Restructuring response (improved_length=%d, paragraphs=%d)", len(result), original_paragraphs
        )
        return restructure_response(text, task_type)
    return result
