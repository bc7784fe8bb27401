"""Band descriptor tables and narrative feedback selection.

Each criterion owns five bands ordered high to low. A score is mapped to the
first band whose inclusive range contains it and one of that band's candidate
sentences is picked with the caller's random source, so a seeded
``random.Random`` gives reproducible feedback.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence, Tuple

from . import service_logger

from ..models import TASK1, min_words_for


@dataclass(frozen=True)
class FeedbackBand:
    lower_bound: float
    upper_bound: float
    candidates: Tuple[str, ...]

    def contains(self, score: float) -> bool:
        return self.lower_bound <= score <= self.upper_bound


GRAMMAR_BANDS: Tuple[FeedbackBand, ...] = (
    FeedbackBand(8.0, 9.0, (
        "You use a wide range of structures with full flexibility and accuracy. Rare minor errors occur only as 'slips'.",
        "Your writing demonstrates a wide range of grammatical structures used accurately and appropriately with only very occasional errors.",
        "You produce error-free sentences with a wide variety of grammatical structures and punctuation is consistently accurate.",
    )),
    FeedbackBand(7.0, 7.9, (
        "You use a variety of complex structures with good control of grammar and punctuation, though there may be a few errors.",
        "Your writing shows good use of grammar and punctuation but may have occasional errors or minor problems with complex structures.",
        "You produce frequent error-free sentences and use a variety of grammatical structures flexibly.",
    )),
    FeedbackBand(6.0, 6.9, (
        "You use a mix of simple and complex sentence forms but with limited flexibility. Errors occur in complex structures but meaning is generally clear.",
        "Your writing has a reasonable range of structures with some errors that do not impede communication.",
        "You make some errors in grammar and punctuation but they rarely reduce communication.",
    )),
    FeedbackBand(5.0, 5.9, (
        "You use only a limited range of structures with frequent grammatical errors that cause some difficulty for the reader.",
        "Your writing shows an overuse of simple sentences with some complex sentences containing errors.",
        "You make frequent grammatical errors and punctuation may be faulty; errors cause the reader problems with understanding.",
    )),
    FeedbackBand(0.0, 4.9, (
        "Your writing contains numerous grammatical errors that severely impede communication.",
        "You use only a very limited range of structures with only rare use of subordinate clauses.",
        "Your errors in grammar and punctuation predominate and distort the meaning of the text.",
    )),
)

COHERENCE_BANDS: Tuple[FeedbackBand, ...] = (
    FeedbackBand(8.0, 9.0, (
        "Your response is cohesive with skillful use of cohesive devices. Information and ideas are logically organized with clear progression throughout.",
        "You demonstrate excellent paragraph organization with a wide range of cohesive devices used accurately and appropriately.",
        "Your writing flows seamlessly with sophisticated use of cohesive devices and logical paragraph structure.",
    )),
    FeedbackBand(7.0, 7.9, (
        "Your ideas are logically organized with effective use of cohesive devices, though there may be occasional lapses in cohesion.",
        "You use a range of cohesive devices appropriately with good paragraph organization, though there may be occasional overuse.",
        "Your response shows logical progression with a clear central topic in each paragraph, using cohesive devices effectively.",
    )),
    FeedbackBand(6.0, 6.9, (
        "Your writing is generally coherent with some effective use of cohesive devices, though not always accurate or appropriate.",
        "You present information with some organization but there may be a lack of overall progression or some repetition.",
        "Your paragraphing is generally logical but may lack internal consistency in places.",
    )),
    FeedbackBand(5.0, 5.9, (
        "Your response shows limited organization with inadequate, inaccurate or overuse of cohesive devices.",
        "Your ideas are not arranged coherently and there may be frequent problems with referencing and substitution.",
        "Your paragraphing may be inadequate or not well-developed, affecting the overall coherence.",
    )),
    FeedbackBand(0.0, 4.9, (
        "Your writing lacks coherence and there is little use of cohesive devices.",
        "Your ideas are poorly organized with very limited use of cohesive devices.",
        "Your response lacks paragraphing or paragraphs are not logically arranged.",
    )),
)

LEXICAL_BANDS: Tuple[FeedbackBand, ...] = (
    FeedbackBand(8.0, 9.0, (
        "You use a wide range of vocabulary with very natural and sophisticated control of lexical features. Rare minor errors occur only as 'slips'.",
        "Your vocabulary is precise and sophisticated with very good awareness of style and collocation. Errors are rare and insignificant.",
        "You demonstrate an extensive vocabulary with precise word choice and awareness of less common meanings. Spelling and word formation are almost always accurate.",
    )),
    FeedbackBand(7.0, 7.9, (
        "You use a sufficient range of vocabulary to allow some flexibility and precision. There are occasional errors in word choice but these rarely impede communication.",
        "Your vocabulary is appropriate for the task with good awareness of collocation, though there may be some inappropriate word choices.",
        "You use less common vocabulary with awareness of style and collocation, though there may be occasional inaccuracies in word choice and spelling.",
    )),
    FeedbackBand(6.0, 6.9, (
        "You have an adequate range of vocabulary for the task, though there may be some inaccuracies in word choice and collocation.",
        "Your vocabulary is generally appropriate but lacks precision in places. Some errors in word formation and spelling occur.",
        "You attempt to use less common vocabulary but with some inaccuracy. Word formation and spelling errors do not impede communication.",
    )),
    FeedbackBand(5.0, 5.9, (
        "You have a limited range of vocabulary, with a noticeable tendency to use a narrow range of words.",
        "Your vocabulary is restricted and repetitive, with frequent errors in word choice, spelling and word formation.",
        "You make noticeable errors in spelling and word formation that may cause some difficulty for the reader.",
    )),
    FeedbackBand(0.0, 4.9, (
        "Your vocabulary is very limited with little variety and frequent errors that impede communication.",
        "You use only basic vocabulary with significant problems in word formation and spelling.",
        "Your limited vocabulary resources make it difficult to convey precise meaning.",
    )),
)

TASK_BANDS: Tuple[FeedbackBand, ...] = (
    FeedbackBand(8.0, 9.0, (
        "You've fully addressed all parts of the task with well-developed ideas and appropriate examples.",
        "Your response demonstrates a thorough understanding of the task requirements with relevant, extended and supported ideas.",
        "You've presented a fully developed position with relevant, fully extended and well-supported ideas.",
    )),
    FeedbackBand(7.0, 7.9, (
        "You've addressed all parts of the task, though some aspects could be more fully developed.",
        "Your response covers the requirements of the task with relevant ideas that are generally well-developed.",
        "You present a clear position throughout the response with relevant supporting ideas.",
    )),
    FeedbackBand(6.0, 6.9, (
        "You've addressed the task, though some parts may be more fully covered than others.",
        "Your response generally addresses the requirements with relevant ideas, but development may be uneven.",
        "Your position is clear but supporting ideas may lack development in places.",
    )),
    FeedbackBand(5.0, 5.9, (
        "You've addressed the task only partially, with limited development of ideas.",
        "Your response addresses some requirements of the task but may miss key aspects.",
        "Your position is not always clear and supporting ideas are limited.",
    )),
    FeedbackBand(0.0, 4.9, (
        "You've only minimally addressed the task with inadequate development of ideas.",
        "Your response fails to address key requirements of the task.",
        "Your position is difficult to identify and supporting ideas are minimal.",
    )),
)

TASK_FOCUS = {
    TASK1: "data interpretation and description",
}
DEFAULT_TASK_FOCUS = "essay writing and argumentation"

OVERALL_TEMPLATES: Tuple[Tuple[float, str], ...] = (
    (8.0, "Excellent work! Your writing demonstrates a very high level of proficiency in {focus}. "
          "You've addressed all aspects of the task with well-developed ideas, logical organization, and a wide range "
          "of vocabulary and grammatical structures. To maintain this level, continue practicing with complex topics "
          "and refining your advanced language skills."),
    (7.0, "Good job! Your writing shows a good command of English with effective {focus}. You've addressed the task "
          "well with mostly well-developed ideas and good organization. Your vocabulary and grammar are generally "
          "strong with only occasional errors. To improve further, work on developing more sophisticated language use "
          "and ensuring all aspects of the task are fully developed."),
    (6.0, "Your writing demonstrates a generally effective command of English for {focus}, despite some errors and "
          "limitations. You've addressed the main requirements of the task, though some aspects could be more fully "
          "developed. To improve your score, focus on developing more complex sentence structures, expanding your "
          "vocabulary range, and organizing your ideas more coherently."),
    (5.0, "Your writing shows a modest command of English for {focus}. While you've attempted to address the task, "
          "your response is underdeveloped in places with limitations in organization, vocabulary, and grammar that "
          "affect clarity. To improve, practice developing your ideas more fully, using a wider range of vocabulary "
          "and grammatical structures, and organizing your writing more effectively."),
    (0.0, "Your writing demonstrates a limited command of English for {focus}. There are significant issues with "
          "task achievement, organization, vocabulary, and grammar that impede communication. To improve, focus on "
          "understanding task requirements better, developing basic paragraph structure, expanding your vocabulary, "
          "and practicing fundamental grammatical structures."),
)


def find_band(bands: Sequence[FeedbackBand], score: float) -> FeedbackBand:
    """Return the first band containing ``score``.

    Clamped scores always land in a band; the lowest band is only a guard
    against a scorer change that breaks that guarantee.
    """
    rounded = round(score, 1)
    for band in bands:
        if band.contains(rounded):
            return band
    service_logger().error("No feedback band contains score %s; using the lowest band", score)
    return bands[-1]


def pick_feedback(bands: Sequence[FeedbackBand], score: float, rng: random.Random) -> str:
    return rng.choice(find_band(bands, score).candidates)


def grammar_feedback(score: float, rng: random.Random) -> str:
    return pick_feedback(GRAMMAR_BANDS, score, rng)


def coherence_feedback(score: float, rng: random.Random) -> str:
    return pick_feedback(COHERENCE_BANDS, score, rng)


def lexical_feedback(score: float, rng: random.Random) -> str:
    return pick_feedback(LEXICAL_BANDS, score, rng)


def word_count_advisory(word_count: int, min_words: int) -> str:
    if word_count < min_words:
        return (
            f"Note that your response contains {word_count} words, which is below the minimum requirement "
            f"of {min_words} words. This affects your Task Achievement score."
        )
    if word_count < min_words * 1.2:
        return f"Your response meets the minimum word count requirement of {min_words} words."
    return "Your response exceeds the minimum word count requirement, which allows for good development of your ideas."


def task_feedback(score: float, task_type: str, word_count: int, rng: random.Random) -> str:
    narrative = pick_feedback(TASK_BANDS, score, rng)
    return f"{narrative} {word_count_advisory(word_count, min_words_for(task_type))}"


def overall_feedback(score: float, task_type: str) -> str:
    focus = TASK_FOCUS.get(task_type, DEFAULT_TASK_FOCUS)
    for threshold, template in OVERALL_TEMPLATES:
        if score >= threshold:
            return template.format(focus=focus)
    return OVERALL_TEMPLATES[-1][1].format(focus=focus)
