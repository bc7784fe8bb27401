"""
Writing task generation for IELTS Academic practice.
Fills Task 1 (visual data) and Task 2 (essay) prompt templates at random,
falling back to a small bank of sample questions.
"""
from __future__ import annotations

import random
import time
from typing import Dict, List, Optional

from . import service_logger

from ..models import TASK1, TASK2, Question, normalize_task_type

TASK1_TITLE = "Task 1: Academic Writing"
TASK1_DESCRIPTION = "You should spend about 20 minutes on this task. Write at least 150 words."
TASK1_TIME_LIMIT_SECONDS = 20 * 60

TASK2_TITLE = "Task 2: Essay"
TASK2_DESCRIPTION = "You should spend about 40 minutes on this task. Write at least 250 words."
TASK2_TIME_LIMIT_SECONDS = 40 * 60

_TASK1_INSTRUCTION = (
    "Summarize the information by selecting and reporting the main features, and make comparisons where relevant."
)

TASK1_TEMPLATES = [
    "The {chart} below shows {data} between {start} and {end} in {location}. " + _TASK1_INSTRUCTION,
    "The {chart} illustrates {data} in {location} during the period {start}-{end}. " + _TASK1_INSTRUCTION,
    "The {chart} gives information about {data} from {start} to {end}. " + _TASK1_INSTRUCTION,
    "The {chart} compares {data} in {location} over the period from {start} to {end}. " + _TASK1_INSTRUCTION,
    "The {chart} provides information on {data} between {start} and {end}. " + _TASK1_INSTRUCTION,
]

CHART_TYPES = [
    "graph",
    "bar chart",
    "line graph",
    "pie chart",
    "table",
    "diagram",
    "map",
    "flowchart",
    "process diagram",
]

DATA_DESCRIPTIONS = [
    "the percentage of people using different types of transportation",
    "the proportion of the population aged 65 and over",
    "changes in average house prices",
    "the amount of money spent on research and development",
    "the number of tourists visiting different countries",
    "the consumption of renewable energy",
    "the literacy rates for men and women",
    "the sales figures for different types of electronic devices",
    "the average working hours per week",
    "the percentage of household income spent on different categories",
    "the number of students enrolled in different university courses",
    "the production and consumption of coffee",
    "the water usage in different sectors",
    "the changes in land use",
    "the rates of recycling for different materials",
]

PERIOD_STARTS = ["1980", "1990", "2000", "2005", "2010", "January", "February", "March", "April", "May"]
PERIOD_ENDS = ["2010", "2015", "2020", "2022", "present", "June", "July", "August", "September", "December"]

LOCATIONS = [
    "several countries",
    "four different countries",
    "five major cities",
    "different regions",
    "selected developed countries",
    "developing nations",
    "urban and rural areas",
    "various age groups",
    "different income brackets",
    "six European countries",
    "Australia",
    "the United States",
    "the United Kingdom",
    "Canada",
    "Japan",
    "global markets",
]

# Opposing views for the "discuss both views" templates
OPPOSING_VIEWS = [
    ("universities should focus on academic skills", "universities should prepare students for employment"),
    ("governments should spend money on public services", "governments should reduce taxes"),
    ("children should learn practical skills in school", "children should focus on academic subjects"),
    ("technology has improved communication between people", "technology has made people more isolated"),
    ("international tourism benefits local communities", "international tourism damages local cultures and environments"),
]

STATEMENTS = [
    "The most effective way to reduce crime is to give longer prison sentences",
    "The best way to improve public health is to increase tax on unhealthy foods",
    "In the future, all cars, buses and trucks will be driverless vehicles",
    "The internet has transformed the way we work and communicate",
    "Traditional skills and ways of life are being lost because people no longer practice them",
    "The government should control the amount of violence shown in films and on television",
    "In the modern world, it is not necessary to have many different languages",
    "The most important aspect of a job is the money a person earns",
    "People should be encouraged to use public transportation instead of personal vehicles",
    "The main environmental problem facing the world today is the loss of particular species of plants and animals",
]

QUESTIONS = [
    "Should governments spend money on art when they have other important issues to address",
    "Should developing countries focus on environmental protection or economic development",
    "Should children be taught at home by their parents rather than at school by teachers",
    "Should companies be required to hire equal numbers of men and women",
    "Should people be allowed to work from home instead of commuting to an office every day",
]

OBSERVATIONS = [
    "people are living in large cities rather than in the countryside",
    "the number of people who are overweight is increasing",
    "traditional shops are being replaced by online shopping",
    "young people are less interested in learning about history and culture",
    "fewer people are reading books and newspapers",
    "more people are choosing not to get married",
    "children are spending less time outdoors",
    "people are working longer hours than in the past",
    "the gap between rich and poor is widening",
    "many traditional skills and crafts are disappearing",
]


def _views_prompt(template: str):
    def build(rng: random.Random) -> str:
        first, second = rng.choice(OPPOSING_VIEWS)
        return template.format(first=first, second=second)
    return build


def _statement_prompt(template: str):
    def build(rng: random.Random) -> str:
        return template.format(statement=rng.choice(STATEMENTS))
    return build


# Each Task 2 template knows which pool fills it
TASK2_BUILDERS = [
    _views_prompt("Some people believe that {first}. Others feel that {second}. "
                  "Discuss both these views and give your own opinion."),
    _statement_prompt("{statement}. To what extent do you agree or disagree with this statement?"),
    _views_prompt("Some people think that {first}, while others believe {second}. "
                  "Discuss both sides and give your opinion."),
    lambda rng: (f"{rng.choice(QUESTIONS)}? Discuss the advantages and disadvantages of this development."),
    lambda rng: (f"In many countries, {rng.choice(OBSERVATIONS)}. What are the causes of this problem? "
                 "What solutions can you suggest?"),
    _statement_prompt("{statement}. What are the causes of this trend and what measures could be taken to address it?"),
]

SAMPLE_QUESTIONS: Dict[str, List[Question]] = {
    TASK1: [
        Question(
            id=1,
            title=TASK1_TITLE,
            description=TASK1_DESCRIPTION,
            prompt="The graph below shows the proportion of the population aged 65 and over between 1940 and 2040 "
                   "in three different countries. " + _TASK1_INSTRUCTION,
            time_limit_seconds=TASK1_TIME_LIMIT_SECONDS,
        ),
        Question(
            id=2,
            title=TASK1_TITLE,
            description=TASK1_DESCRIPTION,
            prompt="The charts below show the percentage of water used for different purposes in six areas of the "
                   "world. " + _TASK1_INSTRUCTION,
            time_limit_seconds=TASK1_TIME_LIMIT_SECONDS,
        ),
        Question(
            id=3,
            title=TASK1_TITLE,
            description=TASK1_DESCRIPTION,
            prompt="The table below shows the sales made by a coffee shop in an office building on a typical "
                   "weekday. " + _TASK1_INSTRUCTION,
            time_limit_seconds=TASK1_TIME_LIMIT_SECONDS,
        ),
    ],
    TASK2: [
        Question(
            id=1,
            title=TASK2_TITLE,
            description=TASK2_DESCRIPTION,
            prompt="Some people believe that universities should focus on providing academic skills rather than "
                   "preparing students for employment. To what extent do you agree or disagree?",
            time_limit_seconds=TASK2_TIME_LIMIT_SECONDS,
        ),
        Question(
            id=2,
            title=TASK2_TITLE,
            description=TASK2_DESCRIPTION,
            prompt="In some countries, the number of people who are overweight is increasing. What do you think are "
                   "the causes of this? What solutions can you suggest?",
            time_limit_seconds=TASK2_TIME_LIMIT_SECONDS,
        ),
        Question(
            id=3,
            title=TASK2_TITLE,
            description=TASK2_DESCRIPTION,
            prompt="Some people think that all university students should study whatever they like. Others believe "
                   "that they should only be allowed to study subjects that will be useful in the future, such as "
                   "those related to science and technology. Discuss both these views and give your own opinion.",
            time_limit_seconds=TASK2_TIME_LIMIT_SECONDS,
        ),
    ],
}


def _question_id() -> int:
    return int(time.time() * 1000)


def generate_task1_question(rng: random.Random) -> Question:
    """Fill a random Task 1 template (visual data description)."""
    prompt = rng.choice(TASK1_TEMPLATES).format(
        chart=rng.choice(CHART_TYPES),
        data=rng.choice(DATA_DESCRIPTIONS),
        start=rng.choice(PERIOD_STARTS),
        end=rng.choice(PERIOD_ENDS),
        location=rng.choice(LOCATIONS),
    )
    return Question(
        id=_question_id(),
        title=TASK1_TITLE,
        description=TASK1_DESCRIPTION,
        prompt=prompt,
        time_limit_seconds=TASK1_TIME_LIMIT_SECONDS,
    )


def generate_task2_question(rng: random.Random) -> Question:
    """Fill a random Task 2 template (opinion, discussion or problem/solution essay)."""
    build = rng.choice(TASK2_BUILDERS)
    return Question(
        id=_question_id(),
        title=TASK2_TITLE,
        description=TASK2_DESCRIPTION,
        prompt=build(rng),
        time_limit_seconds=TASK2_TIME_LIMIT_SECONDS,
    )


def generate_question(task_type: str, rng: Optional[random.Random] = None) -> Question:
    """Generate a writing task by type ('task1' or 'task2')."""
    rng = rng or random.Random()
    if normalize_task_type(task_type) == TASK1:
        return generate_task1_question(rng)
    return generate_task2_question(rng)


def get_random_question(task_type: str, rng: Optional[random.Random] = None) -> Question:
    """Generate a fresh question, or pick a sample one if generation fails."""
    normalized = normalize_task_type(task_type)
    rng = rng or random.Random()
    try:
        question = generate_question(normalized, rng)
        service_logger().info(f"Generated {normalized} question {question.id}")
        return question
    except Exception as e:
        service_logger().warning(f"Question generation failed, using a sample question: {e}")
        return rng.choice(SAMPLE_QUESTIONS[normalized])


def get_all_questions(task_type: str) -> List[Question]:
    return list(SAMPLE_QUESTIONS[normalize_task_type(task_type)])
