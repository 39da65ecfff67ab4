# Quiz Structure Configuration
# Each homework form and its answer key, defined once and never mutated.

from grading.models import (
    Question, QuizVariant, QuizConfigError,
    SINGLE_CHOICE, MULTI_SELECT, FREE_TEXT,
)

CATECHIST_PERSONA = "You are a Catholic theology teacher grading confirmation homework."


def radio(id, text, correct, options, points=2):
    return Question(id=id, type=SINGLE_CHOICE, points=points, text=text,
                    correct=correct, options=tuple(options))


def checkbox(id, text, correct, options, points=3):
    return Question(id=id, type=MULTI_SELECT, points=points, text=text,
                    correct=frozenset(correct), options=tuple(options))


def open_ended(id, text, points=5):
    return Question(id=id, type=FREE_TEXT, points=points, text=text)


CONFIRMATION_FEB_17 = QuizVariant(
    id="confirmation-2026-02-17",
    title="Confirmation Homework",
    due_date="Feb 17th, 2026",
    grader_persona=CATECHIST_PERSONA,
    total_points=52,
    questions=(
        radio("book_title", "Book by Thomas à Kempis?", "The Imitation of Christ",
              ["The Imitation of Christ", "The Story of a Soul", "Introduction to the Devout Life", "Confessions"]),
        radio("goretti_dream", "Maria Goretti's gift in the dream?", "14 Lilies",
              ["14 Lilies", "A Crown of Roses", "A White Dove", "A Rosary"]),
        radio("contemplative_def", "Definition of Contemplative Prayer?", "Silent gaze",
              ["Silent gaze", "Reciting memorized prayers", "Thinking through a Scripture passage", "Singing hymns"]),
        radio("praise_vs_thanks", "Thanksgiving vs Praise?", "Gift vs Being",
              ["Gift vs Being", "Public vs Private", "Spoken vs Sung", "There is no difference"]),
        radio("prayer_form_intercession", "Prayer for others?", "Intercession",
              ["Intercession", "Adoration", "Petition", "Blessing"]),
        radio("daily_bread", "Daily Bread meaning?", "Spiritual and physical",
              ["Spiritual and physical", "Only physical food", "Only the Eucharist", "Money for the week"]),
        radio("dryness_response", "Response to dryness in prayer?", "Persevere",
              ["Persevere", "Stop praying until the feeling returns", "Change churches", "Pray only when happy"]),
        radio("sacramentals_def", "Sacramentals vs Sacraments?", "Prepare grace",
              ["Prepare grace", "Give sanctifying grace directly", "Are the same thing", "Replace the Sacraments"]),
        checkbox("sacramental_examples", "Examples of Sacramentals",
                 ["Holy Water", "Ashes", "Rosary", "May Crowning"],
                 ["Holy Water", "Ashes", "Rosary", "May Crowning", "Baptism", "Eucharist"]),
        open_ended("may_crowning", "What does May Crowning symbolize?"),
        open_ended("meditative_vs_contemplative", "Difference between Meditative and Contemplative prayer?"),
        radio("god_argument", "Argument from precise physical constants?", "Argument from Fine Tuning",
              ["Argument from Fine Tuning", "Argument from Motion", "Ontological Argument", "Argument from Morality"]),
        radio("animals_morality", "Morality regarding animals?", "Cruelty vs Stewardship",
              ["Cruelty vs Stewardship", "Animals have the same rights as people", "Anything is allowed", "Animals must never be used"]),
        radio("collective_guilt", "Christian view on collective guilt?", "Personal Responsibility",
              ["Personal Responsibility", "Guilt by group membership", "Inherited guilt for all sins", "No one is responsible"]),
        radio("basil_hospitals", "Motivation for first hospitals?", "Commandment of Love",
              ["Commandment of Love", "Government orders", "Profit", "Medical research"]),
        radio("judging_lie", "Catholic response to 'Don't judge'?", "Hypocrisy vs Truth",
              ["Hypocrisy vs Truth", "Never speak about right and wrong", "Judge people's souls", "Truth is relative"]),
        radio("definition_goodness", "Definition of 'Good'?", "Aligned with Nature",
              ["Aligned with Nature", "Whatever feels good", "Whatever is legal", "Whatever most people want"]),
        checkbox("moral_act_parts", "Three parts of a moral act",
                 ["The Object Chosen", "The Intention", "The Circumstances"],
                 ["The Object Chosen", "The Intention", "The Circumstances", "The Consequences", "The Feelings"]),
        open_ended("conflict_reality", "Reality of conflict vs Oppressor/Oppressed?"),
        checkbox("practical_steps", "Practical steps to a good life",
                 ["Priest", "Fr Mike Schmitz", "Catholic Friends", "Catechism and Scripture"],
                 ["Priest", "Fr Mike Schmitz", "Catholic Friends", "Catechism and Scripture", "Social Media Trends"]),
    ),
)

CONFIRMATION_PRACTICE = QuizVariant(
    id="confirmation-practice",
    title="Confirmation Practice Quiz",
    due_date="Anytime",
    grader_persona=CATECHIST_PERSONA,
    total_points=10,
    questions=(
        radio("prayer_form_intercession", "Prayer for others?", "Intercession",
              ["Intercession", "Adoration", "Petition", "Blessing"]),
        checkbox("moral_act_parts", "Three parts of a moral act",
                 ["The Object Chosen", "The Intention", "The Circumstances"],
                 ["The Object Chosen", "The Intention", "The Circumstances", "The Consequences"]),
        open_ended("may_crowning", "What does May Crowning symbolize?"),
    ),
)

QUIZZES = {
    quiz.id: quiz
    for quiz in (CONFIRMATION_FEB_17, CONFIRMATION_PRACTICE)
}


def get_quiz(quiz_id: str) -> QuizVariant:
    """Get a quiz variant by id"""
    quiz = QUIZZES.get(quiz_id)
    if quiz is None:
        raise QuizConfigError(f"Unknown quiz: {quiz_id}")
    return quiz
