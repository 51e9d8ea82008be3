"""Quiz shuffling, answer capture and scoring."""

import random
from collections.abc import Mapping, Sequence
from typing import TypeVar

from backend.app.models.study import QuizQuestion, QuizResult, ResultItem

T = TypeVar("T")


class IncompleteQuizError(Exception):
    """Submission attempted before every question was answered."""

    def __init__(self, unanswered: list[int]) -> None:
        super().__init__(f"{len(unanswered)} question(s) unanswered")
        self.unanswered = unanswered


def shuffle_questions(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Uniform random permutation (Fisher-Yates) of a copy of `items`.

    Only the question order changes; each question's options stay as they are.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def score_quiz(questions: Sequence[QuizQuestion], answers: Mapping[int, int]) -> QuizResult:
    """Score answers keyed by question position.

    A question without a recorded answer counts as incorrect and carries no
    selected answer. Both partitions keep quiz order.
    """
    correct: list[ResultItem] = []
    incorrect: list[ResultItem] = []

    for index, question in enumerate(questions):
        selected = answers.get(index)
        item = ResultItem(question=question, selected_answer=selected)
        if selected is not None and selected == question.correct_answer_index:
            correct.append(item)
        else:
            incorrect.append(item)

    return QuizResult(
        score=len(correct),
        total=len(questions),
        answered_correctly=correct,
        answered_incorrectly=incorrect,
    )


def unanswered_indices(questions: Sequence[QuizQuestion], answers: Mapping[int, int]) -> list[int]:
    return [i for i in range(len(questions)) if i not in answers]


class QuizSession:
    """One attempt at a quiz: current question order plus recorded answers."""

    def __init__(self, questions: Sequence[QuizQuestion], rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self.questions: list[QuizQuestion] = list(questions)
        self.answers: dict[int, int] = {}
        self.result: QuizResult | None = None

    @classmethod
    def from_generated(
        cls, questions: Sequence[QuizQuestion], rng: random.Random | None = None
    ) -> "QuizSession":
        """Start a session on freshly generated questions, shuffled once."""
        rng = rng or random.Random()
        return cls(shuffle_questions(questions, rng), rng)

    def record_answer(self, question_index: int, option_index: int) -> None:
        """Record (or change) the answer for a question."""
        if not 0 <= question_index < len(self.questions):
            raise IndexError(f"No question at position {question_index}")
        options = self.questions[question_index].options
        if not 0 <= option_index < len(options):
            raise IndexError(f"No option {option_index} for question {question_index}")
        self.answers[question_index] = option_index

    def is_complete(self) -> bool:
        """Every question has an answer."""
        return len(self.answers) == len(self.questions)

    def submit(self) -> QuizResult:
        """Score the attempt.

        Raises:
            IncompleteQuizError: If any question is unanswered
        """
        missing = unanswered_indices(self.questions, self.answers)
        if missing:
            raise IncompleteQuizError(missing)
        self.result = score_quiz(self.questions, self.answers)
        return self.result

    def restart(self) -> list[QuizQuestion]:
        """Reshuffle the questions and clear answers and result."""
        self.questions = shuffle_questions(self.questions, self._rng)
        self.answers = {}
        self.result = None
        return self.questions
