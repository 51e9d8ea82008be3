"""Unit tests for the plain-text quiz report."""

from backend.app.models.study import QuizQuestion
from backend.app.quiz.report import REPORT_FILENAME, render_quiz_report
from backend.app.quiz.scoring import score_quiz


def test_report_lists_correct_and_incorrect(sample_quiz: list[QuizQuestion]) -> None:
    result = score_quiz(sample_quiz, {0: 0, 1: 3})

    report = render_quiz_report(result)

    assert report == (
        "Quiz Results\n"
        "Score: 1/3 (33%)\n"
        "\n"
        "Correct Answers:\n"
        "1. Question 1\n"
        "   Correct Answer: Q1 option 0\n"
        "   Explanation: Because of reason 1.\n"
        "\n"
        "Incorrect Answers:\n"
        "1. Question 2\n"
        "   Your Answer: Q2 option 3\n"
        "   Correct Answer: Q2 option 1\n"
        "   Explanation: Because of reason 2.\n"
        "\n"
        "2. Question 3\n"
        "   Your Answer: No answer\n"
        "   Correct Answer: Q3 option 2\n"
        "   Explanation: Because of reason 3.\n"
        "\n"
    )


def test_perfect_score_has_empty_incorrect_section(sample_quiz: list[QuizQuestion]) -> None:
    report = render_quiz_report(score_quiz(sample_quiz, {0: 0, 1: 1, 2: 2}))

    assert "Score: 3/3 (100%)" in report
    assert report.endswith("Incorrect Answers:\n")


def test_report_filename() -> None:
    assert REPORT_FILENAME == "quiz-results.txt"
