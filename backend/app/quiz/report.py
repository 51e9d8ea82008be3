"""Plain-text quiz results report."""

from backend.app.models.study import QuizQuestion, QuizResult

REPORT_FILENAME = "quiz-results.txt"


def _option_text(question: QuizQuestion, index: int | None, missing: str) -> str:
    if index is None or not 0 <= index < len(question.options):
        return missing
    return question.options[index]


def render_quiz_report(result: QuizResult) -> str:
    """Render a downloadable report of a scored quiz."""
    lines = [
        "Quiz Results",
        f"Score: {result.score}/{result.total} ({result.percentage}%)",
        "",
        "Correct Answers:",
    ]

    for number, item in enumerate(result.answered_correctly, start=1):
        q = item.question
        lines.append(f"{number}. {q.question}")
        lines.append(f"   Correct Answer: {q.options[q.correct_answer_index]}")
        lines.append(f"   Explanation: {q.explanation}")
        lines.append("")

    lines.append("Incorrect Answers:")
    for number, item in enumerate(result.answered_incorrectly, start=1):
        q = item.question
        lines.append(f"{number}. {q.question}")
        lines.append(f"   Your Answer: {_option_text(q, item.selected_answer, 'No answer')}")
        lines.append(f"   Correct Answer: {q.options[q.correct_answer_index]}")
        lines.append(f"   Explanation: {q.explanation}")
        lines.append("")

    return "\n".join(lines) + "\n"
