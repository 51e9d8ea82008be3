"""Multiple-choice quiz flow."""

from pydantic import Field

from backend.app.flows.base import PromptFlow
from backend.app.llm.client import LLMClient
from backend.app.models.study import CamelModel, QuizQuestion


class BuildAIQuizInput(CamelModel):
    document_text: str = Field(
        ...,
        alias="documentText",
        description="The text content of the document to generate the quiz from.",
    )


class BuildAIQuizOutput(CamelModel):
    quiz: list[QuizQuestion] = Field(
        ..., description="A list of quiz questions, options, and correct answers."
    )


QUIZ_TEMPLATE = """You are an expert educator creating a multiple-choice quiz from a document.

Generate a 10-question quiz based on the following document. Each question should have 4 options, with one correct answer and three plausible distractors. Include an explanation for the correct answer.

Document:
{documentText}

Output the quiz in the following JSON format:
{{
  "quiz": [
    {{
      "question": "Question 1",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswerIndex": 0,
      "explanation": "Explanation of the correct answer."
    }},
    {{
      "question": "Question 2",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswerIndex": 2,
      "explanation": "Explanation of the correct answer."
    }}
  ]
}}
"""

quiz_flow: PromptFlow[BuildAIQuizInput, BuildAIQuizOutput] = PromptFlow(
    name="quiz",
    input_model=BuildAIQuizInput,
    output_model=BuildAIQuizOutput,
    template=QUIZ_TEMPLATE,
)


async def build_ai_quiz(document_text: str, *, client: LLMClient | None = None) -> BuildAIQuizOutput:
    """Generate a multiple-choice quiz from a document.

    Ten questions are requested, but the count is not enforced.
    """
    payload = BuildAIQuizInput(document_text=document_text)
    return await quiz_flow.run(payload, client)
