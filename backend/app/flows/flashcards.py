"""Revision flashcards flow."""

from pydantic import Field

from backend.app.flows.base import PromptFlow
from backend.app.llm.client import LLMClient
from backend.app.models.study import CamelModel, Flashcard


class CreateRevisionFlashcardsInput(CamelModel):
    document_content: str = Field(
        ...,
        alias="documentContent",
        description="The content of the document to generate flashcards from.",
    )


class CreateRevisionFlashcardsOutput(CamelModel):
    flashcards: list[Flashcard] = Field(
        ..., description="An array of interactive flashcards generated from the document."
    )


FLASHCARDS_TEMPLATE = """You are an AI assistant designed to generate interactive, multiple-choice flashcards from a document for studying.

Generate 10-15 flashcards from the provided document content. Each flashcard must be a self-contained learning unit.

For each flashcard, provide the following:
1.  'question': A clear question about a key concept from the document.
2.  'options': An array of exactly 4 strings for a multiple-choice question. One option must be the correct answer, and the other three must be plausible but incorrect distractors. The correct answer from 'options' should be a concise version of the main 'answer'.
3.  'correctOptionIndex': The 0-based index of the correct answer within the 'options' array.
4.  'answer': A more detailed, complete answer to the question. This is what will be shown on the back of the card for full understanding.
5.  'explanation': A brief explanation of why the answer is correct, to reinforce learning.

Return a JSON object with a single key "flashcards" holding the list of flashcards.

Document Content: {documentContent}
"""

flashcards_flow: PromptFlow[CreateRevisionFlashcardsInput, CreateRevisionFlashcardsOutput] = (
    PromptFlow(
        name="flashcards",
        input_model=CreateRevisionFlashcardsInput,
        output_model=CreateRevisionFlashcardsOutput,
        template=FLASHCARDS_TEMPLATE,
    )
)


async def create_revision_flashcards(
    document_content: str, *, client: LLMClient | None = None
) -> CreateRevisionFlashcardsOutput:
    """Generate multiple-choice flashcards from a document.

    The 10-15 card count is a prompt hint only; the provider decides.
    """
    payload = CreateRevisionFlashcardsInput(document_content=document_content)
    return await flashcards_flow.run(payload, client)
