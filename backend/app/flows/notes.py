"""Study notes flow: topic-grouped Markdown notes with key terms bolded."""

from pydantic import Field

from backend.app.flows.base import PromptFlow
from backend.app.llm.client import LLMClient
from backend.app.models.study import CamelModel


class GenerateStudyNotesInput(CamelModel):
    document_content: str = Field(
        ...,
        alias="documentContent",
        description="The content of the document to generate study notes from.",
    )


class GenerateStudyNotesOutput(CamelModel):
    study_notes: str = Field(
        ...,
        alias="studyNotes",
        description="The generated study notes in Markdown format.",
    )


NOTES_TEMPLATE = """You are an AI assistant specializing in creating high-quality, structured study notes from academic texts.

Your task is to transform the provided document content into comprehensive study notes using Markdown. The notes should be easy to read, scan, and edit.

Instructions:
1.  Organize the notes by topic or document section. Use '##' for main topic headings (e.g., '## Key Concepts from the Introduction').
2.  Within each topic, use a combination of paragraphs for explanations and bulleted lists ('*') for key points.
3.  Use markdown blockquotes ('>') for important definitions or direct quotes. Prefix the blockquote with a 📘 emoji.
4.  Use bold ('**text**') to highlight key terminology.
5.  For critical insights or main ideas, create a callout by starting a line with a 🧠 emoji followed by the text in italics.
6.  DO NOT use triple backticks ('```') for code blocks unless there is actual source code in the document.

Return a JSON object with a single key "studyNotes" holding the Markdown notes.

Document Content: {documentContent}
"""

notes_flow: PromptFlow[GenerateStudyNotesInput, GenerateStudyNotesOutput] = PromptFlow(
    name="notes",
    input_model=GenerateStudyNotesInput,
    output_model=GenerateStudyNotesOutput,
    template=NOTES_TEMPLATE,
)


async def generate_study_notes(
    document_content: str, *, client: LLMClient | None = None
) -> GenerateStudyNotesOutput:
    """Turn a document into editable Markdown study notes."""
    payload = GenerateStudyNotesInput(document_content=document_content)
    return await notes_flow.run(payload, client)
