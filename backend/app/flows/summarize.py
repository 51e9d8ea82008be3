"""Document summarization flow."""

from pydantic import Field

from backend.app.flows.base import PromptFlow
from backend.app.llm.client import LLMClient
from backend.app.models.study import CamelModel


class SummarizeDocumentInput(CamelModel):
    """Input for the summarize flow."""

    document_text: str = Field(
        ...,
        alias="documentText",
        description="The text content of the document to summarize.",
    )


class SummarizeDocumentOutput(CamelModel):
    """Output of the summarize flow."""

    summary: str = Field(..., description="A concise summary of the document in Markdown format.")


SUMMARIZE_TEMPLATE = """You are an expert academic summarizer. Your task is to create a detailed and well-structured summary of the provided document.

Instructions:
1.  Identify the main sections of the document (e.g., Abstract, Introduction, Methodology, Results, Discussion, Conclusion).
2.  For each section, provide a concise summary that includes a mix of paragraphs for explanation and bullet points for key details.
3.  Use Markdown for formatting. Use '## ' for main section titles. Use bold ('**text**') for important terms.
4.  Use relevant emojis to introduce sections, for example: 📜 **Abstract**, 🎯 **Introduction**, 🔬 **Methodology**, 📈 **Results**, 💬 **Discussion**, and 🏁 **Conclusion**.
5.  If a section is not present in the document, do not include it in the summary.

Return a JSON object with a single key "summary" holding the Markdown summary.

Document Text:
{documentText}
"""

summarize_flow: PromptFlow[SummarizeDocumentInput, SummarizeDocumentOutput] = PromptFlow(
    name="summarize",
    input_model=SummarizeDocumentInput,
    output_model=SummarizeDocumentOutput,
    template=SUMMARIZE_TEMPLATE,
)


async def summarize_document(
    document_text: str, *, client: LLMClient | None = None
) -> SummarizeDocumentOutput:
    """Summarize a document into sectioned Markdown."""
    payload = SummarizeDocumentInput(document_text=document_text)
    return await summarize_flow.run(payload, client)
