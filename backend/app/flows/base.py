"""Schema-validated prompt flow: typed input in, typed output out."""

import time
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from backend.app.llm.client import LLMClient, LLMProviderError, get_llm_client
from backend.app.utils.logging import StructuredFlowLogger
from backend.app.utils.metrics import PrometheusFlowMetrics

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


class FlowError(Exception):
    """A flow call failed (provider error or non-conforming output)."""

    def __init__(self, flow: str, reason: str) -> None:
        super().__init__(f"Flow '{flow}' failed: {reason}")
        self.flow = flow
        self.reason = reason


@dataclass(frozen=True)
class PromptFlow(Generic[InputT, OutputT]):
    """A single prompt template bound to an input and an output schema.

    Each call is one request/response pair against the LLM client. The flow
    keeps no state between calls and persists nothing.
    """

    name: str
    input_model: type[InputT]
    output_model: type[OutputT]
    template: str
    metrics: PrometheusFlowMetrics = field(default_factory=PrometheusFlowMetrics, compare=False)
    flow_logger: StructuredFlowLogger = field(default_factory=StructuredFlowLogger, compare=False)

    def render(self, payload: InputT) -> str:
        """Fill the prompt template with the payload's wire-named fields."""
        return self.template.format(**payload.model_dump(by_alias=True))

    async def run(self, payload: InputT, client: LLMClient | None = None) -> OutputT:
        """Call the provider and validate its response.

        Args:
            payload: Validated flow input
            client: LLM client (defaults to the configured client)

        Returns:
            Output model instance

        Raises:
            FlowError: On provider failure or schema mismatch (no retry)
        """
        if client is None:
            client = await get_llm_client()

        prompt = self.render(payload)
        start = time.perf_counter()

        try:
            raw = await client.generate_json(
                flow=self.name,
                prompt=prompt,
                schema=self.output_model.model_json_schema(by_alias=True),
                variables=payload.model_dump(by_alias=True),
            )
            result = self.output_model.model_validate_json(raw)
        except LLMProviderError as e:
            self._record_failure("provider_error", start, prompt, str(e))
            raise FlowError(self.name, "provider_error") from e
        except ValidationError as e:
            self._record_failure("invalid_output", start, prompt, f"{e.error_count()} errors")
            raise FlowError(self.name, "invalid_output") from e

        latency_ms = (time.perf_counter() - start) * 1000
        self.metrics.record_latency(self.name, "success", latency_ms)
        self.flow_logger.log_call(self.name, "success", latency_ms, len(prompt))
        return result

    def _record_failure(self, reason: str, start: float, prompt: str, detail: str) -> None:
        latency_ms = (time.perf_counter() - start) * 1000
        self.metrics.record_latency(self.name, "error", latency_ms)
        self.metrics.inc_error(self.name, reason)
        self.flow_logger.log_call(self.name, "error", latency_ms, len(prompt), detail)
