"""Structured logging for prompt flow calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredFlowLogger:
    """Structured logger for prompt flow calls."""

    def log_call(
        self,
        flow: str,
        outcome: str,
        latency_ms: float,
        prompt_chars: int,
        error_reason: str | None = None,
    ) -> None:
        """Log a flow call with structured data."""
        log_data: dict[str, Any] = {
            "flow": flow,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "prompt_chars": prompt_chars,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Flow call: {flow} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
