"""Explanation step — attach a natural-language explanation to each violation.

One request per violation, strictly sequential. A failed or timed-out request
does not stop the run: its failure description becomes the explanation.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from solidify.models import Evidence, Principle, Violation

logger = structlog.get_logger()

ExplainFn = Callable[[Principle, tuple[Evidence, ...]], Awaitable[str]]


def failure_payload(exc: BaseException, timeout_seconds: Optional[float] = None) -> str:
    """Describe a failed explanation request in a form fit for the report."""
    if isinstance(exc, asyncio.TimeoutError):
        return f"TimeoutError: explanation request timed out after {timeout_seconds}s"
    return f"{type(exc).__name__}: {exc}"


class ExplanationStep:
    """Runs an explanation function over violations and folds the results in."""

    def __init__(self, explain_fn: ExplainFn, timeout_seconds: Optional[float] = 60.0):
        self.explain_fn = explain_fn
        self.timeout_seconds = timeout_seconds

    async def explain_one(self, violation: Violation) -> Violation:
        try:
            text = await asyncio.wait_for(
                self.explain_fn(violation.principle, violation.evidences),
                timeout=self.timeout_seconds,
            )
        except Exception as e:
            logger.warning(
                "explanation_failed",
                principle=violation.principle.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            return violation.with_explanation(failure_payload(e, self.timeout_seconds))

        logger.info("explanation_received", principle=violation.principle.value, length=len(text))
        return violation.with_explanation(text)

    async def run(self, violations: list[Violation]) -> list[Violation]:
        """Explain every violation in order; returns new Violation values."""
        explained = []
        for violation in violations:
            explained.append(await self.explain_one(violation))
        return explained
