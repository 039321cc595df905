"""Base agent — one prompt, one chat completion, with retries and usage accounting."""

from abc import ABC, abstractmethod
from typing import Any, Optional
import time

import structlog
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel
from tenacity import retry, stop_after_attempt, wait_exponential

from solidify.config import get_settings

logger = structlog.get_logger()

# USD per 1K tokens; unknown models fall back to DEFAULT_COST
MODEL_COSTS = {
    "gpt-4o": {"input": 0.0025, "output": 0.01},
    "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
    "gpt-3.5-turbo": {"input": 0.0005, "output": 0.0015},
}
DEFAULT_COST = {"input": 0.003, "output": 0.015}


class AgentReply(BaseModel):
    """Text of one completion plus what it cost."""

    agent: str
    model: str
    text: str
    input_tokens: int = 0
    output_tokens: int = 0
    cost_usd: float = 0.0
    duration_seconds: float = 0.0


def _log_retry(retry_state) -> None:
    logger.warning(
        "llm_retry",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep,
        error=str(retry_state.outcome.exception()),
    )


class BaseAgent(ABC):
    """An LLM-backed helper. Subclasses supply the prompts."""

    def __init__(
        self,
        name: str,
        model_name: Optional[str] = None,
        temperature: float = 0.3,
        max_output_tokens: int = 1500,
    ):
        self.name = name
        self.model_name = model_name or get_settings().EXPLANATION_MODEL
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._llm = None

    @property
    def llm(self):
        """Chat model, created on first use so a missing key only fails a real call."""
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self.model_name,
                api_key=get_settings().OPENAI_API_KEY,
                temperature=self.temperature,
                max_tokens=self.max_output_tokens,
            )
        return self._llm

    @abstractmethod
    def get_system_prompt(self) -> str:
        ...

    @abstractmethod
    def build_user_message(self, payload: dict[str, Any]) -> str:
        ...

    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        rates = MODEL_COSTS.get(self.model_name, DEFAULT_COST)
        return input_tokens / 1000 * rates["input"] + output_tokens / 1000 * rates["output"]

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
        before_sleep=_log_retry,
    )
    async def _complete(self, user_message: str):
        return await self.llm.ainvoke([
            SystemMessage(content=self.get_system_prompt()),
            HumanMessage(content=user_message),
        ])

    async def run(self, payload: dict[str, Any]) -> AgentReply:
        """Send the payload through the prompts and return the reply.

        Failures are logged and re-raised once the retries are exhausted.
        """
        started = time.perf_counter()
        try:
            response = await self._complete(self.build_user_message(payload))
        except Exception as exc:
            logger.error(
                "agent_failed",
                agent=self.name,
                error=str(exc),
                duration_seconds=round(time.perf_counter() - started, 2),
            )
            raise

        usage = getattr(response, "usage_metadata", None) or {}
        reply = AgentReply(
            agent=self.name,
            model=self.model_name,
            text=response.content,
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            duration_seconds=round(time.perf_counter() - started, 2),
        )
        reply.cost_usd = round(self.estimate_cost(reply.input_tokens, reply.output_tokens), 4)

        logger.info("agent_completed", **reply.model_dump(exclude={"text"}))
        return reply
