"""Explanation Agent — asks an LLM why a violation matters and how to fix it."""

from solidify.agents.base import BaseAgent
from solidify.config import get_settings
from solidify.models import Evidence, Principle

SYSTEM_PROMPT = (
    "You are a seasoned software development expert with extensive experience in SOLID principles. "
    "Your goal is to identify violations of these principles in code and provide thorough "
    "suggestions for improvement."
)

USER_PROMPT = (
    "I need your expertise to analyze a specific violation of a SOLID principle within a given "
    "piece of code. The details of the violation and the full code of the class or function are "
    "provided below. Please thoroughly examine the code, identify the issues related to the "
    "specified SOLID principle, and rewrite the code to ensure it fully complies with this "
    "principle. Your detailed explanation of the changes and the rationale behind them will be "
    "highly appreciated.\n\n"
    "Principle violated: {principle}\n\n"
    "Details of the code file:\n{file_details}\n\n"
    "Complete code of the class or function:\n\n{code}\n\n"
    "Please provide a detailed analysis and a rewritten version of the code that adheres to the "
    "specified SOLID principle."
)


class ExplanationAgent(BaseAgent):
    """Turns one principle and its evidence into a refactoring explanation."""

    def __init__(self):
        settings = get_settings()
        super().__init__(
            name="explainer",
            model_name=settings.EXPLANATION_MODEL,
            temperature=settings.EXPLANATION_TEMPERATURE,
            max_output_tokens=settings.EXPLANATION_MAX_TOKENS,
        )

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_message(self, payload: dict) -> str:
        evidences: list[Evidence] = list(payload["evidences"])
        principle: Principle = payload["principle"]
        return USER_PROMPT.format(
            principle=principle.value,
            file_details="\n".join(str(e) for e in evidences),
            code=evidences[0].snippet if evidences else "",
        )

    async def explain(self, principle: Principle, evidences: tuple[Evidence, ...]) -> str:
        """Explanation function handed to the explanation step."""
        reply = await self.run({"principle": principle, "evidences": evidences})
        return reply.text
