from solidify.agents.base import AgentReply, BaseAgent
from solidify.agents.explainer import ExplanationAgent

__all__ = ["AgentReply", "BaseAgent", "ExplanationAgent"]
