"""Agent implementations for Werewolf Game Master."""

from wgm.agents.baselines.random_agent import RandomAgent
from wgm.agents.baselines.scripted_agent import ScriptedAgent

__all__ = [
    "RandomAgent",
    "ScriptedAgent",
]
