"""
Bots module - Automated players for simulation.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicPolicy: Stage-by-stage heuristics
- RandomPolicy: Uniform baseline
"""

from .policy import BotPolicy, BotDecision, HeuristicPolicy, RandomPolicy, get_policy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "HeuristicPolicy",
    "RandomPolicy",
    "get_policy",
]
