"""
Starving Artist - Career Progression Game Engine

A deterministic rules engine for a hotseat progression game where artists
climb from Home to Dreamer, Amateur and finally Pro. The engine provides:
- Canonical game state (replaced wholesale on every action)
- A dispatcher routing actions to per-stage reducers
- Minor Works, Scandal and Zeitgeist systems
- Seeded dice for reproducible games and simulations
"""

__version__ = "0.1.0"
