"""
Stages - One sub-machine per career stage.

Each module owns the actions legal while the active player occupies its
stage and exposes them as HANDLERS. Jobs persist across stages and live in
their own module.
"""

from . import home, dreamer, jobs, amateur, pro

__all__ = ["home", "dreamer", "jobs", "amateur", "pro"]
