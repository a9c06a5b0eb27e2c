"""
Systems - Mechanics shared across stages.

- minor_works: the Minor Works tracker used by the Amateur stage
- scandal: PR actions (lay low, hit pieces, buyouts)
- zeitgeist: milestone rolls, post-action bonuses, AI Boom conversion
- downtime: practice / sleep / eat at home
"""

from . import minor_works, scandal, zeitgeist, downtime

__all__ = ["minor_works", "scandal", "zeitgeist", "downtime"]
