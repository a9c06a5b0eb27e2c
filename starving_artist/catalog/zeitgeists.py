"""
Zeitgeists - Global modifiers rolled on a d6 at stage milestones.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Zeitgeist:
    zeitgeist_id: str
    roll: int
    name: str
    text: str


AI_BOOM = "ai_boom"
INDIE_WAVE = "indie_wave"
WELLNESS_CULTURE = "wellness_culture"
GIG_ECONOMY = "gig_economy"
STREAMING_ERA = "streaming_era"
CULTURE_WAR = "culture_war"


ZEITGEISTS: list[Zeitgeist] = [
    Zeitgeist(AI_BOOM, 1, "AI Boom",
              "Once per turn, convert 1 Inspiration into +1 Money / Food / Craft."),
    Zeitgeist(INDIE_WAVE, 2, "Indie Wave",
              "Whenever you complete a Minor Work, gain +1 Craft."),
    Zeitgeist(WELLNESS_CULTURE, 3, "Wellness Culture",
              "Downtime actions grant +1 extra of their stat (Practice/Sleep/Eat at Home)."),
    Zeitgeist(GIG_ECONOMY, 4, "Gig Economy",
              "Whenever you Go To Work, gain +1 Money."),
    Zeitgeist(STREAMING_ERA, 5, "Streaming Era",
              "After drawing a Social / Prof Dev / Pro card, refund +1 Time."),
    Zeitgeist(CULTURE_WAR, 6, "Culture War",
              "Whenever you Plant a Hit Piece, the target gains +1 extra Scandal."),
]


def get_zeitgeist_by_roll(roll: int) -> Zeitgeist | None:
    for zeitgeist in ZEITGEISTS:
        if zeitgeist.roll == roll:
            return zeitgeist
    return None


def get_zeitgeist(zeitgeist_id: str | None) -> Zeitgeist | None:
    for zeitgeist in ZEITGEISTS:
        if zeitgeist.zeitgeist_id == zeitgeist_id:
            return zeitgeist
    return None
