"""
Card Definitions - Home, Social, Prof Dev and Pro cards.

Card structure:
- Home: immediate stat effects
- Social: a time cost plus two branches (attend / skip), optionally
  restricted to some art paths
- Prof Dev: a time cost, immediate effects, optional Minor Work boost
- Pro: a time cost, immediate effects, or a success / fail branch pair

Cards are static data. card_from_dict() accepts the camelCase or snake_case
dicts produced by card loaders; anything malformed degrades to "no effect".
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.effects import Effect, parse_effects, stat, MasterworkEffect
from .minor_works import normalize_art_path


@dataclass(frozen=True)
class HomeCard:
    card_id: str
    name: str
    text: str = ""
    effects: tuple[Effect, ...] = ()


@dataclass(frozen=True)
class SocialChoice:
    text: str = ""
    effects: tuple[Effect, ...] = ()


@dataclass(frozen=True)
class SocialCard:
    card_id: str
    name: str
    text: str = ""
    time_cost: int | None = None
    attend: SocialChoice = field(default_factory=SocialChoice)
    skip: SocialChoice = field(default_factory=SocialChoice)
    allowed_paths: tuple[str, ...] = ()
    blocked_paths: tuple[str, ...] = ()

    def is_available_to(self, art_path: str | None) -> bool:
        """Apply the allow / block lists to a player's art path."""
        path = normalize_art_path(art_path)
        if self.allowed_paths and path not in {normalize_art_path(p) for p in self.allowed_paths}:
            return False
        if path in {normalize_art_path(p) for p in self.blocked_paths}:
            return False
        return True


@dataclass(frozen=True)
class MinorWorkBoost:
    """Prof Dev progress toward a Minor Work. Never completes the work."""
    work_id: str
    progress_delta: int = 1


@dataclass(frozen=True)
class ProfDevCard:
    card_id: str
    name: str
    text: str = ""
    time_cost: int | None = None
    effects: tuple[Effect, ...] = ()
    minor_work: MinorWorkBoost | None = None


@dataclass(frozen=True)
class ProCard:
    card_id: str
    name: str
    text: str = ""
    time_cost: int | None = None
    effects: tuple[Effect, ...] = ()
    success_effects: tuple[Effect, ...] = ()
    fail_effects: tuple[Effect, ...] = ()

    @property
    def has_choice(self) -> bool:
        return bool(self.success_effects or self.fail_effects)


# =============================================================================
# Loading from dicts
# =============================================================================

def _text(data: dict[str, Any], *keys: str, default: str = "") -> str:
    for key in keys:
        value = data.get(key)
        if value:
            return str(value).strip()
    return default


def _int_or_none(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _paths(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = value.replace(";", ",").split(",")
    return tuple(str(p).strip() for p in value if str(p).strip())


def _choice(data: Any) -> SocialChoice:
    if not isinstance(data, dict):
        return SocialChoice()
    return SocialChoice(
        text=_text(data, "text"),
        effects=tuple(parse_effects(data.get("effects"))),
    )


def home_card_from_dict(data: dict[str, Any]) -> HomeCard:
    card_id = _text(data, "id", "card_id")
    return HomeCard(
        card_id=card_id,
        name=_text(data, "name", "title", default=card_id),
        text=_text(data, "text", "flavor"),
        effects=tuple(parse_effects(data.get("effects"))),
    )


def social_card_from_dict(data: dict[str, Any]) -> SocialCard:
    card_id = _text(data, "id", "card_id")
    return SocialCard(
        card_id=card_id,
        name=_text(data, "name", "title", default=card_id),
        text=_text(data, "text", "flavor"),
        time_cost=_int_or_none(data.get("time_cost", data.get("timeCost"))),
        attend=_choice(data.get("attend")),
        skip=_choice(data.get("skip")),
        allowed_paths=_paths(data.get("allowed_paths", data.get("allowedPaths"))),
        blocked_paths=_paths(data.get("blocked_paths", data.get("blockedPaths"))),
    )


def prof_dev_card_from_dict(data: dict[str, Any]) -> ProfDevCard:
    card_id = _text(data, "id", "card_id")
    boost = None
    minor_work = data.get("minor_work", data.get("minorWork"))
    if isinstance(minor_work, dict) and minor_work.get("id"):
        delta = _int_or_none(minor_work.get("progress_delta", minor_work.get("progressDelta")))
        boost = MinorWorkBoost(
            work_id=str(minor_work["id"]),
            progress_delta=1 if delta is None else delta,
        )
    return ProfDevCard(
        card_id=card_id,
        name=_text(data, "name", "title", default=card_id),
        text=_text(data, "text", "flavor"),
        time_cost=_int_or_none(data.get("time_cost", data.get("timeCost"))),
        effects=tuple(parse_effects(data.get("effects"))),
        minor_work=boost,
    )


def pro_card_from_dict(data: dict[str, Any]) -> ProCard:
    card_id = _text(data, "id", "card_id")
    return ProCard(
        card_id=card_id,
        name=_text(data, "name", "title", default=card_id),
        text=_text(data, "text", "flavor"),
        time_cost=_int_or_none(data.get("time_cost", data.get("timeCost"))),
        effects=tuple(parse_effects(data.get("effects"))),
        success_effects=tuple(parse_effects(
            data.get("success_effects", data.get("successEffects"))
        )),
        fail_effects=tuple(parse_effects(data.get("fail_effects", data.get("failEffects")))),
    )


CARD_LOADERS = {
    "home": home_card_from_dict,
    "social": social_card_from_dict,
    "prof_dev": prof_dev_card_from_dict,
    "pro": pro_card_from_dict,
}


def card_from_dict(deck: str, data: dict[str, Any]) -> Any:
    """Build a card for the named deck. Raises ValueError for unknown decks."""
    loader = CARD_LOADERS.get(deck)
    if loader is None:
        raise ValueError(f"Unknown deck: {deck}")
    return loader(data)


# =============================================================================
# Sample decks
# =============================================================================

SAMPLE_HOME_CARDS: list[HomeCard] = [
    HomeCard("home_001", "Gift from Grandma", "+2 Money, +1 Food.",
             (stat("money", 2), stat("food", 1))),
    HomeCard("home_002", "Old Sketchbook", "+2 Inspiration.",
             (stat("inspiration", 2),)),
    HomeCard("home_003", "Supportive Parent", "+1 Food, +1 Craft.",
             (stat("food", 1), stat("craft", 1))),
    HomeCard("home_004", "Summer Job", "+3 Money, -1 Inspiration.",
             (stat("money", 3), stat("inspiration", -1))),
    HomeCard("home_005", "Library Card", "+1 Inspiration, +1 Craft.",
             (stat("inspiration", 1), stat("craft", 1))),
]

SAMPLE_SOCIAL_CARDS: list[SocialCard] = [
    SocialCard(
        "dreamer_001", "Gallery Opening", time_cost=1,
        attend=SocialChoice("Pay 1 Food, gain 2 Inspiration, 1 Craft.",
                            (stat("food", -1), stat("inspiration", 2), stat("craft", 1))),
        skip=SocialChoice("Stay home and rest. Gain 1 Food.", (stat("food", 1),)),
    ),
    SocialCard(
        "dreamer_002", "Open Mic Night", time_cost=1,
        attend=SocialChoice("Gain 1 Inspiration, 1 Craft.",
                            (stat("inspiration", 1), stat("craft", 1))),
        skip=SocialChoice("You doomscroll. Nothing happens."),
    ),
    SocialCard(
        "dreamer_003", "Writers' Circle", time_cost=2,
        attend=SocialChoice("Gain 2 Craft, 1 Inspiration.",
                            (stat("craft", 2), stat("inspiration", 1))),
        skip=SocialChoice("Gain 1 Money from an extra shift.", (stat("money", 1),)),
        allowed_paths=("author",),
    ),
    SocialCard(
        "dreamer_004", "Warehouse Party", time_cost=1,
        attend=SocialChoice("Spend 1 Money, gain 2 Inspiration.",
                            (stat("money", -1), stat("inspiration", 2))),
        skip=SocialChoice("Early night. Gain 1 Food.", (stat("food", 1),)),
    ),
    SocialCard(
        "dreamer_005", "Life Drawing Session", time_cost=1,
        attend=SocialChoice("Spend 1 Money, gain 2 Craft.",
                            (stat("money", -1), stat("craft", 2))),
        skip=SocialChoice("Nothing happens."),
        blocked_paths=("author", "musician"),
    ),
]

SAMPLE_PROF_DEV_CARDS: list[ProfDevCard] = [
    ProfDevCard("prof_001", "Online Masterclass", time_cost=2,
                effects=(stat("craft", 2), stat("inspiration", 1))),
    ProfDevCard("prof_002", "Launch a Patreon", time_cost=2,
                effects=(stat("inspiration", 1),),
                minor_work=MinorWorkBoost("mw_visual_portfolio_piece_commission_ready", 1)),
    ProfDevCard("prof_003", "Mentor Session", time_cost=1,
                effects=(stat("craft", 1),),
                minor_work=MinorWorkBoost("mw_author_short_story_submission", 2)),
    ProfDevCard("prof_004", "Grant Application", time_cost=2,
                effects=(stat("money", 3), stat("inspiration", -1))),
]

SAMPLE_PRO_CARDS: list[ProCard] = [
    ProCard("pro_001", "International Festival", time_cost=3,
            effects=(stat("money", 3), stat("inspiration", 2), MasterworkEffect(2))),
    ProCard("pro_002", "Tough Critic Review", time_cost=3,
            effects=(stat("inspiration", -1), stat("craft", 1))),
    ProCard("pro_003", "Big Commission Pitch", time_cost=2,
            success_effects=(stat("money", 4), MasterworkEffect(1)),
            fail_effects=(stat("inspiration", -2),)),
    ProCard("pro_004", "Residency Offer", time_cost=2,
            effects=(stat("food", 1),),
            success_effects=(stat("craft", 2), MasterworkEffect(2)),
            fail_effects=(stat("money", -2),)),
]
