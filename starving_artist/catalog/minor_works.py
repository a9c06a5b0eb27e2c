"""
Minor Work Templates - Three side projects per art path.

Every art path has exactly one Quick, one Career and one Spotlight work:
- Quick: short platform piece, one-time reward, grants the platform bonus
- Career: longer piece paying a small bonus every turn once complete
- Spotlight: big release with a one-time money payout

Templates are static data; progress lives on PlayerState.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..engine_core.effects import Effect, stat


class MinorWorkKind(Enum):
    QUICK = "quick"
    CAREER = "career"
    SPOTLIGHT = "spotlight"


DEFAULT_PROGRESS = {
    MinorWorkKind.QUICK: 2,
    MinorWorkKind.CAREER: 4,
    MinorWorkKind.SPOTLIGHT: 5,
}


@dataclass(frozen=True)
class MinorWorkTemplate:
    work_id: str
    name: str
    kind: MinorWorkKind
    progress_target: int
    on_complete_effects: tuple[Effect, ...] = ()
    effects_per_turn: tuple[Effect, ...] = ()
    is_platform: bool = False


_ART_PATH_ALIASES = {
    "author": "author",
    "writer": "author",
    "musician": "musician",
    "music": "musician",
    "actor": "actor",
    "performer": "actor",
    "dancer": "dancer",
    "dance": "dancer",
    "filmmaker": "filmmaker",
    "video": "filmmaker",
    "creator": "filmmaker",
    "visual_artist": "visual_artist",
    "painter": "visual_artist",
    "artist": "visual_artist",
    "visual": "visual_artist",
}

DEFAULT_ART_PATH = "visual_artist"


def normalize_art_path(art_path: str | None) -> str:
    """Map legacy or alias labels onto a canonical art path."""
    key = (art_path or "").strip().lower()
    if not key:
        return DEFAULT_ART_PATH
    return _ART_PATH_ALIASES.get(key, key)


def _quick(work_id: str, name: str, *effects: Effect) -> MinorWorkTemplate:
    return MinorWorkTemplate(
        work_id=work_id,
        name=name,
        kind=MinorWorkKind.QUICK,
        progress_target=DEFAULT_PROGRESS[MinorWorkKind.QUICK],
        on_complete_effects=tuple(effects),
        is_platform=True,
    )


def _career(work_id: str, name: str, *effects: Effect) -> MinorWorkTemplate:
    return MinorWorkTemplate(
        work_id=work_id,
        name=name,
        kind=MinorWorkKind.CAREER,
        progress_target=DEFAULT_PROGRESS[MinorWorkKind.CAREER],
        effects_per_turn=tuple(effects),
    )


def _spotlight(work_id: str, name: str, *effects: Effect) -> MinorWorkTemplate:
    return MinorWorkTemplate(
        work_id=work_id,
        name=name,
        kind=MinorWorkKind.SPOTLIGHT,
        progress_target=DEFAULT_PROGRESS[MinorWorkKind.SPOTLIGHT],
        on_complete_effects=tuple(effects),
    )


MINOR_WORK_TEMPLATES: dict[str, tuple[MinorWorkTemplate, ...]] = {
    "author": (
        _quick("mw_author_microfiction_thread", "Microfiction Thread / Newsletter Post",
               stat("inspiration", 2)),
        _career("mw_author_short_story_submission", "Short Story Submission",
                stat("inspiration", 1)),
        _spotlight("mw_author_chapbook_release", "Chapbook Release", stat("money", 6)),
    ),
    "musician": (
        _quick("mw_music_tiktok_cover_loop", "TikTok/IG Cover Loop", stat("money", 3)),
        _career("mw_music_ep_streaming_release", "EP (Streaming Release)", stat("craft", 1)),
        _spotlight("mw_music_paid_gig_or_viral_performance", "Paid Gig / Viral Performance",
                   stat("money", 8)),
    ),
    "visual_artist": (
        _quick("mw_visual_speedpaint_reel", "Speedpaint Reel / Carousel Post", stat("craft", 2)),
        _career("mw_visual_portfolio_piece_commission_ready",
                "Portfolio Piece (Commission-Ready)", stat("craft", 1)),
        _spotlight("mw_visual_limited_print_drop", "Limited Print Drop", stat("money", 6)),
    ),
    "filmmaker": (
        _quick("mw_film_short_form_reel", "Short-Form Reel (30-60s)", stat("inspiration", 2)),
        _career("mw_film_short_film_youtube_premiere", "Short Film (YouTube Premiere)",
                stat("craft", 1)),
        _spotlight("mw_film_festival_cut_submission", "Festival Cut + Submission",
                   stat("money", 7)),
    ),
    "actor": (
        _quick("mw_actor_self_tape_clip", "Self-Tape Clip / TikTok Scene", stat("craft", 2)),
        _career("mw_actor_scene_study_tape", "Scene Study Tape (Partner/Coach)",
                stat("inspiration", 1)),
        _spotlight("mw_actor_showcase_booked_role", "Showcase Night / Booked Role",
                   stat("money", 7)),
    ),
    "dancer": (
        _quick("mw_dance_instagram_reel_combo", "Instagram Reel Combo", stat("inspiration", 2)),
        _career("mw_dance_choreo_routine_class", "Choreo Routine (Class/Studio)",
                stat("craft", 1)),
        _spotlight("mw_dance_competition_set_paid_gig", "Competition Set / Paid Stage Gig",
                   stat("money", 7)),
    ),
}

ART_PATHS = tuple(MINOR_WORK_TEMPLATES)


def get_templates_for_art_path(art_path: str | None) -> tuple[MinorWorkTemplate, ...]:
    """The three templates for an art path; unknown paths fall back to visual artist."""
    return MINOR_WORK_TEMPLATES.get(
        normalize_art_path(art_path), MINOR_WORK_TEMPLATES[DEFAULT_ART_PATH]
    )


def find_template(art_path: str | None, work_id: str | None) -> MinorWorkTemplate | None:
    if not work_id:
        return None
    for template in get_templates_for_art_path(art_path):
        if template.work_id == work_id:
            return template
    return None
