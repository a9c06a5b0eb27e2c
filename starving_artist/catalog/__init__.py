"""
Catalog - Static game data consulted, never mutated, by the reducers.

This module contains:
- Job definitions (shared job market)
- Minor Work templates per art path
- Zeitgeist definitions and the d6 mapping
- Card types, dict loaders and sample decks
"""

from .jobs import Job, JOBS, JOB_IDS, get_job
from .minor_works import (
    MinorWorkKind,
    MinorWorkTemplate,
    ART_PATHS,
    normalize_art_path,
    get_templates_for_art_path,
    find_template,
)
from .zeitgeists import Zeitgeist, ZEITGEISTS, get_zeitgeist, get_zeitgeist_by_roll
from .cards import (
    HomeCard,
    SocialCard,
    SocialChoice,
    ProfDevCard,
    ProCard,
    MinorWorkBoost,
    card_from_dict,
    SAMPLE_HOME_CARDS,
    SAMPLE_SOCIAL_CARDS,
    SAMPLE_PROF_DEV_CARDS,
    SAMPLE_PRO_CARDS,
)

__all__ = [
    "Job",
    "JOBS",
    "JOB_IDS",
    "get_job",
    "MinorWorkKind",
    "MinorWorkTemplate",
    "ART_PATHS",
    "normalize_art_path",
    "get_templates_for_art_path",
    "find_template",
    "Zeitgeist",
    "ZEITGEISTS",
    "get_zeitgeist",
    "get_zeitgeist_by_roll",
    "HomeCard",
    "SocialCard",
    "SocialChoice",
    "ProfDevCard",
    "ProCard",
    "MinorWorkBoost",
    "card_from_dict",
    "SAMPLE_HOME_CARDS",
    "SAMPLE_SOCIAL_CARDS",
    "SAMPLE_PROF_DEV_CARDS",
    "SAMPLE_PRO_CARDS",
]
