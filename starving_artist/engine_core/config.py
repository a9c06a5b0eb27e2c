"""
Game Config - Immutable tuning parameters, partitioned by stage.

Defaults match the base game. Overrides are merged per section, so
    GameConfig.from_overrides({"home": {"roll_sequence": [5, 5]}})
changes only the Home roll sequence and keeps every other default.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any


@dataclass(frozen=True)
class HomeConfig:
    # Leave-home attempts succeed on d6 >= roll_sequence[home_progress].
    roll_sequence: tuple[int, ...] = (4, 3, 2)


@dataclass(frozen=True)
class DreamerConfig:
    advance_cost: dict[str, int] = field(
        default_factory=lambda: {"money": 5, "inspiration": 5, "craft": 3}
    )
    advance_roll_target: int = 4
    social_default_time_cost: int = 1


@dataclass(frozen=True)
class AmateurConfig:
    portfolio_cost: dict[str, int] = field(
        default_factory=lambda: {"money": 5, "inspiration": 3, "craft": 2}
    )
    # Completed works needed to compile; None means max_minor_works.
    portfolio_minor_work_count: int | None = None
    pro_advance_roll_target: int = 4
    max_minor_works: int = 3
    job_loss_skip_count: int = 3
    prof_dev_default_time_cost: int = 2

    @property
    def required_portfolio_works(self) -> int:
        if self.portfolio_minor_work_count is None:
            return self.max_minor_works
        return self.portfolio_minor_work_count


@dataclass(frozen=True)
class ProConfig:
    maintenance_roll_target: int = 4
    masterwork_target_progress: int = 10
    card_time_cost: int = 3
    card_check_roll_target: int = 4
    scandal_buyout_rate: int = 3


@dataclass(frozen=True)
class DowntimeConfig:
    time_cost: int = 1
    gain: int = 1


@dataclass(frozen=True)
class RulesConfig:
    # None disables the turn limit.
    max_turns: int | None = 40
    platform_bonus_amount: int = 2


@dataclass(frozen=True)
class GameConfig:
    """Complete tuning for one game. Never mutated after creation."""
    home: HomeConfig = field(default_factory=HomeConfig)
    dreamer: DreamerConfig = field(default_factory=DreamerConfig)
    amateur: AmateurConfig = field(default_factory=AmateurConfig)
    pro: ProConfig = field(default_factory=ProConfig)
    downtime: DowntimeConfig = field(default_factory=DowntimeConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)

    @classmethod
    def from_overrides(cls, overrides: dict[str, Any] | None = None) -> GameConfig:
        """
        Build a config from defaults plus per-section overrides.

        Raises ValueError for unknown sections or keys.
        """
        config = cls()
        if not overrides:
            return config

        sections = {f.name for f in fields(cls)}
        updates = {}
        for section, values in overrides.items():
            if section not in sections:
                raise ValueError(f"Unknown config section: {section}")
            current = getattr(config, section)
            known = {f.name for f in fields(current)}
            unknown = set(values or {}) - known
            if unknown:
                raise ValueError(
                    f"Unknown keys for config section {section}: {sorted(unknown)}"
                )
            values = dict(values or {})
            if "roll_sequence" in values:
                values["roll_sequence"] = tuple(values["roll_sequence"])
            updates[section] = replace(current, **values)

        return replace(config, **updates)

    def to_dict(self) -> dict[str, Any]:
        out = {}
        for section in fields(self):
            value = getattr(self, section.name)
            out[section.name] = {
                f.name: (list(v) if isinstance(v, tuple) else v)
                for f in fields(value)
                for v in [getattr(value, f.name)]
            }
        return out


DEFAULT_CONFIG = GameConfig()
