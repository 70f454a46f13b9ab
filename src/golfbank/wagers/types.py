"""Validated wager configurations.

Raw bet setups arrive as loose mappings (``{"type": "Nassau", "amount": "5"}``).
They are resolved exactly once, here, into frozen pydantic models whose
amounts are concrete ``Decimal`` values; strategies never re-derive fallbacks.

Resolution rules for amounts:

* missing, blank or non-numeric -> the configured default for that bet type
* negative -> 0 (the bet settles nothing)
* Nassau segments fall back to the shared ``amount`` before the default
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)

from golfbank.config import get_settings
from golfbank.exceptions import ConfigurationError
from golfbank.money import ZERO, to_money

logger = logging.getLogger(__name__)


class BetType(str, Enum):
    NASSAU = "Nassau"
    SKINS = "Skins"
    MATCH_PLAY = "MatchPlay"
    STROKE_PLAY = "StrokePlay"
    CUSTOM = "Custom"


class SideBetType(str, Enum):
    CLOSEST_TO_PIN = "ClosestToPin"
    LONGEST_DRIVE = "LongestDrive"
    BIRDIE_BONUS = "BirdieBonus"
    SANDY = "Sandy"
    GREENIE = "Greenie"


class HoleRule(str, Enum):
    """Which holes a side bet can be won on, by par."""

    ALL = "all"
    PAR3 = "par3"
    PAR4_AND_5 = "par4and5"

    def allows(self, par: int) -> bool:
        if self is HoleRule.PAR3:
            return par == 3
        if self is HoleRule.PAR4_AND_5:
            return par in (4, 5)
        return True


# Judged on the course and recorded by hand; birdies are read off the card.
MANUAL_SIDE_BETS = frozenset(
    {
        SideBetType.CLOSEST_TO_PIN,
        SideBetType.LONGEST_DRIVE,
        SideBetType.SANDY,
        SideBetType.GREENIE,
    }
)

_SIDE_BET_DEFAULTS: dict[SideBetType, tuple[str, HoleRule]] = {
    SideBetType.CLOSEST_TO_PIN: ("default_closest_to_pin_amount", HoleRule.PAR3),
    SideBetType.LONGEST_DRIVE: ("default_longest_drive_amount", HoleRule.PAR4_AND_5),
    SideBetType.BIRDIE_BONUS: ("default_birdie_bonus_amount", HoleRule.ALL),
    SideBetType.SANDY: ("default_sandy_amount", HoleRule.ALL),
    SideBetType.GREENIE: ("default_greenie_amount", HoleRule.PAR3),
}


def resolve_amount(raw: Any, default: Decimal, label: str) -> Decimal:
    """Turn a loosely-typed stake into a non-negative money amount."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return to_money(default)
    if isinstance(raw, bool):
        logger.warning("Ignoring boolean %s amount %r; using default %s", label, raw, default)
        return to_money(default)
    try:
        amount = to_money(raw)
    except (InvalidOperation, ValueError):
        logger.warning("Non-numeric %s amount %r; using default %s", label, raw, default)
        return to_money(default)
    if amount < 0:
        logger.warning("Negative %s amount %s clamped to zero", label, amount)
        return ZERO
    return amount


class BetConfig(BaseModel):
    """Base class for the main (whole-round) wagers."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    bet_type: ClassVar[BetType]

    @computed_field  # type: ignore[misc]
    @property
    def type(self) -> BetType:
        return self.bet_type


class NassauBet(BetConfig):
    bet_type: ClassVar[BetType] = BetType.NASSAU

    front: Decimal
    back: Decimal
    overall: Decimal

    @model_validator(mode="before")
    @classmethod
    def _resolve_segments(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        default = get_settings().default_nassau_amount
        shared_default = resolve_amount(data.get("amount"), default, "Nassau")
        amounts = data.get("amounts") or {}
        if not isinstance(amounts, Mapping):
            logger.warning("Ignoring Nassau amounts %r; expected front/back/overall", amounts)
            amounts = {}
        return {
            segment: resolve_amount(
                data.get(segment, amounts.get(segment)), shared_default, f"Nassau {segment}"
            )
            for segment in ("front", "back", "overall")
        }


class _UnitStakeBet(BetConfig):
    """A bet with a single per-unit stake (per skin, per hole, per stroke)."""

    default_setting: ClassVar[str]

    amount: Decimal

    @model_validator(mode="before")
    @classmethod
    def _resolve_amount(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        default = getattr(get_settings(), cls.default_setting)
        resolved = dict(data)
        resolved["amount"] = resolve_amount(data.get("amount"), default, cls.bet_type.value)
        return resolved


class SkinsBet(_UnitStakeBet):
    bet_type: ClassVar[BetType] = BetType.SKINS
    default_setting: ClassVar[str] = "default_skins_amount"

    carryover: bool = True

    @field_validator("carryover", mode="before")
    @classmethod
    def _default_carryover(cls, value: Any) -> Any:
        return True if value is None else value


class MatchPlayBet(_UnitStakeBet):
    bet_type: ClassVar[BetType] = BetType.MATCH_PLAY
    default_setting: ClassVar[str] = "default_match_play_amount"


class StrokePlayBet(_UnitStakeBet):
    bet_type: ClassVar[BetType] = BetType.STROKE_PLAY
    default_setting: ClassVar[str] = "default_stroke_play_amount"


class CustomBet(BetConfig):
    """Free-form bet the players settle themselves; recorded but never computed."""

    bet_type: ClassVar[BetType] = BetType.CUSTOM

    description: str = ""
    amount: Decimal = ZERO


Bet = Union[NassauBet, SkinsBet, MatchPlayBet, StrokePlayBet, CustomBet]

_BET_MODELS: dict[BetType, type[BetConfig]] = {
    BetType.NASSAU: NassauBet,
    BetType.SKINS: SkinsBet,
    BetType.MATCH_PLAY: MatchPlayBet,
    BetType.STROKE_PLAY: StrokePlayBet,
    BetType.CUSTOM: CustomBet,
}


class SideBet(BaseModel):
    """Per-hole side wager configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: SideBetType
    amount: Decimal
    applicable_holes: HoleRule
    holes: tuple[int, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        resolved = dict(data)
        try:
            side_type = SideBetType(data.get("type"))
        except ValueError:
            return resolved  # let field validation report the bad type
        setting_name, rule = _SIDE_BET_DEFAULTS[side_type]
        default = getattr(get_settings(), setting_name)
        resolved["amount"] = resolve_amount(data.get("amount"), default, side_type.value)
        # stored side bet records spell it applicableHoles
        camel_rule = resolved.pop("applicableHoles", None)
        resolved["applicable_holes"] = resolved.get("applicable_holes") or camel_rule or rule
        return resolved

    def applies_to(self, hole_number: int, par: int) -> bool:
        if self.holes is not None and hole_number not in self.holes:
            return False
        return self.applicable_holes.allows(par)


def parse_bet(raw: Bet | Mapping[str, Any]) -> Bet:
    """Resolve a raw bet setup into its validated configuration model."""

    if isinstance(raw, BetConfig):
        return raw  # type: ignore[return-value]
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Bet setup must be a mapping, got {type(raw).__name__}")
    try:
        bet_type = BetType(raw.get("type"))
    except ValueError as exc:
        raise ConfigurationError(f"Unknown bet type: {raw.get('type')!r}") from exc
    try:
        return _BET_MODELS[bet_type].model_validate(raw)  # type: ignore[return-value]
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid {bet_type.value} bet: {exc}") from exc


def parse_side_bet(raw: SideBet | Mapping[str, Any]) -> SideBet:
    if isinstance(raw, SideBet):
        return raw
    try:
        return SideBet.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid side bet: {exc}") from exc
