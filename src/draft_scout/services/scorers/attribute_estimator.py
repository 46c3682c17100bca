"""Attribute estimation: turning hidden true values into bounded ranges."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from draft_scout.config import Settings, get_settings
from draft_scout.models.prospect import PlayerStatus, Prospect, VeteranPlayer, VisibilityLevel
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.utils.numeric import clamp, round_half_up

logger = logging.getLogger(__name__)

# Trait name fragments a quick look can pick up on
OBSERVABLE_TRAIT_PATTERNS = (
    "speed", "size", "athletic", "strong", "fast", "quick", "agile",
    "physical", "tall", "short", "arm", "hands", "route", "blocking",
)

# Game tape on veterans also shows technique and play style
VETERAN_TRAIT_PATTERNS = OBSERVABLE_TRAIT_PATTERNS + (
    "aggressive", "technique", "tackling", "coverage", "awareness",
)


@dataclass(frozen=True)
class EstimatedAttributes:
    """Raw estimation output for one subject, before confidence adjustment."""

    overall: SkillRange
    physical: SkillRange
    technical: SkillRange
    round_range: SkillRange
    visible_traits: tuple[str, ...]
    hidden_trait_count: int


class AttributeEstimator:
    """Estimates hidden values from scout skill and subject visibility.

    Width composes two factors: a skill term that shrinks as the scout's
    evaluation rises, and a visibility term that shrinks as the subject
    becomes easier to observe. The center is the true value shifted by
    noise proportional to the width. Focus evaluation is the same function
    with visibility at maximum and the narrower focus base width.
    """

    # Width cutoffs for the confidence tag: (high, medium)
    SKILL_WIDTH_CONFIDENCE = (8, 18)
    ROUND_WIDTH_CONFIDENCE = (1, 2)

    AUTO_ROUND_NOISE = 1.0
    FOCUS_ROUND_NOISE = 0.3

    VETERAN_VISIBILITY = {
        VisibilityLevel.HIGH: 0.9,
        VisibilityLevel.MEDIUM: 0.65,
        VisibilityLevel.LOW: 0.4,
        VisibilityLevel.MINIMAL: 0.15,
    }

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Core composition
    # ------------------------------------------------------------------

    @staticmethod
    def skill_term(evaluation: float) -> float:
        """0.7 for a perfect evaluator up to 1.3 for the worst."""
        return 0.7 + 0.6 * (1 - clamp(evaluation, 0, 100) / 100)

    @staticmethod
    def visibility_term(visibility: float) -> float:
        """0.6 for a fully visible subject up to 1.4 for an invisible one."""
        return 0.6 + 0.8 * (1 - clamp(visibility, 0.0, 1.0))

    def range_width(self, base_width: float, evaluation: float, visibility: float) -> int:
        width = round_half_up(base_width * self.skill_term(evaluation) * self.visibility_term(visibility))
        return int(clamp(width, self.settings.min_range_width, self.settings.skill_max - self.settings.skill_min))

    @staticmethod
    def place_window(center: int, width: int, low: int, high: int) -> tuple[int, int]:
        """Place a window of ``width`` around ``center`` inside [low, high].

        The window is shifted rather than truncated, so its width survives
        clamping whenever it fits the scale.
        """
        width = min(width, high - low)
        start = center - width // 2
        end = start + width
        if end > high:
            start -= end - high
            end = high
        if start < low:
            end += low - start
            start = low
        return start, min(end, high)

    def confidence_for_width(self, width: int, round_scale: bool = False) -> ConfidenceLevel:
        high, medium = self.ROUND_WIDTH_CONFIDENCE if round_scale else self.SKILL_WIDTH_CONFIDENCE
        if width <= high:
            return ConfidenceLevel.HIGH
        if width <= medium:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def estimate_range(
        self,
        true_value: int,
        evaluation: float,
        visibility: float,
        rng: random.Random,
        base_width: Optional[float] = None,
        noise_fraction: Optional[float] = None,
    ) -> SkillRange:
        """Estimate a 1-100 attribute.

        Args:
            true_value: Hidden value being estimated
            evaluation: Scout evaluation skill (0-100)
            visibility: How observable the subject is (0.0-1.0)
            rng: Injected generator, the only source of noise
            base_width: Width at average skill and visibility (default: auto width)
            noise_fraction: Maximum center shift as a fraction of width

        Invariants:
            - Width is non-increasing in evaluation and in visibility
            - Width is never below ``min_range_width``
            - The range always lies within the attribute scale
        """
        if base_width is None:
            base_width = self.settings.auto_skill_range_width
        if noise_fraction is None:
            noise_fraction = self.settings.auto_noise_fraction

        low, high = self.settings.skill_min, self.settings.skill_max
        width = self.range_width(base_width, evaluation, visibility)
        offset = round_half_up((rng.random() - 0.5) * width * noise_fraction)
        center = int(clamp(true_value + offset, low, high))
        start, end = self.place_window(center, width, low, high)

        return SkillRange(min=start, max=end, confidence=self.confidence_for_width(end - start))

    def estimate_round_range(
        self,
        true_round: int,
        evaluation: float,
        visibility: float,
        rng: random.Random,
        base_width: Optional[float] = None,
        noise_fraction: Optional[float] = None,
    ) -> SkillRange:
        """Estimate the draft round on the 1-7 scale. Spread is at least one round."""
        if base_width is None:
            base_width = self.settings.auto_round_range_width
        if noise_fraction is None:
            noise_fraction = self.AUTO_ROUND_NOISE

        low, high = self.settings.round_min, self.settings.round_max
        width = round_half_up(base_width * self.skill_term(evaluation) * self.visibility_term(visibility))
        width = int(clamp(width, 1, high - low))
        offset = round_half_up((rng.random() - 0.5) * width * noise_fraction)
        center = int(clamp(true_round + offset, low, high))
        start, end = self.place_window(center, width, low, high)

        return SkillRange(
            min=start,
            max=end,
            confidence=self.confidence_for_width(end - start, round_scale=True),
        )

    # ------------------------------------------------------------------
    # Traits
    # ------------------------------------------------------------------

    def reveal_traits(
        self,
        all_traits: tuple[str, ...],
        evaluation: float,
        visibility: float,
        rng: random.Random,
        patterns: tuple[str, ...] = OBSERVABLE_TRAIT_PATTERNS,
        base_fraction: Optional[float] = None,
    ) -> tuple[tuple[str, ...], int]:
        """Reveal part of a subject's traits.

        Observable traits are drawn first; the rest only fill in when the
        reveal count exceeds them.

        Returns:
            (visible_traits, hidden_count) with
            ``len(visible_traits) + hidden_count == len(all_traits)``
        """
        if not all_traits:
            return (), 0

        if base_fraction is None:
            base_fraction = self.settings.auto_trait_reveal_fraction
        fraction = (
            base_fraction
            * (0.5 + 0.5 * clamp(evaluation, 0, 100) / 100)
            * (0.5 + 0.5 * clamp(visibility, 0.0, 1.0))
        )
        reveal_count = max(1, int(len(all_traits) * fraction))

        observable = [t for t in all_traits if any(p in t.lower() for p in patterns)]
        others = [t for t in all_traits if t not in observable]
        rng.shuffle(observable)
        rng.shuffle(others)

        visible = tuple((observable + others)[:reveal_count])
        return visible, len(all_traits) - len(visible)

    # ------------------------------------------------------------------
    # Subject-level helpers
    # ------------------------------------------------------------------

    def estimate_auto(self, prospect: Prospect, evaluation: float, rng: random.Random) -> EstimatedAttributes:
        """Quick-look estimation at the prospect's own visibility."""
        visibility = prospect.visibility
        overall = self.estimate_range(prospect.true_overall, evaluation, visibility, rng)
        physical = self.estimate_range(prospect.true_physical, evaluation, visibility, rng)
        technical = self.estimate_range(prospect.true_technical, evaluation, visibility, rng)
        round_range = self.estimate_round_range(prospect.projected_round, evaluation, visibility, rng)
        visible, hidden = self.reveal_traits(prospect.all_traits, evaluation, visibility, rng)

        logger.debug(
            f"Auto estimate for {prospect.id}: overall {overall}, rounds {round_range}, "
            f"{len(visible)}/{len(prospect.all_traits)} traits"
        )
        return EstimatedAttributes(overall, physical, technical, round_range, visible, hidden)

    def estimate_focus(self, prospect: Prospect, evaluation: float, rng: random.Random) -> EstimatedAttributes:
        """In-depth estimation: maximum visibility, narrow base width, every trait."""
        base = self.settings.focus_skill_range_width
        noise = self.settings.focus_noise_fraction

        overall = self.estimate_range(prospect.true_overall, evaluation, 1.0, rng, base, noise)
        physical = self.estimate_range(prospect.true_physical, evaluation, 1.0, rng, base, noise)
        technical = self.estimate_range(prospect.true_technical, evaluation, 1.0, rng, base, noise)
        round_range = self.estimate_round_range(
            prospect.projected_round,
            evaluation,
            1.0,
            rng,
            self.settings.focus_round_range_width,
            self.FOCUS_ROUND_NOISE,
        )

        logger.debug(f"Focus estimate for {prospect.id}: overall {overall}, rounds {round_range}")
        return EstimatedAttributes(overall, physical, technical, round_range, tuple(prospect.all_traits), 0)

    def veteran_visibility(self, player: VeteranPlayer) -> tuple[VisibilityLevel, float]:
        """Map roster status and tenure to how much tape exists on a veteran."""
        status = player.status
        if status == PlayerStatus.STARTER and player.years_in_league >= 2:
            level = VisibilityLevel.HIGH
        elif status in (PlayerStatus.STARTER, PlayerStatus.ROTATIONAL):
            level = VisibilityLevel.MEDIUM
        elif status == PlayerStatus.BACKUP and player.years_in_league >= 1:
            level = VisibilityLevel.LOW
        else:
            level = VisibilityLevel.MINIMAL
        return level, self.VETERAN_VISIBILITY[level]
