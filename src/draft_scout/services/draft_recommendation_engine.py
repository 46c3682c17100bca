"""Per-pick draft recommendations from each scout."""

import logging
import random
from typing import Optional, Sequence

from draft_scout.config import Settings, get_settings
from draft_scout.models.prospect import Prospect
from draft_scout.models.rankings import NeedLevel, PositionalNeeds
from draft_scout.models.recommendations import DraftPickRecommendations, ScoutDraftRecommendation
from draft_scout.models.scout import Scout, ScoutRole
from draft_scout.models.skill_range import ConfidenceLevel, SkillRange
from draft_scout.services.scorers.attribute_estimator import AttributeEstimator
from draft_scout.utils.numeric import resolve_rng
from draft_scout.utils.position_normalizer import side_of_ball

logger = logging.getLogger(__name__)

ROLE_SIDE = {
    ScoutRole.OFFENSIVE_SCOUT: "offense",
    ScoutRole.DEFENSIVE_SCOUT: "defense",
}

PRESSING_NEEDS = (NeedLevel.CRITICAL, NeedLevel.IMPORTANT)


class DraftRecommendationEngine:
    """Turns a scout's view of the available pool into one recommended pick.

    A scout first argues for prospects on their focus list; only when none
    are left do they fall back to the whole pool, favouring their side of
    the ball.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.estimator = AttributeEstimator(self.settings)

    def _estimate(self, prospect: Prospect, scout: Scout, focus: bool, rng: random.Random) -> SkillRange:
        evaluation = scout.attributes.evaluation
        if focus:
            return self.estimator.estimate_range(
                prospect.true_overall,
                evaluation,
                1.0,
                rng,
                self.settings.focus_skill_range_width,
                self.settings.focus_noise_fraction,
            )
        return self.estimator.estimate_range(prospect.true_overall, evaluation, prospect.visibility, rng)

    def _role_match(self, scout: Scout, position: str) -> bool:
        side = ROLE_SIDE.get(scout.role)
        return side is not None and side_of_ball(position) == side

    def score_prospect(
        self,
        prospect: Prospect,
        scout: Scout,
        estimate: SkillRange,
        needs: PositionalNeeds,
        focus: bool,
    ) -> dict[str, float]:
        """Score components for one candidate; ``total`` is the sum used to rank."""
        need_multiplier = self.settings.need_multipliers.get(needs.level_for(prospect.position).value, 1.0)
        components = {
            "estimated_skill": estimate.midpoint,
            "need_multiplier": need_multiplier,
            "focus_bonus": self.settings.recommendation_focus_bonus if focus else 0.0,
            "role_bias": 0.0,
        }
        if not focus and self._role_match(scout, prospect.position):
            components["role_bias"] = self.settings.role_bias_bonus
        components["total"] = round(
            estimate.midpoint * need_multiplier + components["focus_bonus"] + components["role_bias"],
            2,
        )
        return components

    def recommend(
        self,
        scout: Scout,
        available: Sequence[Prospect],
        needs: PositionalNeeds,
        rng: random.Random,
    ) -> Optional[ScoutDraftRecommendation]:
        """Pick the prospect this scout would take now.

        Returns:
            None when no prospects are available
        """
        if not available:
            return None

        focus_ids = set(scout.focus_prospects)
        candidates = sorted((p for p in available if p.id in focus_ids), key=lambda p: p.id)
        focus = bool(candidates)
        if not focus:
            candidates = sorted(available, key=lambda p: p.id)

        scored = []
        for prospect in candidates:
            estimate = self._estimate(prospect, scout, focus, rng)
            components = self.score_prospect(prospect, scout, estimate, needs, focus)
            scored.append((components["total"], prospect, estimate, components))
        scored.sort(key=lambda item: (-item[0], item[1].id))
        total, best, estimate, components = scored[0]

        if focus:
            confidence = ConfidenceLevel.HIGH
            reasoning = self._focus_reasoning(best, scout, needs)
        else:
            confidence = ConfidenceLevel.MEDIUM if scout.focus_prospects else ConfidenceLevel.LOW
            reasoning = self._auto_reasoning(best, needs)

        return ScoutDraftRecommendation(
            scout_id=scout.id,
            scout_name=scout.full_name,
            prospect_id=best.id,
            prospect_name=best.name,
            position=best.position,
            estimated_overall=estimate,
            score=total,
            confidence=confidence,
            is_focus_prospect=focus,
            reasoning=reasoning,
            components=components,
        )

    def _focus_reasoning(self, prospect: Prospect, scout: Scout, needs: PositionalNeeds) -> str:
        reasons = [f"I've spent weeks evaluating {prospect.name}"]
        if needs.level_for(prospect.position) in PRESSING_NEEDS:
            reasons.append(f"They fill our need at {prospect.position}")
        if prospect.profile.ceiling:
            reasons.append(f"Ceiling: {prospect.profile.ceiling}")
        if self._role_match(scout, prospect.position):
            if scout.role == ScoutRole.OFFENSIVE_SCOUT:
                reasons.append("They'll elevate our offense")
            else:
                reasons.append("They'll be a force on our defense")
        return ". ".join(reasons) + "."

    @staticmethod
    def _auto_reasoning(prospect: Prospect, needs: PositionalNeeds) -> str:
        if needs.level_for(prospect.position) in PRESSING_NEEDS:
            reasons = [f"{prospect.name} is the best available at {prospect.position}, which we need"]
        else:
            reasons = [f"{prospect.name} is the best player available from what I've seen"]
        reasons.append("I haven't had enough time with the film to be sure though")
        return ". ".join(reasons) + "."

    def generate_pick_recommendations(
        self,
        scouts: Sequence[Scout],
        available: Sequence[Prospect],
        needs: PositionalNeeds,
        pick_number: int,
        round_number: int,
        rng: Optional[random.Random] = None,
    ) -> DraftPickRecommendations:
        """Collect one recommendation per scout and detect unanimity."""
        rng = resolve_rng(rng)
        recommendations = []
        for scout in sorted(scouts, key=lambda s: s.id):
            recommendation = self.recommend(scout, available, needs, rng)
            if recommendation is not None:
                recommendations.append(recommendation)

        recommended_ids = {r.prospect_id for r in recommendations}
        unanimous = len(recommendations) > 1 and len(recommended_ids) == 1

        logger.debug(
            f"Pick {pick_number}: {len(recommendations)} recommendations, "
            f"{len(recommended_ids)} distinct prospects"
        )
        return DraftPickRecommendations(
            pick_number=pick_number,
            round=round_number,
            recommendations=tuple(recommendations),
            unanimous=unanimous,
            consensus_prospect_id=next(iter(recommended_ids)) if unanimous else None,
        )

    def auto_pick(
        self,
        scouts: Sequence[Scout],
        available: Sequence[Prospect],
        needs: PositionalNeeds,
        rng: Optional[random.Random] = None,
    ) -> Optional[Prospect]:
        """Pick for a team that never worked the board.

        Focus prospects of any scout come first, judged by the head scout.
        Otherwise take the best projected prospect, nudged by need.
        """
        if not available:
            return None
        rng = resolve_rng(rng)

        focus_ids = {pid for scout in scouts for pid in scout.focus_prospects}
        focus_available = [p for p in available if p.id in focus_ids]
        if focus_available:
            head = next((s for s in scouts if s.role == ScoutRole.HEAD_SCOUT), None)
            if head is not None:
                recommendation = self.recommend(head, focus_available, needs, rng)
                if recommendation is not None:
                    return next(p for p in focus_available if p.id == recommendation.prospect_id)
            return min(focus_available, key=lambda p: p.id)

        def fallback_score(prospect: Prospect) -> float:
            score = (8 - prospect.projected_round) * 15
            if needs.level_for(prospect.position) in PRESSING_NEEDS:
                score += 25
            return score

        return min(available, key=lambda p: (-fallback_score(p), p.id))
