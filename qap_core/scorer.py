"""
Development Location scoring based on nearby amenity variety, volume and proximity
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .amenities import AmenityCategory, AmenityRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringThresholds:
    """Business rules for the Development Location score"""
    volume_threshold: int = 10  # amenities needed for full volume points
    proximity_threshold_km: float = 5.0  # mean distance that earns zero proximity points
    closest_count: int = 3  # amenities averaged for proximity
    variety_points: float = 5.0
    volume_points: float = 5.0
    proximity_points: float = 3.0

    @property
    def max_raw_points(self) -> float:
        return self.variety_points + self.volume_points + self.proximity_points


@dataclass
class ScoreResult:
    """Development Location score with its intermediate terms"""
    raw_points: float  # 0-13 with default thresholds
    normalized_points: float  # 0-max_points
    max_points: float
    variety_points: float = 0.0
    volume_points: float = 0.0
    proximity_points: float = 0.0
    amenity_count: int = 0
    distinct_categories: int = 0
    category_counts: Dict[str, int] = field(default_factory=dict)

    def get_term_breakdown(self) -> Dict[str, float]:
        return {
            "variety": self.variety_points,
            "volume": self.volume_points,
            "proximity": self.proximity_points,
        }


class AmenityScorer:
    """Scores a location's nearby amenities for the Development Location category"""

    def __init__(self, thresholds: Optional[ScoringThresholds] = None):
        self.thresholds = thresholds or ScoringThresholds()

    def count_by_category(self, amenities: Sequence[AmenityRecord]) -> Dict[str, int]:
        counts = {category.value: 0 for category in AmenityCategory}
        for amenity in amenities:
            counts[amenity.category.value] += 1
        return counts

    def variety_score(self, amenities: Sequence[AmenityRecord]) -> float:
        distinct = len({a.category for a in amenities})
        return (distinct / len(AmenityCategory)) * self.thresholds.variety_points

    def volume_score(self, amenities: Sequence[AmenityRecord]) -> float:
        return min(len(amenities) / self.thresholds.volume_threshold, 1) * self.thresholds.volume_points

    def proximity_score(self, amenities: Sequence[AmenityRecord]) -> float:
        """
        Score the mean distance of the closest amenities

        Returns 0 when fewer than `closest_count` amenities exist. Equal
        distances keep their input order.
        """
        n = self.thresholds.closest_count
        if len(amenities) < n:
            return 0.0

        closest = sorted(amenities, key=lambda a: a.distance_km)[:n]
        avg_dist = sum(a.distance_km for a in closest) / n
        ratio = min(avg_dist / self.thresholds.proximity_threshold_km, 1)
        return (1 - ratio) * self.thresholds.proximity_points

    def score_breakdown(self, amenities: Sequence[AmenityRecord], max_points: float) -> ScoreResult:
        """
        Calculate the Development Location score with all intermediate terms

        Args:
            amenities: Nearby amenity records (may be empty)
            max_points: Jurisdiction maximum for the category

        Returns:
            ScoreResult with normalized points in [0, max_points]
        """
        amenities = list(amenities)
        if not amenities:
            return ScoreResult(
                raw_points=0.0,
                normalized_points=0.0,
                max_points=max_points,
                category_counts=self.count_by_category(amenities),
            )

        variety = self.variety_score(amenities)
        volume = self.volume_score(amenities)
        proximity = self.proximity_score(amenities)

        raw = variety + volume + proximity
        normalized = (raw / self.thresholds.max_raw_points) * max_points
        normalized = min(normalized, max_points)

        counts = self.count_by_category(amenities)
        logger.debug(
            "variety=%.3f volume=%.3f proximity=%.3f raw=%.3f normalized=%.3f/%s",
            variety, volume, proximity, raw, normalized, max_points,
        )

        return ScoreResult(
            raw_points=raw,
            normalized_points=normalized,
            max_points=max_points,
            variety_points=variety,
            volume_points=volume,
            proximity_points=proximity,
            amenity_count=len(amenities),
            distinct_categories=sum(1 for c in counts.values() if c > 0),
            category_counts=counts,
        )

    def score(self, amenities: Sequence[AmenityRecord], max_points: float) -> float:
        return self.score_breakdown(amenities, max_points).normalized_points

    def missing_categories(self, amenities: Sequence[AmenityRecord]) -> List[AmenityCategory]:
        present = {a.category for a in amenities}
        return [c for c in AmenityCategory if c not in present]

    def get_recommendations(self, result: ScoreResult) -> List[str]:
        """
        Generate short notes explaining where the score falls short

        Args:
            result: A computed score breakdown

        Returns:
            List of recommendation strings, overall verdict first
        """
        recommendations = []

        missing = [c for c, n in result.category_counts.items() if n == 0]
        if missing:
            labels = ", ".join(AmenityCategory(c).label.lower() for c in missing)
            recommendations.append(f"🧭 No nearby {labels} found - variety points are reduced")
        if result.amenity_count < self.thresholds.volume_threshold:
            recommendations.append(
                f"📉 Only {result.amenity_count} amenities nearby - "
                f"{self.thresholds.volume_threshold}+ earns full volume points"
            )
        if result.proximity_points == 0:
            recommendations.append(
                f"🚶 Closest amenities average {self.thresholds.proximity_threshold_km:g} km or more "
                f"(or fewer than {self.thresholds.closest_count} found) - no proximity points"
            )

        share = result.normalized_points / result.max_points if result.max_points else 0
        if share >= 0.8:
            recommendations.insert(0, "🌟 Strong Development Location score.")
        elif share >= 0.5:
            recommendations.insert(0, "👍 Moderate Development Location score with room to improve.")
        else:
            recommendations.insert(0, "⚠️ Weak Development Location score - key amenities are missing or far away.")

        return recommendations


_default_scorer = AmenityScorer()


def score(amenities: Sequence[AmenityRecord], max_points: float) -> float:
    """Development Location points for `amenities`, scaled to `max_points`"""
    return _default_scorer.score(amenities, max_points)
