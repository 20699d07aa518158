"""
LIHTC QAP score calculator for Texas and California sites
"""
from .amenities import AmenityCategory, AmenityRecord, AmenitySource, MockAmenitySource
from .jurisdictions import JURISDICTIONS, SCORING_TABLE, JurisdictionConfig, score_percentage
from .scorer import AmenityScorer, ScoreResult, ScoringThresholds, score

__version__ = "0.1.0"
