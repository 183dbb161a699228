"""Local persistence."""

from .best_score import BestScoreStore

__all__ = ["BestScoreStore"]
