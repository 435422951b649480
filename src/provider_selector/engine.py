"""Provider selection engine.

Scores every provider in an injected catalog against user weights, picks the
best one and explains the choice. Validation failures come back as
AnalysisFailure values and never escape as exceptions.
"""

from typing import Any, Optional

from .app_logging import get_logger
from .config import SelectorConfig, get_config
from .exceptions import CriteriaError, InvalidCriteriaError
from .explainer import generate_reasoning
from .schema import (
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisResult,
    FailureReason,
    Provider,
    ProviderCatalog,
    ProviderScore,
    WeightSet,
)
from .scorer import score
from .weights import parse_weights

logger = get_logger("engine")


class ProviderSelector:
    """Ranks cloud providers against weighted criteria.

    Selection rules:
    - Only recognised criteria with a positive weight are scored
    - Missing provider metrics count as the neutral value
    - The first provider in catalog order wins exact ties
    - Reasoning covers only the criteria the user weighted
    """

    def __init__(self, catalog: ProviderCatalog, config: Optional[SelectorConfig] = None):
        """Initialize the selector with a read-only catalog."""
        if len(catalog) == 0:
            raise ValueError("Provider catalog is empty")
        self.catalog = catalog
        cfg = config or get_config()
        self.neutral_value = cfg.scoring.neutral_metric_value
        self.delimiter = cfg.reasoning.delimiter
        self.score_decimals = cfg.output.score_decimals

    def score_all(self, weights: WeightSet) -> dict[str, float]:
        """Score every provider, preserving catalog order."""
        return {
            provider_id: score(provider.metrics, weights, self.neutral_value)
            for provider_id, provider in self.catalog.providers.items()
        }

    def score_provider(self, provider_id: str, criteria: Any) -> float:
        """Score a single catalog provider against raw criteria.

        Raises:
            KeyError: If the provider is not in the catalog
            CriteriaError: If the criteria are unusable
        """
        provider = self.catalog.providers[provider_id]
        return score(provider.metrics, parse_weights(criteria), self.neutral_value)

    def rank_all(self, criteria: Any) -> AnalysisOutcome:
        """Rank all providers and select the best one.

        Args:
            criteria: Raw mapping of criterion key to weight

        Returns:
            AnalysisResult on success, AnalysisFailure on invalid input
        """
        try:
            weights = parse_weights(criteria)
        except CriteriaError as exc:
            reason = (
                FailureReason.INVALID_INPUT
                if isinstance(exc, InvalidCriteriaError)
                else FailureReason.NO_CRITERIA_SELECTED
            )
            logger.info("Rejected criteria (%s): %s", reason.value, exc.message)
            return AnalysisFailure(error=exc.message, reason=reason)

        scores = self.score_all(weights)

        # Strictly greater wins, so the first provider seen keeps a tie
        best_id: Optional[str] = None
        best_score = -1.0
        for provider_id, value in scores.items():
            if value > best_score:
                best_score = value
                best_id = provider_id

        if best_id is None:
            # Only reachable when no score is comparable (NaN); fall back to catalog order
            best_id = next(iter(scores))
            best_score = 0.0
            logger.warning("No comparable provider scores; defaulting to %s", best_id)

        winner: Provider = self.catalog.providers[best_id]
        logger.debug(
            "Selected %s (%.4f) using %s",
            best_id, best_score, ", ".join(weights),
        )

        return AnalysisResult(
            best_provider=best_id,
            provider_details=winner.to_record(),
            score=best_score,
            reasoning=generate_reasoning(winner, weights, self.delimiter, self.neutral_value),
            all_scores=self._ranking(scores),
            weights=weights,
        )

    def analyze(self, criteria: Any) -> dict[str, Any]:
        """Rank providers and return the JSON-compatible payload."""
        return self.rank_all(criteria).to_payload()

    def _ranking(self, scores: dict[str, float]) -> list[ProviderScore]:
        """Providers by descending display score; ties stay in catalog order."""
        entries = [
            ProviderScore(provider=provider_id, score=f"{value:.{self.score_decimals}f}")
            for provider_id, value in scores.items()
        ]
        # sorted() is stable, including with reverse=True
        return sorted(entries, key=lambda e: float(e.score), reverse=True)
