"""
Relaxation policies for Dijkstra's algorithm.

A relaxer decides whether going through a just-closed node gives a strictly
shorter route to a frontier node, and if so how heavy that route is. The
search loop only needs that answer; how the weight is computed (stored
weights, coordinates, penalties, time dependence) is up to the policy and
its weight calculator.
"""

from abc import ABC, abstractmethod
import logging
import math
from typing import Any, Optional

from .models import SearchNode
from .utils import get_edge_weight
from .weights import EdgeWeightCalculator

logger = logging.getLogger(__name__)


class Relaxer(ABC):
    """Abstract base class for relaxation policies."""

    @abstractmethod
    def relax(
        self,
        predecessor: SearchNode,
        candidate: SearchNode,
        weight_calculator: EdgeWeightCalculator,
        modality: Any,
    ) -> Optional[float]:
        """
        Test the route predecessor -> candidate.

        Returns the improved total weight when it is strictly smaller than the
        candidate's current weight, None otherwise. Implementations must not
        modify either record; the caller applies the improvement.
        """
        pass


class DefaultRelaxer(Relaxer):
    """Additive relaxation: predecessor weight plus the edge weight."""

    def edge_cost(
        self,
        predecessor: SearchNode,
        candidate: SearchNode,
        weight_calculator: EdgeWeightCalculator,
        modality: Any,
    ) -> float:
        return get_edge_weight(weight_calculator, predecessor.node, candidate.node, modality)

    def relax(
        self,
        predecessor: SearchNode,
        candidate: SearchNode,
        weight_calculator: EdgeWeightCalculator,
        modality: Any,
    ) -> Optional[float]:
        total = predecessor.weight + self.edge_cost(
            predecessor, candidate, weight_calculator, modality
        )
        if total < candidate.weight:
            return total
        return None


class PenaltyRelaxer(DefaultRelaxer):
    """
    Additive relaxation with a fixed penalty per traversed edge.

    A positive penalty biases the search towards routes with fewer hops
    (fewer turns, transfers, ...) among routes of similar weight.
    """

    def __init__(self, penalty: float):
        if isinstance(penalty, bool) or not isinstance(penalty, (int, float)):
            raise TypeError("penalty must be a numeric value")
        if math.isnan(penalty) or math.isinf(penalty) or penalty < 0:
            raise ValueError("penalty must be a finite non-negative number")
        self.penalty = float(penalty)

    def edge_cost(
        self,
        predecessor: SearchNode,
        candidate: SearchNode,
        weight_calculator: EdgeWeightCalculator,
        modality: Any,
    ) -> float:
        return (
            super().edge_cost(predecessor, candidate, weight_calculator, modality)
            + self.penalty
        )
