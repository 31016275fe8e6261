"""
Numbers4 Backtest Simulator
===========================

Replays a historical range, asking an algorithm for predictions before each
draw using only the draws that preceded it, and accounts cost and payout.

Per draw under test:
    NeedWindow  -> the `window_size` draws right before it must exist,
                   otherwise the draw is skipped (normal at the start of a range)
    Predicting  -> the algorithm produces one or more tickets
    Scoring     -> every ticket is classified against the winning number
    Accumulated -> cost, payout and win counters are merged in draw order

Purchase strategies differ by algorithm and are kept that way on purpose:
"kako" buys the full box set of its ticket (every distinct ordering), all
other algorithms buy one ticket per prediction.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from numbers4.draws import Draw, HistoryWindow
from numbers4.ensemble import HybridEnsemble
from numbers4.exceptions import InsufficientDataError, UnknownAlgorithmError
from numbers4.hit_classifier import BOX_PRIZE, STRAIGHT_PRIZE, classify
from numbers4.permutations import permutation_count
from numbers4.seeded import seeded_predictions

UNIT_PRICE = 200


@dataclass(frozen=True)
class BacktestDetail:
    """A winning prediction"""
    draw_number: int
    draw_date: date
    winning_number: str
    prediction: str
    win_type: str
    win_amount: int

    def to_dict(self) -> dict:
        return {
            'drawNumber': self.draw_number,
            'drawDate': self.draw_date.isoformat(),
            'winningNumber': self.winning_number,
            'prediction': self.prediction,
            'winType': self.win_type,
            'winAmount': self.win_amount,
        }


@dataclass(frozen=True)
class BacktestResult:
    algorithm: str
    period: str
    total_predictions: int
    straight_wins: int
    box_wins: int
    total_wins: int
    win_rate: float
    straight_rate: float
    box_rate: float
    total_cost: int
    total_return: int
    profit: int
    roi: float
    scored_draws: int
    skipped_draws: int
    details: Tuple[BacktestDetail, ...] = ()

    def to_dict(self) -> dict:
        return {
            'algorithm': self.algorithm,
            'period': self.period,
            'totalPredictions': self.total_predictions,
            'straightWins': self.straight_wins,
            'boxWins': self.box_wins,
            'totalWins': self.total_wins,
            'winRate': self.win_rate,
            'straightRate': self.straight_rate,
            'boxRate': self.box_rate,
            'totalCost': self.total_cost,
            'totalReturn': self.total_return,
            'profit': self.profit,
            'roi': self.roi,
            'scoredDraws': self.scored_draws,
            'skippedDraws': self.skipped_draws,
            'details': [d.to_dict() for d in self.details],
        }


@dataclass
class DrawScore:
    """Contribution of a single draw under test"""
    draw_number: int
    predictions: int = 0
    straight_wins: int = 0
    box_wins: int = 0
    cost: int = 0
    payout: int = 0
    details: List[BacktestDetail] = field(default_factory=list)


@dataclass
class Algorithm:
    """A backtestable prediction function"""
    name: str
    predict: Callable[[HistoryWindow, Optional[Draw], Draw, np.random.Generator], List[str]]
    needs_last_draw: bool = False
    box_purchase: bool = False


class BacktestSimulator:
    """Walk-forward replay of prediction algorithms over historical draws"""

    def __init__(
        self,
        window_size: int = 100,
        unit_price: int = UNIT_PRICE,
        straight_payout: int = STRAIGHT_PRIZE,
        box_payout: int = BOX_PRIZE,
        ensemble: Optional[HybridEnsemble] = None,
        workers: int = 1,
        seed: Optional[int] = None,
    ):
        """
        Args:
            window_size: Draws required before a draw can be scored
            unit_price: Price of one ticket
            straight_payout: Payout per straight-winning prediction
            box_payout: Payout per box-only-winning prediction
            ensemble: Ensemble used by the "hybrid" algorithm
            workers: Threads used to score draws; results are merged in draw order
            seed: Base seed; each draw gets its own generator derived from it
        """
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        self.window_size = window_size
        self.unit_price = unit_price
        self.straight_payout = straight_payout
        self.box_payout = box_payout
        self.ensemble = ensemble or HybridEnsemble()
        self.workers = max(1, workers)
        self.seed = seed
        self.algorithms = self._build_algorithms()

    @classmethod
    def from_config(cls, config, **kwargs) -> 'BacktestSimulator':
        """Build a simulator from an EngineConfig"""
        return cls(
            window_size=config.window_size,
            unit_price=config.unit_price,
            straight_payout=config.straight_payout,
            box_payout=config.box_payout,
            ensemble=HybridEnsemble.from_config(config),
            **kwargs,
        )

    def _build_algorithms(self) -> Dict[str, Algorithm]:
        frequency = self.ensemble.frequency_model
        transition = self.ensemble.transition_model
        correlation = self.ensemble.correlation_model
        pattern = self.ensemble.pattern_model

        algorithms = [
            Algorithm("kako", lambda w, last, d, rng: [frequency.most_frequent_digits(w)], box_purchase=True),
            Algorithm("transition", lambda w, last, d, rng: [transition.predict_next(w, last)], needs_last_draw=True),
            Algorithm("correlation", lambda w, last, d, rng: [correlation.predict_by_correlation(w, rng)]),
            Algorithm("pattern", lambda w, last, d, rng: [pattern.predict_by_pattern(w, rng)]),
            Algorithm("hybrid", lambda w, last, d, rng: self.ensemble.generate(w, last, rng), needs_last_draw=True),
            Algorithm("ai_random", lambda w, last, d, rng: seeded_predictions(d.draw_number)),
        ]
        return {a.name: a for a in algorithms}

    @property
    def algorithm_names(self) -> List[str]:
        return list(self.algorithms)

    def get_algorithm(self, name: str) -> Algorithm:
        try:
            return self.algorithms[name]
        except KeyError:
            raise UnknownAlgorithmError(name) from None

    def ticket_cost(self, algorithm: Algorithm, prediction: str) -> int:
        if algorithm.box_purchase:
            return permutation_count(prediction) * self.unit_price
        return self.unit_price

    def _rng_for(self, draw: Draw) -> np.random.Generator:
        if self.seed is None:
            return np.random.default_rng()
        return np.random.default_rng([self.seed, draw.draw_number])

    def score_draw(self, algorithm: Algorithm, draws: Sequence[Draw], index: int) -> Optional[DrawScore]:
        """
        Score the draw at `index` of the chronological `draws`.

        Returns:
            DrawScore, or None when the draw has to be skipped
        """
        current = draws[index]

        # NeedWindow
        if index < self.window_size:
            return None
        window = HistoryWindow.from_chronological(draws[index - self.window_size:index])

        previous = draws[index - 1]
        last_draw = previous if previous.draw_number == current.draw_number - 1 else None
        if algorithm.needs_last_draw and last_draw is None:
            logger.debug(f"Backtest {algorithm.name}: draw {current.draw_number - 1} missing, "
                         f"skipping draw {current.draw_number}")
            return None

        # Predicting
        try:
            predictions = algorithm.predict(window, last_draw, current, self._rng_for(current))
        except InsufficientDataError as e:
            logger.warning(f"Backtest {algorithm.name}: skipping draw {current.draw_number}: {e}")
            return None

        # Scoring
        score = DrawScore(draw_number=current.draw_number)
        for outcome in classify(predictions, current.winning_number):
            score.predictions += 1
            score.cost += self.ticket_cost(algorithm, outcome.prediction)

            if outcome.is_straight:
                win_type, amount = 'straight', self.straight_payout
                score.straight_wins += 1
            elif outcome.is_box:
                win_type, amount = 'box', self.box_payout
                score.box_wins += 1
            else:
                continue

            score.payout += amount
            score.details.append(BacktestDetail(
                draw_number=current.draw_number,
                draw_date=current.draw_date,
                winning_number=current.winning_number,
                prediction=outcome.prediction,
                win_type=win_type,
                win_amount=amount,
            ))
        return score

    def run(
        self,
        algorithm_name: str,
        draws: Sequence[Draw],
        window_size: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> BacktestResult:
        """
        Backtest one algorithm.

        Args:
            algorithm_name: One of `algorithm_names`
            draws: Historical draws, oldest first; may include draws before
                start_date that only serve as windows
            window_size: Overrides the simulator's window size for this run
            start_date: First draw date under test (inclusive)
            end_date: Last draw date under test (inclusive)

        Raises:
            UnknownAlgorithmError: If the algorithm does not exist
        """
        algorithm = self.get_algorithm(algorithm_name)
        if window_size is not None and window_size != self.window_size:
            return BacktestSimulator(
                window_size=window_size,
                unit_price=self.unit_price,
                straight_payout=self.straight_payout,
                box_payout=self.box_payout,
                ensemble=self.ensemble,
                workers=self.workers,
                seed=self.seed,
            ).run(algorithm_name, draws, start_date=start_date, end_date=end_date)

        ordered = sorted(draws, key=lambda d: d.draw_number)
        indices = [
            i for i, d in enumerate(ordered)
            if (start_date is None or d.draw_date >= start_date) and (end_date is None or d.draw_date <= end_date)
        ]

        if self.workers > 1 and len(indices) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                scores = list(executor.map(lambda i: self.score_draw(algorithm, ordered, i), indices))
        else:
            scores = [self.score_draw(algorithm, ordered, i) for i in indices]

        period = self._period(ordered, indices, start_date, end_date)
        result = self._accumulate(algorithm.name, period, scores)
        logger.info(
            f"Backtest {algorithm.name}: {result.scored_draws} draws scored, {result.skipped_draws} skipped, "
            f"{result.total_predictions} predictions, {result.total_wins} wins, ROI {result.roi:.2f}%"
        )
        return result

    def run_many(
        self,
        algorithm_names: Sequence[str],
        draws: Sequence[Draw],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[BacktestResult]:
        """Backtest several algorithms; unknown names are skipped with a warning"""
        results = []
        for name in algorithm_names:
            if name not in self.algorithms:
                logger.warning(f"Backtest: unknown algorithm '{name}' skipped")
                continue
            results.append(self.run(name, draws, start_date=start_date, end_date=end_date))
        return results

    @staticmethod
    def _period(draws: Sequence[Draw], indices: List[int], start_date, end_date) -> str:
        start = start_date or (draws[indices[0]].draw_date if indices else None)
        end = end_date or (draws[indices[-1]].draw_date if indices else None)
        if start is None or end is None:
            return ""
        return f"{start.isoformat()} - {end.isoformat()}"

    @staticmethod
    def _accumulate(name: str, period: str, scores: List[Optional[DrawScore]]) -> BacktestResult:
        total_predictions = straight_wins = box_wins = total_cost = total_return = 0
        scored = 0
        details: List[BacktestDetail] = []

        for score in sorted((s for s in scores if s is not None), key=lambda s: s.draw_number):
            scored += 1
            total_predictions += score.predictions
            straight_wins += score.straight_wins
            box_wins += score.box_wins
            total_cost += score.cost
            total_return += score.payout
            details.extend(score.details)
        skipped = sum(1 for s in scores if s is None)

        total_wins = straight_wins + box_wins
        if total_predictions > 0:
            win_rate = total_wins / total_predictions * 100
            straight_rate = straight_wins / total_predictions * 100
            box_rate = box_wins / total_predictions * 100
        else:
            win_rate = straight_rate = box_rate = 0.0

        profit = total_return - total_cost
        roi = profit / total_cost * 100 if total_cost > 0 else 0.0

        return BacktestResult(
            algorithm=name,
            period=period,
            total_predictions=total_predictions,
            straight_wins=straight_wins,
            box_wins=box_wins,
            total_wins=total_wins,
            win_rate=win_rate,
            straight_rate=straight_rate,
            box_rate=box_rate,
            total_cost=total_cost,
            total_return=total_return,
            profit=profit,
            roi=roi,
            scored_draws=scored,
            skipped_draws=skipped,
            details=tuple(details),
        )
