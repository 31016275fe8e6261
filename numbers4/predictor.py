"""
Numbers4 Predictor
==================

Entry points used by the API and the scripts:
- single-shot ensemble prediction from a history window
- the daily prediction bundle for the next draw
- date-bounded backtests over several algorithms
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from loguru import logger

from numbers4.backtest import BacktestResult, BacktestSimulator
from numbers4.config import EngineConfig, get_config
from numbers4.date_utils import calculate_next_draw_date
from numbers4.draw_history import DrawHistory
from numbers4.draws import Draw, HistoryWindow
from numbers4.ensemble import HybridEnsemble
from numbers4.exceptions import InsufficientDataError, UnknownAlgorithmError
from numbers4.seeded import HYBRID_SEED_OFFSET, seeded_predictions


class Predictor:
    """Facade over the ensemble, the individual models and the simulator"""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()
        self.ensemble = HybridEnsemble.from_config(self.config)
        logger.info(f"Predictor initialized (window={self.config.window_size}, ensemble={self.config.ensemble_size})")

    def generate_predictions(
        self,
        window: HistoryWindow,
        last_draw: Optional[Draw] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> List[str]:
        """
        Ensemble tickets for the draw following `window`.

        Raises:
            InsufficientDataError: If the window is empty
        """
        if not window:
            raise InsufficientDataError("No historical draws supplied", required=1, available=0)
        return self.ensemble.generate(window, last_draw, rng)

    def next_window(self, history: DrawHistory) -> HistoryWindow:
        """
        Latest full window from the history.

        Raises:
            InsufficientDataError: If the history is shorter than the window size
        """
        return history.latest_window(self.config.window_size).require(self.config.window_size)

    def predict_next(self, history: DrawHistory, rng: Optional[np.random.Generator] = None) -> List[str]:
        window = self.next_window(history)
        return self.generate_predictions(window, window.latest, rng)

    def daily_predictions(self, history: DrawHistory, rng: Optional[np.random.Generator] = None) -> Dict[str, Any]:
        """
        Prediction bundle for the next draw.

        Returns:
            Dict with the next draw number/date and one entry per algorithm
        """
        window = self.next_window(history)
        latest = window.latest
        rng = rng or np.random.default_rng()
        next_draw_number = latest.draw_number + 1
        ensemble = self.ensemble

        bundle = {
            'drawNumber': next_draw_number,
            'drawDate': calculate_next_draw_date(
                latest.draw_date, self.config.extra_holidays, self.config.timezone).isoformat(),
            'hybrid': ensemble.generate(window, latest, rng),
            'transition': [ensemble.transition_model.predict_next(window, latest)],
            'correlation': [ensemble.correlation_model.predict_by_correlation(window, rng)],
            'pattern': [ensemble.pattern_model.predict_by_pattern(window, rng)],
            'kako': ensemble.frequency_model.kako_predictions(window, limit=self.config.single_model_cap),
            'aiRandom': seeded_predictions(next_draw_number, count=self.config.ensemble_size),
            'publishedHybrid': seeded_predictions(next_draw_number + HYBRID_SEED_OFFSET, count=self.config.ensemble_size),
        }
        logger.info(f"Daily predictions generated for draw {next_draw_number} ({bundle['drawDate']})")
        return bundle

    def run_backtest(
        self,
        history: DrawHistory,
        start_date: date,
        end_date: date,
        algorithms: Sequence[str],
        window_size: Optional[int] = None,
        seed: Optional[int] = None,
        workers: int = 1,
    ) -> List[BacktestResult]:
        """
        Backtest every named algorithm over draws dated start_date..end_date.

        Raises:
            UnknownAlgorithmError: If an algorithm name is not recognised
            ValueError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValueError("startDate must not be after endDate")

        size = window_size or self.config.window_size
        simulator = BacktestSimulator.from_config(self.config, seed=seed, workers=workers)
        for name in algorithms:
            if name not in simulator.algorithms:
                raise UnknownAlgorithmError(name)

        draws = history.with_lookback(start_date, end_date, size)
        if not draws:
            logger.warning(f"No draws between {start_date} and {end_date}")
            return []

        return [
            simulator.run(name, draws, window_size=size, start_date=start_date, end_date=end_date)
            for name in algorithms
        ]

