"""
Numbers4 Hybrid Ensemble
========================

Combines the statistical models into one deduplicated, ranked ticket list.

Order of application (earlier = higher confidence):
1. TransitionModel (needs the previous draw)
2. CorrelationModel
3. PatternModel, several independent samples
4. Legacy frequency ("kako") prediction
5. Randomised frequency variations filling the remaining slots

A model that lacks data is skipped; it never aborts the ensemble.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

import numpy as np
from loguru import logger

from numbers4.draws import DIGITS, Draw, WindowLike, from_digits
from numbers4.exceptions import InsufficientDataError
from numbers4.models.correlation import CorrelationModel
from numbers4.models.frequency import FrequencyModel, rank_digits
from numbers4.models.pattern import PatternModel
from numbers4.models.transition import TransitionModel


@dataclass
class EnsembleEntry:
    """A ticket and the heuristic that produced it"""
    prediction: str
    source: str

    def to_dict(self) -> Dict[str, str]:
        return {'prediction': self.prediction, 'source': self.source}


class HybridEnsemble:
    """Ordered, deduplicated combination of all prediction models"""

    name = "hybrid"

    def __init__(
        self,
        frequency_model: Optional[FrequencyModel] = None,
        transition_model: Optional[TransitionModel] = None,
        correlation_model: Optional[CorrelationModel] = None,
        pattern_model: Optional[PatternModel] = None,
        size: int = 12,
        pattern_runs: int = 3,
        top_digits: int = 3,
        frequency_bias: float = 0.7,
        variation_attempts: int = 10,
    ):
        self.frequency_model = frequency_model or FrequencyModel()
        self.transition_model = transition_model or TransitionModel(self.frequency_model)
        self.correlation_model = correlation_model or CorrelationModel()
        self.pattern_model = pattern_model or PatternModel()
        self.size = size
        self.pattern_runs = pattern_runs
        self.top_digits = top_digits
        self.frequency_bias = frequency_bias
        self.variation_attempts = variation_attempts

    @classmethod
    def from_config(cls, config) -> 'HybridEnsemble':
        """Build an ensemble from an EngineConfig"""
        return cls(
            pattern_model=PatternModel(config.pattern_max_attempts, config.pattern_sum_tolerance),
            size=config.ensemble_size,
            pattern_runs=config.pattern_runs,
            top_digits=config.variation_top_digits,
            frequency_bias=config.variation_frequency_bias,
            variation_attempts=config.variation_max_attempts,
        )

    def generate(
        self,
        window: WindowLike,
        last_draw: Union[Draw, str, None] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> List[str]:
        """
        Generate up to `size` unique tickets, highest confidence first.

        Args:
            window: History window, most recent draw first
            last_draw: Previous draw for the transition model; skipped when None
            rng: Random generator for the sampling steps

        Returns:
            Ordered list of unique 4 digit strings; shorter than `size` when
            the variation generator cannot find new tickets
        """
        return [entry.prediction for entry in self.generate_detailed(window, last_draw, rng)]

    def generate_detailed(
        self,
        window: WindowLike,
        last_draw: Union[Draw, str, None] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> List[EnsembleEntry]:
        """generate() with the producing heuristic attached to each ticket"""
        rng = rng or np.random.default_rng()
        entries: List[EnsembleEntry] = []
        used = set()

        def add(prediction: Optional[str], source: str) -> None:
            if prediction and prediction not in used and len(entries) < self.size:
                entries.append(EnsembleEntry(prediction, source))
                used.add(prediction)

        if last_draw is not None:
            self._run_model(self.transition_model.name, lambda: self.transition_model.predict_next(window, last_draw), add)
        else:
            logger.debug(f"{self.name}: no previous draw, transition model skipped")

        self._run_model(self.correlation_model.name, lambda: self.correlation_model.predict_by_correlation(window, rng), add)

        for _ in range(self.pattern_runs):
            self._run_model(self.pattern_model.name, lambda: self.pattern_model.predict_by_pattern(window, rng), add)

        self._run_model("kako", lambda: self.frequency_model.most_frequent_digits(window), add)

        try:
            table = self.frequency_model.frequency_table(window)
        except InsufficientDataError:
            table = np.zeros((DIGITS, 10), dtype=np.int64)

        for _ in range(self.size - len(entries)):
            add(self.random_variation(table, used, rng), "variation")

        logger.info(f"{self.name}: generated {len(entries)} predictions "
                    f"({', '.join(sorted({e.source for e in entries}))})")
        return entries

    def _run_model(self, source: str, predict: Callable[[], str], add: Callable[[Optional[str], str], None]) -> None:
        try:
            add(predict(), source)
        except InsufficientDataError as e:
            logger.warning(f"{self.name}: skipping {source} model: {e}")

    def random_variation(self, table: np.ndarray, used, rng: np.random.Generator) -> Optional[str]:
        """
        Sample a ticket not in `used`.

        Each position takes one of its top ranked digits with probability
        `frequency_bias`, otherwise a uniform digit. Gives up after
        `variation_attempts` duplicates and returns None.
        """
        top = [rank_digits(table[p])[:self.top_digits] for p in range(DIGITS)]

        for _ in range(self.variation_attempts):
            digits = []
            for position in range(DIGITS):
                if rng.random() < self.frequency_bias and top[position]:
                    digits.append(int(rng.choice(top[position])))
                else:
                    digits.append(int(rng.integers(0, 10)))
            candidate = from_digits(digits)
            if candidate not in used:
                return candidate

        logger.debug(f"{self.name}: variation slot dropped after {self.variation_attempts} duplicate attempts")
        return None
