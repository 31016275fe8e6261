"""
Numbers4 - Prediction and Backtesting Engine
============================================

Statistical heuristics for 4 digit number lotteries:
- Positional frequency, digit transition, cross-position correlation and
  pattern conformity models
- A deduplicated hybrid ensemble of those models
- Straight/box hit classification
- Walk-forward backtesting with cost, payout and ROI accounting

The engine makes no claim of real predictive power; it guarantees
reproducible computation over the supplied history.
"""

__version__ = "1.0.0"

from .draws import Draw, HistoryWindow, normalize_winning_number
from .exceptions import InsufficientDataError, MalformedDrawError, Numbers4Error, UnknownAlgorithmError
from .permutations import permute, permutation_count
from .models import CorrelationModel, FrequencyModel, PatternModel, TransitionModel
from .ensemble import HybridEnsemble
from .hit_classifier import classify, count_hits
from .backtest import BacktestResult, BacktestSimulator
from .seeded import seeded_predictions

__all__ = [
    # Records
    'Draw',
    'HistoryWindow',
    'normalize_winning_number',

    # Errors
    'Numbers4Error',
    'InsufficientDataError',
    'MalformedDrawError',
    'UnknownAlgorithmError',

    # Engine
    'permute',
    'permutation_count',
    'FrequencyModel',
    'TransitionModel',
    'CorrelationModel',
    'PatternModel',
    'HybridEnsemble',
    'classify',
    'count_hits',
    'BacktestSimulator',
    'BacktestResult',
    'seeded_predictions',
]
