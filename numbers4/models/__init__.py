"""
Numbers4 statistical models.

Each model is a pure function of its history window (plus an explicit random
generator where sampling is involved).
"""

from .frequency import FrequencyModel, FrequencyAnalysis
from .transition import TransitionModel
from .correlation import CorrelationModel
from .pattern import PatternModel, PatternStats

__all__ = [
    'FrequencyModel',
    'FrequencyAnalysis',
    'TransitionModel',
    'CorrelationModel',
    'PatternModel',
    'PatternStats',
]
