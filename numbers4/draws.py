"""
Numbers4 Draw Records
=====================

Immutable draw records and the most-recent-first history window every
prediction model consumes.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np

from numbers4.exceptions import InsufficientDataError, MalformedDrawError

DIGITS = 4

_WINNING_NUMBER_RE = re.compile(r'[0-9]{4}')


def normalize_winning_number(value: Union[str, int]) -> str:
    """
    Normalize a winning number to its 4 character form.

    Integers are zero-padded ("0102" and 102 describe the same ticket once
    padded). Strings must already be exactly four ASCII digits.

    Raises:
        MalformedDrawError: If the value cannot be a Numbers4 ticket
    """
    if isinstance(value, (bool, np.bool_)):
        raise MalformedDrawError(value)
    if isinstance(value, (int, np.integer)):
        if not 0 <= int(value) <= 9999:
            raise MalformedDrawError(value)
        return f"{int(value):04d}"
    if isinstance(value, str) and _WINNING_NUMBER_RE.fullmatch(value):
        return value
    raise MalformedDrawError(value)


def to_digits(number: str) -> List[int]:
    """'0102' -> [0, 1, 0, 2]"""
    return [int(c) for c in normalize_winning_number(number)]


def from_digits(digits: Iterable[int]) -> str:
    """[0, 1, 0, 2] -> '0102'"""
    return ''.join(str(int(d)) for d in digits)


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if hasattr(value, 'to_pydatetime'):
        return value.to_pydatetime().date()
    return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()


@dataclass(frozen=True)
class Draw:
    """A single recorded Numbers4 draw"""
    draw_number: int
    draw_date: date
    winning_number: str

    def __post_init__(self):
        object.__setattr__(self, 'winning_number', normalize_winning_number(self.winning_number))
        object.__setattr__(self, 'draw_date', _parse_date(self.draw_date))
        object.__setattr__(self, 'draw_number', int(self.draw_number))

    @property
    def digits(self) -> List[int]:
        return [int(c) for c in self.winning_number]

    def to_dict(self) -> dict:
        return {
            'drawNumber': self.draw_number,
            'drawDate': self.draw_date.isoformat(),
            'winningNumber': self.winning_number,
        }


WindowLike = Union['HistoryWindow', Sequence[Draw], Sequence[str]]


class HistoryWindow:
    """
    Ordered, most-recent-first slice of draws.

    A window never pads itself: asking for more draws than it holds raises
    InsufficientDataError.
    """

    def __init__(self, draws: Iterable[Draw]):
        self._draws = tuple(draws)

    @classmethod
    def from_chronological(cls, draws: Sequence[Draw]) -> 'HistoryWindow':
        """Build a window from draws ordered oldest to newest"""
        return cls(reversed(list(draws)))

    def __len__(self) -> int:
        return len(self._draws)

    def __iter__(self) -> Iterator[Draw]:
        return iter(self._draws)

    def __getitem__(self, index):
        return self._draws[index]

    def __bool__(self) -> bool:
        return bool(self._draws)

    def __repr__(self) -> str:
        return f"HistoryWindow(size={len(self._draws)})"

    @property
    def latest(self) -> Optional[Draw]:
        return self._draws[0] if self._draws else None

    @property
    def numbers(self) -> List[str]:
        return [d.winning_number for d in self._draws]

    def chronological(self) -> List[Draw]:
        """Draws ordered oldest to newest"""
        return list(reversed(self._draws))

    def require(self, size: int) -> 'HistoryWindow':
        """Return the `size` most recent draws, raising when fewer are held."""
        if len(self._draws) < size:
            raise InsufficientDataError(
                f"Window holds {len(self._draws)} draws, {size} required",
                required=size,
                available=len(self._draws),
            )
        return HistoryWindow(self._draws[:size])


def digit_matrix(window: WindowLike) -> np.ndarray:
    """
    Convert a window into an (n, 4) integer array, most recent draw first.

    Accepts a HistoryWindow, a sequence of Draw, or a sequence of winning
    number strings.
    """
    rows = []
    for item in window:
        number = item.winning_number if isinstance(item, Draw) else normalize_winning_number(item)
        rows.append([int(c) for c in number])
    if not rows:
        return np.zeros((0, DIGITS), dtype=np.int64)
    return np.array(rows, dtype=np.int64)


def require_non_empty(window: WindowLike, model_name: str) -> np.ndarray:
    """digit_matrix() that raises InsufficientDataError for an empty window"""
    matrix = digit_matrix(window)
    if matrix.shape[0] == 0:
        raise InsufficientDataError(f"{model_name}: no historical draws available", required=1, available=0)
    return matrix
