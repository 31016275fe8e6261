"""
Numbers4 Hit Classifier
=======================

Straight: the prediction equals the winning number.
Box: the prediction uses the same digit multiset (any order). Every straight
is also a box.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from numbers4.draws import normalize_winning_number
from numbers4.permutations import box_key

STRAIGHT_PRIZE = 900000
BOX_PRIZE = 37500


@dataclass(frozen=True)
class HitOutcome:
    prediction: str
    is_straight: bool
    is_box: bool

    def to_dict(self) -> dict:
        return {'prediction': self.prediction, 'isStraight': self.is_straight, 'isBox': self.is_box}


@dataclass(frozen=True)
class HitCount:
    straight: int
    box: int       # all box matches, straights included
    box_only: int  # box matches that are not straights

    def to_dict(self) -> dict:
        return {'straight': self.straight, 'box': self.box, 'boxOnly': self.box_only}


def check_straight(prediction: str, winning_number: str) -> bool:
    return prediction == winning_number


def check_box(prediction: str, winning_number: str) -> bool:
    return box_key(prediction) == box_key(winning_number)


def classify(predictions: Iterable[str], winning_number: str) -> List[HitOutcome]:
    """
    Classify each prediction against the winning number.

    Raises:
        MalformedDrawError: If the winning number or a prediction is not 4 digits
    """
    winning = normalize_winning_number(winning_number)
    winning_key = box_key(winning)
    outcomes = []
    for prediction in predictions:
        prediction = normalize_winning_number(prediction)
        outcomes.append(HitOutcome(
            prediction=prediction,
            is_straight=prediction == winning,
            is_box=box_key(prediction) == winning_key,
        ))
    return outcomes


def win_type(prediction: str, winning_number: str) -> Optional[str]:
    """'straight', 'box' (box only) or None"""
    outcome = classify([prediction], winning_number)[0]
    if outcome.is_straight:
        return 'straight'
    if outcome.is_box:
        return 'box'
    return None


def count_hits(results: Iterable[HitOutcome]) -> HitCount:
    straight = box = box_only = 0
    for result in results:
        if result.is_straight:
            straight += 1
            box += 1
        elif result.is_box:
            box += 1
            box_only += 1
    return HitCount(straight=straight, box=box, box_only=box_only)


def calculate_prize(hit_count: HitCount, straight_prize: int = STRAIGHT_PRIZE, box_prize: int = BOX_PRIZE) -> int:
    """
    Prize for a hit count. A straight pays only the straight prize.

    The box prize is the flat Numbers4 box amount; the real amount varies
    with the number of distinct orderings.
    """
    return hit_count.straight * straight_prize + hit_count.box_only * box_prize
