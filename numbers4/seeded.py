"""
Numbers4 Seeded Generator
=========================

Reproducible "AI-random" tickets. The sequence for a given seed is fixed
forever because published predictions are regenerated from the draw number:

    state = (state * 1664525 + 1013904223) mod 2**32
    digit = floor(state / 2**32 * 10)
"""

from typing import Iterator, List

from loguru import logger

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32

# Offset separating the published daily hybrid set from the AI-random set
HYBRID_SEED_OFFSET = 1000


class LinearCongruentialGenerator:
    """Numerical Recipes LCG producing digits 0-9"""

    def __init__(self, seed: int):
        self.state = int(seed) % LCG_MODULUS

    def next_state(self) -> int:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state

    def next_float(self) -> float:
        return self.next_state() / LCG_MODULUS

    def next_digit(self) -> int:
        # Integer form of floor(state / 2**32 * 10)
        return (self.next_state() * 10) >> 32

    def digits(self) -> Iterator[int]:
        while True:
            yield self.next_digit()


def seeded_predictions(seed: int, count: int = 12) -> List[str]:
    """
    Generate `count` distinct tickets from the LCG seeded with `seed`.

    Duplicate tickets are skipped without resetting the generator, so the
    result depends only on the seed.
    """
    if count > 10000:
        raise ValueError("count cannot exceed the 10000 possible tickets")

    digits = LinearCongruentialGenerator(seed).digits()
    predictions: List[str] = []
    seen = set()
    while len(predictions) < count:
        number = ''.join(str(next(digits)) for _ in range(4))
        if number not in seen:
            seen.add(number)
            predictions.append(number)

    logger.debug(f"Seeded generator (seed={seed}) produced {len(predictions)} predictions")
    return predictions
