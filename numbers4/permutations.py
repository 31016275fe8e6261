"""
Numbers4 Permutation Engine
===========================

Expands a ticket into its box purchase set: every distinct ordering of its
digit multiset. A ticket with digits 1,1,2,3 has 12 orderings, not 24.
"""

from math import factorial
from collections import Counter
from typing import Iterable, List, Sequence, Set


def _next_permutation(values: List[str]) -> bool:
    """
    Rearrange `values` in place into the next lexicographic ordering.

    Returns False once the last ordering has been reached.
    """
    i = len(values) - 2
    while i >= 0 and values[i] >= values[i + 1]:
        i -= 1
    if i < 0:
        return False
    j = len(values) - 1
    while values[j] <= values[i]:
        j -= 1
    values[i], values[j] = values[j], values[i]
    values[i + 1:] = reversed(values[i + 1:])
    return True


def permutation_list(digits: Sequence[str]) -> List[str]:
    """Distinct orderings of `digits` in lexicographic order."""
    values = sorted(str(d) for d in digits)
    if not values:
        return []
    results = [''.join(values)]
    while _next_permutation(values):
        results.append(''.join(values))
    return results


def permute(digits: Iterable[str]) -> Set[str]:
    """
    All distinct orderings of the digit multiset.

    Args:
        digits: A 4 character ticket or a sequence of its digit characters

    Returns:
        Set of distinct ticket strings
    """
    return set(permutation_list(list(digits)))


def permutation_count(number: Iterable[str]) -> int:
    """
    Number of distinct orderings, 4! divided by the factorial of every
    digit multiplicity.
    """
    digits = list(number)
    count = factorial(len(digits))
    for multiplicity in Counter(digits).values():
        count //= factorial(multiplicity)
    return count


def box_key(number: str) -> str:
    """Sorted digit string; two tickets box-match when their keys are equal"""
    return ''.join(sorted(number))
