"""Draw builders shared by the test modules"""

from datetime import date, timedelta

from numbers4.draws import Draw, HistoryWindow

START_DATE = date(2024, 1, 1)


def make_draws(numbers, start_number=1, start_date=START_DATE):
    """Chronological Draw list, one draw per day"""
    return [
        Draw(start_number + i, start_date + timedelta(days=i), number)
        for i, number in enumerate(numbers)
    ]


def make_window(numbers_most_recent_first):
    """HistoryWindow from winning numbers listed most recent first"""
    chronological = list(reversed(numbers_most_recent_first))
    return HistoryWindow.from_chronological(make_draws(chronological))
