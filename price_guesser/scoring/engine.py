from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

ROUNDS_PER_DAY = 5
MAX_ROUND_SCORE = 100
MAX_STARTING_RANGE = 1000
GAME_TITLE = "Price Guesser"


@dataclass(frozen=True)
class AccuracyTier:
    min_accuracy: float
    message: str
    emoji: str


# Evaluated top-down; lower bounds are inclusive.
ACCURACY_TIERS: tuple[AccuracyTier, ...] = (
    AccuracyTier(95, "Perfect!", "🎯"),
    AccuracyTier(85, "Excellent!", "🌟"),
    AccuracyTier(70, "Great job!", "👏"),
    AccuracyTier(50, "Not bad!", "👍"),
    AccuracyTier(30, "Keep trying!", "💪"),
    AccuracyTier(0, "Way off!", "😅"),
)


@dataclass
class GuessResult:
    guess: float
    actual: float
    accuracy: float
    message: str
    emoji: str


def calculate_accuracy(guess: float, actual: float) -> float:
    difference = abs(guess - actual)
    percentage_off = (difference / actual) * 100
    return max(0.0, 100 - percentage_off)


def accuracy_tier(accuracy: float) -> AccuracyTier:
    for tier in ACCURACY_TIERS:
        if accuracy >= tier.min_accuracy:
            return tier
    return ACCURACY_TIERS[-1]


def evaluate_guess(guess: float, actual: float) -> GuessResult:
    accuracy = calculate_accuracy(guess, actual)
    tier = accuracy_tier(accuracy)
    return GuessResult(
        guess=guess,
        actual=actual,
        accuracy=accuracy,
        message=tier.message,
        emoji=tier.emoji,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def total_score(scores: Sequence[float]) -> int:
    return sum(_round_half_up(score) for score in scores)


def starting_guess(price: float) -> int:
    return _round_half_up(min(price * 3, MAX_STARTING_RANGE) / 2)


def share_text(scores: Sequence[float], day_key: str, origin: str) -> str:
    emojis = " ".join(accuracy_tier(score).emoji for score in scores)
    return (
        f"{GAME_TITLE} {day_key}\n"
        f"{emojis}\n"
        f"Score: {total_score(scores)}/{ROUNDS_PER_DAY * MAX_ROUND_SCORE}\n"
        f"\n"
        f"Play at: {origin}"
    )
