"""Rule-based advice from recent round history.

Rules are checked in order and only the first match is shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from models import FinalizedRound

HOLES_PER_ROUND = 18
# Par 4 and par 5 holes per round; fairway rate is measured against these.
FAIRWAY_HOLES_PER_ROUND = 14

ACCUMULATE_DATA_MESSAGE = (
    "データを蓄積しましょう。ラウンドを重ねることで、あなたに最適なアドバイスを提供できるようになります。"
)
ANALYZING_MESSAGE = (
    "過去のデータを分析中です。ラウンドを続けることで、より具体的なアドバイスを提供できます。"
)


@dataclass(frozen=True)
class HistoryStats:
    rounds: int
    gir_rate: float
    fairway_rate: float
    avg_putts: float
    avg_score: float
    best_score: int


def compute_history_stats(history: Sequence[FinalizedRound]) -> Optional[HistoryStats]:
    """Rates and averages over every supplied round; None for empty history."""
    if not history:
        return None
    rounds = len(history)
    total_holes = rounds * HOLES_PER_ROUND
    scores = [r.total_score for r in history]
    return HistoryStats(
        rounds=rounds,
        gir_rate=sum(r.gir_count for r in history) / total_holes * 100,
        fairway_rate=sum(r.fairway_hit_count for r in history)
        / (rounds * FAIRWAY_HOLES_PER_ROUND) * 100,
        avg_putts=sum(r.total_putts for r in history) / total_holes,
        avg_score=sum(scores) / rounds,
        best_score=min(scores),
    )


Rule = Tuple[Callable[[HistoryStats], bool], Callable[[HistoryStats], str]]


def _fixed(message: str) -> Callable[[HistoryStats], str]:
    return lambda _stats: message


ADVICE_RULES: List[Rule] = [
    (
        lambda s: s.gir_rate < 30,
        _fixed("GIR率が低めです。アプローチショットの精度を上げる練習を意識しましょう。"),
    ),
    (
        lambda s: s.gir_rate < 50,
        _fixed("GIR率を改善するとスコアが縮みます。距離感を意識したアプローチ練習を。"),
    ),
    (
        lambda s: s.gir_rate >= 70,
        _fixed("GIR率が高いですね！パッティングの精度を上げるとさらにスコアが良くなります。"),
    ),
    (
        lambda s: s.fairway_rate < 40,
        _fixed("ティーショットの方向性を安定させると、スコアが大きく改善します。"),
    ),
    (
        lambda s: s.fairway_rate >= 60,
        _fixed("ティーショットが安定しています。アプローチとパッティングに集中しましょう。"),
    ),
    (
        lambda s: s.avg_putts > 2.0,
        _fixed("パット数を減らすことでスコアが縮みます。距離感とライン読みの練習を。"),
    ),
    (
        lambda s: s.avg_putts < 1.8,
        _fixed("パッティングが良い調子です。この調子を維持しましょう。"),
    ),
    (
        lambda s: s.avg_score > 100,
        _fixed("まずはOBやペナルティを減らすことを意識すると、スコアが安定します。"),
    ),
    (
        lambda s: s.avg_score < 90 and s.avg_score > s.best_score + 5,
        lambda s: f"ベストスコア（{s.best_score}）に近づけるよう、安定性を向上させましょう。",
    ),
]


def generate_advice(history: Sequence[FinalizedRound]) -> str:
    """Pick one advice message for the player.

    The caller decides how much history to pass (normally the latest 10 rounds).
    """
    stats = compute_history_stats(history)
    if stats is None:
        return ACCUMULATE_DATA_MESSAGE
    for applies, message in ADVICE_RULES:
        if applies(stats):
            return message(stats)
    return ANALYZING_MESSAGE
