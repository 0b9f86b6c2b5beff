"""
ロト予測ツール - 重み計算モジュール

直前に選ばれた数字との距離から、次に選ぶ数字の重みを決める
遷移ポリシー（簡易マルコフモデル）を提供する。
"""

from typing import Callable

# 距離 → 重み の関数型
WeightFunction = Callable[[int], float]

# 距離帯ごとの重み
NEAR_WEIGHT = 1  # 距離1〜2（隣接数字は出にくい）
WAVE_WEIGHT = 5  # 距離3〜12（よくある散らばり）
FAR_WEIGHT = 2  # それ以外

WAVE_MIN_DISTANCE = 3
WAVE_MAX_DISTANCE = 12


def markov_distance_weight(distance: int) -> float:
    """
    直前の数字からの距離に対応する重みを返す（デフォルトポリシー）。

    重みの定義:
        距離 3〜12 → 5
        距離 1〜2  → 1
        それ以外   → 2
    """
    if WAVE_MIN_DISTANCE <= distance <= WAVE_MAX_DISTANCE:
        return WAVE_WEIGHT
    if distance in (1, 2):
        return NEAR_WEIGHT
    return FAR_WEIGHT


def build_transition_table(
    number_range: tuple[int, int],
    weight_fn: WeightFunction = markov_distance_weight,
) -> dict[int, list[float]]:
    """
    プール内の全数字について、遷移元 → 各数字の重みリストを事前計算する。

    Args:
        number_range: プールの範囲 (最小, 最大)
        weight_fn: 距離 → 重み の関数

    Returns:
        {遷移元の数字: [プール先頭から順の重み, ...]} の辞書。
        遷移元自身（距離0）の重みも含むが、抽選時には選択済みとして除外される。

    Raises:
        ValueError: 重み関数が負の値を返した場合
    """
    low, high = number_range
    pool = range(low, high + 1)

    table: dict[int, list[float]] = {}
    for current in pool:
        row = []
        for num in pool:
            weight = weight_fn(abs(num - current))
            if weight < 0:
                raise ValueError(f"重みは0以上である必要があります: 距離{abs(num - current)} → {weight}")
            row.append(weight)
        table[current] = row

    return table
