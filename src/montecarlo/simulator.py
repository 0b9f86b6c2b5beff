"""
ロト予測ツール - マルコフ・モンテカルロ シミュレーション エンジン

直前の数字との距離で重み付けした逐次抽選（簡易マルコフモデル）を大量試行し、
数字ごとの出現回数から推奨番号を抽出する。
"""

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from src.common import ConfigurationError, GameConfig, get_game_config
from src.common.weights import WeightFunction, build_transition_table, markov_distance_weight
from src.montecarlo.analyzer import select_top_n

DEFAULT_TRIALS = 1_000_000
DEFAULT_CHUNK_SIZE = 50_000

# 進捗コールバック fn(進捗率%)
ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class SimulationResult:
    """
    1回のシミュレーション実行結果。

    Attributes:
        frequencies: 本数字の {数字: 出現回数}
        special_frequencies: 特別数字の {数字: 出現回数}（特別数字なしは空）
        recommended: 出現回数上位の本数字（昇順）
        recommended_special: 出現回数上位の特別数字（昇順）。特別数字なしは None
        total_trials: 試行回数
        time_taken: 実行時間（ミリ秒）
    """

    frequencies: dict[int, int]
    special_frequencies: dict[int, int]
    recommended: list[int]
    recommended_special: Optional[list[int]]
    total_trials: int
    time_taken: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "frequencies": dict(self.frequencies),
            "special_frequencies": dict(self.special_frequencies),
            "recommended": list(self.recommended),
            "recommended_special": (
                list(self.recommended_special) if self.recommended_special is not None else None
            ),
            "total_trials": self.total_trials,
            "time_taken": self.time_taken,
        }


class SimulationCancelledError(Exception):
    """シミュレーションが途中でキャンセルされた場合に送出される例外"""

    def __init__(
        self,
        completed_trials: int,
        total_trials: int,
        frequencies: dict[int, int],
        special_frequencies: dict[int, int],
    ) -> None:
        super().__init__(f"シミュレーションがキャンセルされました ({completed_trials:,} / {total_trials:,} 回)")
        self.completed_trials = completed_trials
        self.total_trials = total_trials
        self.frequencies = frequencies
        self.special_frequencies = special_frequencies


def _weighted_index(weights: list[float], rng: Any) -> int:
    """
    重みに比例した確率でインデックスを1つ選ぶ。

    [0, 合計) の一様乱数から重みを順に引き、残りが0以下になった
    最初のインデックスを返す。重み0のインデックスは選ばない。
    浮動小数点誤差でどこにも到達しなかった場合は重みが正の最後の
    インデックスを、全ての重みが0の場合は最後のインデックスを返す。
    """
    total = sum(weights)
    fallback = len(weights) - 1
    if total <= 0:
        return fallback

    r = rng.random() * total
    for i, weight in enumerate(weights):
        if weight <= 0:
            continue
        fallback = i
        r -= weight
        if r <= 0:
            return i
    return fallback


def generate_markov_set(
    number_range: tuple[int, int],
    count: int,
    rng: Any = None,
    weight_fn: WeightFunction = markov_distance_weight,
    transition_table: Optional[dict[int, list[float]]] = None,
) -> list[int]:
    """
    直前の数字との距離で重み付けしながら、非重複の数字を count 個抽選する。

    最初の1個はプール全体から一様に選び、以降は未選択の数字のみを候補に
    weight_fn(|数字 - 直前の数字|) に比例した確率で1個ずつ選ぶ。
    抽選ごとに独立しており、前回の抽選結果は引き継がない。

    Args:
        number_range: プールの範囲 (最小, 最大)
        count: 選択数（1〜プールサイズ）
        rng: random.Random 互換の乱数生成器（省略時は random モジュール）
        weight_fn: 距離 → 重み の関数
        transition_table: build_transition_table() の事前計算結果（省略時はその場で計算）

    Returns:
        昇順ソート済みの数字リスト

    Raises:
        ConfigurationError: 範囲または選択数が不正な場合
    """
    low, high = number_range
    if low >= high:
        raise ConfigurationError(f"範囲が不正です（最小 < 最大）: {number_range!r}")
    pool_size = high - low + 1
    if not 1 <= count <= pool_size:
        raise ConfigurationError(f"選択数({count})は1〜プールサイズ({pool_size})で指定してください")

    if rng is None:
        rng = random

    current = low + rng.randrange(pool_size)
    picked = [current]
    if count == 1:
        return picked

    if transition_table is None:
        transition_table = build_transition_table(number_range, weight_fn)

    selected = {current}
    while len(picked) < count:
        row = transition_table[current]

        # 選択済みの数字は重み0として候補から外す
        candidates: list[int] = []
        weights: list[float] = []
        for offset, weight in enumerate(row):
            num = low + offset
            if num in selected:
                continue
            candidates.append(num)
            weights.append(weight)

        current = candidates[_weighted_index(weights, rng)]
        selected.add(current)
        picked.append(current)

    return sorted(picked)


def merge_frequencies(*tables: dict[int, int]) -> dict[int, int]:
    """
    複数の出現回数テーブルを加算で統合する（順序に依存しない）。
    """
    merged: dict[int, int] = {}
    for table in tables:
        for num, count in table.items():
            merged[num] = merged.get(num, 0) + count
    return dict(sorted(merged.items()))


class MonteCarloSimulator:
    """
    マルコフ・モンテカルロ法による宝くじ番号シミュレーター。

    試行をチャンク単位で実行し、チャンクの合間にイベントループへ制御を返す。
    進捗はコールバックにパーセント (0〜100) で通知される。

    使用例:
        >>> from src.common import get_game_config
        >>> sim = MonteCarloSimulator(get_game_config("SSQ"), trials=100_000)
        >>> result = asyncio.run(sim.run())
    """

    def __init__(
        self,
        config: Union[GameConfig, str],
        trials: int = DEFAULT_TRIALS,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        rng: Optional[random.Random] = None,
        weight_fn: Optional[WeightFunction] = None,
    ) -> None:
        """
        Args:
            config: ゲーム設定、またはゲームキー（"SSQ", "DLT", "K8"）
            trials: シミュレーション試行回数
            chunk_size: 1チャンクあたりの試行回数
            rng: 乱数生成器（省略時は非決定的な random.Random()）
            weight_fn: 距離 → 重み の関数（省略時は markov_distance_weight）

        Raises:
            ConfigurationError: ゲーム設定が不正な場合
            ValueError: 試行回数・チャンクサイズが1未満の場合
        """
        if isinstance(config, str):
            config = get_game_config(config)
        config.validate()

        if trials < 1:
            raise ValueError(f"試行回数は1以上で指定してください: {trials}")
        if chunk_size < 1:
            raise ValueError(f"チャンクサイズは1以上で指定してください: {chunk_size}")

        self.config = config
        self.trials = trials
        self.chunk_size = chunk_size
        self.rng = rng if rng is not None else random.Random()
        self.weight_fn = weight_fn if weight_fn is not None else markov_distance_weight
        self._cancel_requested = False

        # 遷移重みはプールごとに1回だけ計算する
        self._main_table = build_transition_table(config.main_range, self.weight_fn)
        self._special_table = (
            build_transition_table(config.special_range, self.weight_fn) if config.has_special else None
        )

    def cancel(self) -> None:
        """次のチャンク境界でシミュレーションを中断するよう要求する"""
        self._cancel_requested = True

    async def run(self, progress_callback: Optional[ProgressCallback] = None) -> SimulationResult:
        """
        シミュレーションを実行する。

        Args:
            progress_callback: 進行状況通知関数 fn(進捗率%)。
                チャンクごとに呼ばれ、完了時は必ず 100 が渡される。

        Returns:
            SimulationResult

        Raises:
            SimulationCancelledError: cancel() によって中断された場合
        """
        config = self.config
        start_time = time.perf_counter()

        main_low, main_high = config.main_range
        main_freq = {num: 0 for num in range(main_low, main_high + 1)}
        special_freq: dict[int, int] = {}
        if config.has_special:
            special_low, special_high = config.special_range
            special_freq = {num: 0 for num in range(special_low, special_high + 1)}

        completed = 0
        while completed < self.trials:
            if self._cancel_requested:
                self._cancel_requested = False
                raise SimulationCancelledError(completed, self.trials, main_freq, special_freq)

            batch_size = min(self.chunk_size, self.trials - completed)
            self._run_chunk(batch_size, main_freq, special_freq)
            completed += batch_size

            if progress_callback is not None:
                progress_callback(min(100.0, completed / self.trials * 100))

            # チャンクの合間にイベントループへ制御を返す
            await asyncio.sleep(0)

        # 最後のチャンク中の中断要求は完了済みの結果には適用しない
        self._cancel_requested = False

        recommended = select_top_n(main_freq, config.main_count)
        recommended_special = select_top_n(special_freq, config.special_count) if config.has_special else None

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        return SimulationResult(
            frequencies=main_freq,
            special_frequencies=special_freq,
            recommended=recommended,
            recommended_special=recommended_special,
            total_trials=self.trials,
            time_taken=elapsed_ms,
        )

    def run_sync(self, progress_callback: Optional[ProgressCallback] = None) -> SimulationResult:
        """イベントループを持たない呼び出し元向けの同期版 run()"""
        return asyncio.run(self.run(progress_callback))

    def _run_chunk(self, batch_size: int, main_freq: dict[int, int], special_freq: dict[int, int]) -> None:
        """batch_size 回の試行を実行し、出現回数を加算する"""
        config = self.config
        rng = self.rng

        for _ in range(batch_size):
            main_set = generate_markov_set(
                config.main_range,
                config.main_count,
                rng,
                transition_table=self._main_table,
            )
            for num in main_set:
                main_freq[num] += 1

            if self._special_table is not None:
                special_set = generate_markov_set(
                    config.special_range,
                    config.special_count,
                    rng,
                    transition_table=self._special_table,
                )
                for num in special_set:
                    special_freq[num] += 1
