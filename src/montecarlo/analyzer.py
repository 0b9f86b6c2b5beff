"""
ロト予測ツール - シミュレーション結果分析モジュール

モンテカルロ・シミュレーションの出現回数テーブルを集計・分析し、
コンソールにレポートを出力する。
"""

from typing import TYPE_CHECKING

from src.common import GameConfig

if TYPE_CHECKING:
    from src.montecarlo.simulator import SimulationResult


def select_top_n(frequencies: dict[int, int], n: int) -> list[int]:
    """
    出現回数の多い数字をN個選び、昇順で返す。

    同数の場合は数字の小さい方を優先する（実行環境によらず結果を再現するため）。

    Args:
        frequencies: {数字: 出現回数} の辞書
        n: 選択する個数

    Returns:
        選ばれた数字の昇順リスト
    """
    ranked = sorted(frequencies.items(), key=lambda x: (-x[1], x[0]))
    return sorted(num for num, _ in ranked[:n])


def analyze_number_frequency(frequencies: dict[int, int]) -> list[tuple[int, int]]:
    """
    数字を出現回数の降順（同数は数字の昇順）に並べる。

    Returns:
        [(数字, 出現回数), ...] のリスト
    """
    return sorted(frequencies.items(), key=lambda x: (-x[1], x[0]))


def expected_count(total_trials: int, pick_count: int, pool_size: int) -> float:
    """一様抽選を仮定した場合の1数字あたりの期待出現回数"""
    return total_trials * pick_count / pool_size


def _print_frequency_section(
    title: str,
    frequencies: dict[int, int],
    recommended: list[int],
    total: int,
    limit: int,
) -> None:
    """1プール分の頻出・低頻出数字を出力する"""
    sorted_freq = analyze_number_frequency(frequencies)
    max_count = max(frequencies.values()) or 1

    print(f"  【{title} 出現頻度 トップ{limit} / ワースト{limit}】")
    print()

    print(f"  ▲ よく出る数字:")
    for num, count in sorted_freq[:limit]:
        bar = "█" * int(count / max_count * 20)
        pct = (count / total) * 100
        mark = "★" if num in recommended else " "
        print(f"   {mark}{num:>2}: {count:>9,} ({pct:>6.2f}%) {bar}")

    print()

    print(f"  ▼ あまり出ない数字:")
    for num, count in sorted_freq[-limit:]:
        bar = "█" * int(count / max_count * 20)
        pct = (count / total) * 100
        print(f"    {num:>2}: {count:>9,} ({pct:>6.2f}%) {bar}")

    print()


def print_report(
    result: "SimulationResult",
    config: GameConfig,
    top_n: int = 10,
) -> None:
    """
    シミュレーション結果のレポートをコンソールに出力する。

    Args:
        result: MonteCarloSimulator.run() の戻り値
        config: 対象ゲームの GameConfig
        top_n: 頻出・低頻出数字の表示件数
    """
    total = result.total_trials

    print()
    print("=" * 60)
    print(f"  🎰 {config.name} マルコフ・モンテカルロ シミュレーション結果")
    print("=" * 60)
    print(f"  試行回数: {total:,} 回")
    print(f"  実行時間: {result.time_taken:,} ms")
    print()

    # ── 推奨番号 ──
    print(f"  【推奨番号】")
    main_str = " - ".join(f"{n:02d}" for n in result.recommended)
    print(f"    本数字  : {main_str}")
    if result.recommended_special is not None:
        special_str = " - ".join(f"{n:02d}" for n in result.recommended_special)
        print(f"    特別数字: {special_str}")
    print()

    # ── 数字別出現頻度 ──
    _print_frequency_section(
        "本数字",
        result.frequencies,
        result.recommended,
        total,
        min(top_n, len(result.frequencies)),
    )

    if result.special_frequencies:
        _print_frequency_section(
            "特別数字",
            result.special_frequencies,
            result.recommended_special or [],
            total,
            min(top_n, len(result.special_frequencies)),
        )

    print("=" * 60)
