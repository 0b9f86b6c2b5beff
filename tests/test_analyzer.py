"""
テスト - シミュレーション結果分析モジュール
"""

import random

import pytest

from src.common import LOTTERY_CONFIG
from src.montecarlo.analyzer import (
    analyze_number_frequency,
    expected_count,
    print_report,
    select_top_n,
)
from src.montecarlo.simulator import MonteCarloSimulator


class TestSelectTopN:
    """select_top_n() のテスト"""

    def test_top_n_ascending(self):
        """出現回数上位N個を昇順で返すこと"""
        freq = {1: 10, 2: 50, 3: 30, 4: 40, 5: 20}
        assert select_top_n(freq, 3) == [2, 3, 4]

    def test_tie_break_by_number(self):
        """同数の場合は数字の小さい方が選ばれること"""
        freq = {7: 5, 3: 5, 9: 5, 1: 2}
        assert select_top_n(freq, 2) == [3, 7]

    def test_tie_break_independent_of_insertion_order(self):
        """辞書の挿入順によらず同じ結果になること"""
        freq_a = {1: 3, 2: 3, 3: 3, 4: 1}
        freq_b = {4: 1, 3: 3, 2: 3, 1: 3}
        assert select_top_n(freq_a, 2) == select_top_n(freq_b, 2) == [1, 2]

    def test_idempotent(self):
        """同じテーブルから2回計算しても同じ結果になること"""
        freq = {n: (n * 7) % 11 for n in range(1, 34)}
        assert select_top_n(freq, 6) == select_top_n(freq, 6)

    def test_does_not_mutate(self):
        """入力テーブルを変更しないこと"""
        freq = {1: 3, 2: 1}
        select_top_n(freq, 1)
        assert freq == {1: 3, 2: 1}

    def test_n_larger_than_table(self):
        """Nがテーブルより大きい場合は全数字を返すこと"""
        assert select_top_n({2: 1, 1: 1}, 5) == [1, 2]

    def test_empty(self):
        """空テーブルでは空リストを返すこと"""
        assert select_top_n({}, 3) == []


class TestAnalyzeNumberFrequency:
    """analyze_number_frequency() のテスト"""

    def test_sorted_descending(self):
        """出現回数の降順（同数は数字の昇順）に並ぶこと"""
        freq = {1: 2, 2: 9, 3: 2, 4: 5}
        assert analyze_number_frequency(freq) == [(2, 9), (4, 5), (1, 2), (3, 2)]

    def test_expected_count(self):
        """一様抽選時の期待出現回数"""
        assert expected_count(1_000, 6, 33) == pytest.approx(6_000 / 33)


class TestPrintReport:
    """print_report() のテスト"""

    def test_report_with_special(self, capsys):
        """特別数字ありのレポートが出力されること"""
        config = LOTTERY_CONFIG["SSQ"]
        result = MonteCarloSimulator(config, trials=100, rng=random.Random(1)).run_sync()

        print_report(result, config, top_n=5)
        out = capsys.readouterr().out

        assert "双色球" in out
        assert "試行回数: 100 回" in out
        assert "本数字  : " + " - ".join(f"{n:02d}" for n in result.recommended) in out
        assert "特別数字 出現頻度" in out

    def test_report_without_special(self, capsys):
        """特別数字なしのレポートに特別数字の欄がないこと"""
        config = LOTTERY_CONFIG["K8"]
        result = MonteCarloSimulator(config, trials=20, rng=random.Random(2)).run_sync()

        print_report(result, config)
        out = capsys.readouterr().out

        assert "快乐八" in out
        assert "特別数字" not in out
