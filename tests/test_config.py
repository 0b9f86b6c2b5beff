"""
テスト - ゲーム設定・重み計算モジュール
"""

import dataclasses

import pytest

from src.common import ConfigurationError, GameConfig, LOTTERY_CONFIG, get_game_config
from src.common.weights import build_transition_table, markov_distance_weight


class TestGameConfig:
    """GameConfig のテスト"""

    def test_builtin_games(self):
        """組み込みゲームの範囲と選択数が正しいこと"""
        ssq = LOTTERY_CONFIG["SSQ"]
        assert (ssq.main_range, ssq.main_count) == ((1, 33), 6)
        assert (ssq.special_range, ssq.special_count) == ((1, 16), 1)

        dlt = LOTTERY_CONFIG["DLT"]
        assert (dlt.main_range, dlt.main_count) == ((1, 35), 5)
        assert (dlt.special_range, dlt.special_count) == ((1, 12), 2)

        k8 = LOTTERY_CONFIG["K8"]
        assert (k8.main_range, k8.main_count) == ((1, 80), 20)
        assert not k8.has_special
        assert k8.special_pool_size == 0

    def test_pool_sizes(self):
        """プールサイズが範囲から計算されること"""
        ssq = LOTTERY_CONFIG["SSQ"]
        assert ssq.main_pool_size == 33
        assert ssq.special_pool_size == 16
        assert ssq.has_special

    def test_immutable(self):
        """設定が書き換えられないこと"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            LOTTERY_CONFIG["SSQ"].main_count = 7

    def test_count_exceeds_pool(self):
        """選択数がプールサイズを超えるとConfigurationError"""
        with pytest.raises(ConfigurationError, match="プールサイズ"):
            GameConfig(name="不正", main_range=(1, 5), main_count=10)

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count(self, count):
        """選択数が1未満でConfigurationError"""
        with pytest.raises(ConfigurationError, match="選択数"):
            GameConfig(name="不正", main_range=(1, 10), main_count=count)

    @pytest.mark.parametrize("number_range", [(5, 5), (10, 1), (1,), (1, 2, 3), ("1", "10")])
    def test_malformed_range(self, number_range):
        """不正な範囲でConfigurationError"""
        with pytest.raises(ConfigurationError):
            GameConfig(name="不正", main_range=number_range, main_count=1)

    @pytest.mark.parametrize(
        "number_range, count",
        [((1, 10), True), ((False, True), 1), ((True, 10), 1)],
    )
    def test_bool_rejected(self, number_range, count):
        """bool は整数として扱わずConfigurationError"""
        with pytest.raises(ConfigurationError):
            GameConfig(name="不正", main_range=number_range, main_count=count)

    def test_bool_special_count_rejected(self):
        """特別数字の選択数に bool を指定するとConfigurationError"""
        with pytest.raises(ConfigurationError, match="特別数字"):
            GameConfig(name="不正", main_range=(1, 33), main_count=6, special_range=(1, 16), special_count=True)

    def test_special_pool_pairing(self):
        """特別数字の範囲と選択数は片方だけ指定できないこと"""
        with pytest.raises(ConfigurationError, match="特別数字"):
            GameConfig(name="不正", main_range=(1, 33), main_count=6, special_range=(1, 16))
        with pytest.raises(ConfigurationError, match="特別数字"):
            GameConfig(name="不正", main_range=(1, 33), main_count=6, special_count=1)

    def test_special_count_exceeds_pool(self):
        """特別数字の選択数がプールサイズを超えるとConfigurationError"""
        with pytest.raises(ConfigurationError, match="特別数字"):
            GameConfig(name="不正", main_range=(1, 33), main_count=6, special_range=(1, 3), special_count=4)

    def test_configuration_error_is_value_error(self):
        """ConfigurationError は ValueError として捕捉できること"""
        with pytest.raises(ValueError):
            GameConfig(name="不正", main_range=(1, 5), main_count=10)

    def test_get_game_config_case_insensitive(self):
        """ゲームキーが大文字小文字を問わないこと"""
        assert get_game_config("ssq") is LOTTERY_CONFIG["SSQ"]
        assert get_game_config("K8") is LOTTERY_CONFIG["K8"]

    def test_get_game_config_invalid(self):
        """不正なゲームキーでConfigurationError"""
        with pytest.raises(ConfigurationError, match="不正なゲームキー"):
            get_game_config("INVALID")


class TestWeights:
    """重み付けポリシーのテスト"""

    @pytest.mark.parametrize(
        "distance, expected",
        [(1, 1), (2, 1), (3, 5), (7, 5), (12, 5), (13, 2), (30, 2), (0, 2)],
    )
    def test_markov_distance_weight(self, distance, expected):
        """距離帯ごとの重みが正しいこと"""
        assert markov_distance_weight(distance) == expected

    def test_transition_table_shape(self):
        """遷移テーブルがプール全体 × プール全体であること"""
        table = build_transition_table((1, 16))
        assert sorted(table) == list(range(1, 17))
        assert all(len(row) == 16 for row in table.values())

    def test_transition_table_values(self):
        """遷移テーブルの値が距離に対応した重みであること"""
        table = build_transition_table((1, 33))
        row = table[10]
        # 数字11（距離1）、数字13（距離3）、数字23（距離13）
        assert row[11 - 1] == 1
        assert row[13 - 1] == 5
        assert row[23 - 1] == 2

    def test_transition_table_custom_fn(self):
        """重み関数を差し替えられること"""
        table = build_transition_table((1, 5), weight_fn=lambda d: d * 10)
        assert table[1] == [0, 10, 20, 30, 40]

    def test_transition_table_negative_weight(self):
        """負の重みでValueError"""
        with pytest.raises(ValueError, match="重み"):
            build_transition_table((1, 5), weight_fn=lambda d: -1)
