"""
ロト予測ツール - ゲーム設定モジュール

各ゲームの番号プール（本数字・特別数字）の範囲と選択数を定義する。
設定は不変で、シミュレーション中に書き換えられることはない。
"""

from dataclasses import dataclass
from typing import Optional


class ConfigurationError(ValueError):
    """ゲーム設定が不正な場合に送出される例外"""


def _validate_pool(label: str, number_range: tuple[int, int], count: int) -> None:
    """1つの番号プール（範囲と選択数）を検証する"""
    if not isinstance(number_range, (tuple, list)) or len(number_range) != 2:
        raise ConfigurationError(f"{label}の範囲は (最小, 最大) の2要素で指定してください: {number_range!r}")

    low, high = number_range
    if any(isinstance(v, bool) or not isinstance(v, int) for v in (low, high)):
        raise ConfigurationError(f"{label}の範囲は整数で指定してください: {number_range!r}")
    if low >= high:
        raise ConfigurationError(f"{label}の範囲が不正です（最小 < 最大）: {number_range!r}")

    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ConfigurationError(f"{label}の選択数は1以上の整数で指定してください: {count!r}")

    pool_size = high - low + 1
    if count > pool_size:
        raise ConfigurationError(f"{label}の選択数({count})がプールサイズ({pool_size})を超えています")


@dataclass(frozen=True)
class GameConfig:
    """
    宝くじ1種類分の番号プール定義。

    Attributes:
        name: 表示名（アルゴリズムでは使用しない）
        main_range: 本数字の範囲 (最小, 最大)（両端を含む）
        main_count: 本数字の選択数
        special_range: 特別数字の範囲（特別数字がないゲームでは None）
        special_count: 特別数字の選択数（special_range と同時に指定）
    """

    name: str
    main_range: tuple[int, int]
    main_count: int
    special_range: Optional[tuple[int, int]] = None
    special_count: Optional[int] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        設定を検証する。

        Raises:
            ConfigurationError: 範囲・選択数が不正な場合
        """
        _validate_pool("本数字", self.main_range, self.main_count)

        if (self.special_range is None) != (self.special_count is None):
            raise ConfigurationError("特別数字の範囲と選択数は両方指定するか、両方省略してください")
        if self.special_range is not None:
            _validate_pool("特別数字", self.special_range, self.special_count)

    @property
    def has_special(self) -> bool:
        return self.special_range is not None

    @property
    def main_pool_size(self) -> int:
        return self.main_range[1] - self.main_range[0] + 1

    @property
    def special_pool_size(self) -> int:
        if self.special_range is None:
            return 0
        return self.special_range[1] - self.special_range[0] + 1


# ゲーム設定（キーは大文字）
LOTTERY_CONFIG: dict[str, GameConfig] = {
    "SSQ": GameConfig(
        name="双色球",
        main_range=(1, 33),
        main_count=6,
        special_range=(1, 16),
        special_count=1,
    ),
    "DLT": GameConfig(
        name="大乐透",
        main_range=(1, 35),
        main_count=5,
        special_range=(1, 12),
        special_count=2,
    ),
    "K8": GameConfig(
        name="快乐八",
        main_range=(1, 80),
        main_count=20,
    ),
}


def get_game_config(game_key: str) -> GameConfig:
    """
    ゲームキーから設定を取得する（大文字小文字は区別しない）。

    Raises:
        ConfigurationError: 不正なゲームキーが指定された場合
    """
    key = game_key.upper()
    if key not in LOTTERY_CONFIG:
        raise ConfigurationError(f"不正なゲームキー: '{game_key}' (有効: {', '.join(LOTTERY_CONFIG.keys())})")
    return LOTTERY_CONFIG[key]
