"""
ロト予測ツール - 共通モジュール

ゲーム設定（番号プールの範囲・選択数）と抽選の重み付けポリシーを提供する。
"""

from src.common.config import (
    ConfigurationError,
    GameConfig,
    LOTTERY_CONFIG,
    get_game_config,
)

__all__ = [
    "ConfigurationError",
    "GameConfig",
    "LOTTERY_CONFIG",
    "get_game_config",
]
