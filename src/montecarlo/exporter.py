"""
ロト予測ツール - シミュレーション結果エクスポーター

シミュレーション結果をCSV/JSON形式でファイルに保存する。
"""

import csv
import json
import os
from datetime import datetime
from typing import Optional

from src.common import GameConfig
from src.montecarlo.analyzer import analyze_number_frequency
from src.montecarlo.simulator import SimulationResult


def _ensure_output_dir(output_dir: str) -> None:
    """出力ディレクトリが存在しない場合は作成する"""
    os.makedirs(output_dir, exist_ok=True)


def _generate_filename(game_key: str, ext: str) -> str:
    """タイムスタンプ付きのファイル名を生成する"""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"mc_{game_key.lower()}_{timestamp}.{ext}"


def _frequency_rows(frequencies: dict[int, int], total: int) -> list[dict]:
    """出現回数テーブルを降順の行リストに変換する"""
    return [
        {
            "number": num,
            "count": count,
            "percentage": round((count / total) * 100, 2),
        }
        for num, count in analyze_number_frequency(frequencies)
    ]


def export_csv(
    result: SimulationResult,
    config: GameConfig,
    game_key: str,
    output_dir: str = "output",
    filepath: Optional[str] = None,
) -> str:
    """
    シミュレーション結果をCSVファイルに保存する。

    出力ファイルは以下のセクションを含む:
    1. メタデータ
    2. 推奨番号
    3. 本数字の出現頻度
    4. 特別数字の出現頻度（特別数字があるゲームのみ）

    Args:
        result: シミュレーション結果
        config: 対象ゲームの GameConfig
        game_key: ゲームキー
        output_dir: 出力ディレクトリ
        filepath: 出力ファイルパス（省略時は自動生成）

    Returns:
        保存したファイルのパス
    """
    if filepath is None:
        _ensure_output_dir(output_dir)
        filepath = os.path.join(output_dir, _generate_filename(game_key, "csv"))

    total = result.total_trials

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        # ── メタデータ ──
        writer.writerow(["# メタデータ"])
        writer.writerow(["ゲーム", config.name])
        writer.writerow(["試行回数", total])
        writer.writerow(["実行時間(ms)", result.time_taken])
        writer.writerow(["実行日時", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
        writer.writerow([])

        # ── 推奨番号 ──
        writer.writerow(["# 推奨番号"])
        writer.writerow(["本数字"] + list(result.recommended))
        if result.recommended_special is not None:
            writer.writerow(["特別数字"] + list(result.recommended_special))
        writer.writerow([])

        # ── 個別数字の出現頻度 ──
        sections = [("# 本数字の出現頻度", result.frequencies)]
        if result.special_frequencies:
            sections.append(("# 特別数字の出現頻度", result.special_frequencies))

        for title, frequencies in sections:
            writer.writerow([title])
            writer.writerow(["数字", "出現回数", "割合(%)"])
            for row in _frequency_rows(frequencies, total):
                writer.writerow([row["number"], row["count"], f"{row['percentage']:.2f}"])
            writer.writerow([])

    return filepath


def export_json(
    result: SimulationResult,
    config: GameConfig,
    game_key: str,
    output_dir: str = "output",
    filepath: Optional[str] = None,
) -> str:
    """
    シミュレーション結果をJSONファイルに保存する。

    Args:
        result: シミュレーション結果
        config: 対象ゲームの GameConfig
        game_key: ゲームキー
        output_dir: 出力ディレクトリ
        filepath: 出力ファイルパス（省略時は自動生成）

    Returns:
        保存したファイルのパス
    """
    if filepath is None:
        _ensure_output_dir(output_dir)
        filepath = os.path.join(output_dir, _generate_filename(game_key, "json"))

    total = result.total_trials

    data = {
        "metadata": {
            "game": config.name,
            "game_key": game_key.upper(),
            "main_range": list(config.main_range),
            "main_count": config.main_count,
            "special_range": list(config.special_range) if config.has_special else None,
            "special_count": config.special_count,
            "trials": total,
            "time_taken_ms": result.time_taken,
            "timestamp": datetime.now().isoformat(),
        },
        "recommended": list(result.recommended),
        "recommended_special": (
            list(result.recommended_special) if result.recommended_special is not None else None
        ),
        "number_frequency": _frequency_rows(result.frequencies, total),
        "special_number_frequency": _frequency_rows(result.special_frequencies, total),
    }

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return filepath
