"""
ロト予測ツール - マルコフ・モンテカルロ シミュレーション モジュール

直前の数字との距離で重み付けした逐次抽選を大量試行し、
出現頻度の高い数字を推奨番号として抽出する。

使用方法:
    python -m src.montecarlo [--game ssq|dlt|k8] [--trials N]
"""

from src.montecarlo.simulator import (
    MonteCarloSimulator,
    SimulationCancelledError,
    SimulationResult,
    generate_markov_set,
    merge_frequencies,
)
from src.montecarlo.analyzer import (
    select_top_n,
    analyze_number_frequency,
    print_report,
)
from src.montecarlo.exporter import export_csv, export_json
from src.montecarlo.visualizer import generate_report_html
from src.montecarlo.report import build_prompt, generate_ai_report

__all__ = [
    "MonteCarloSimulator",
    "SimulationCancelledError",
    "SimulationResult",
    "generate_markov_set",
    "merge_frequencies",
    "select_top_n",
    "analyze_number_frequency",
    "print_report",
    "export_csv",
    "export_json",
    "generate_report_html",
    "build_prompt",
    "generate_ai_report",
]
