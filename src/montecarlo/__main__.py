"""
ロト予測ツール - マルコフ・モンテカルロ シミュレーション CLIエントリーポイント

使用方法:
    python -m src.montecarlo [オプション]

実行例:
    # 双色球（デフォルト、100万回）
    python -m src.montecarlo

    # 大乐透、試行10万回、乱数シード固定
    python -m src.montecarlo --game dlt --trials 100000 --seed 42

    # 快乐八、HTMLレポートとAI分析を出力
    python -m src.montecarlo --game k8 --html --ai-report
"""

import argparse
import asyncio
import logging
import random
import sys

from src.common import LOTTERY_CONFIG, get_game_config
from src.montecarlo.analyzer import print_report
from src.montecarlo.exporter import export_csv, export_json
from src.montecarlo.report import generate_ai_report
from src.montecarlo.simulator import DEFAULT_CHUNK_SIZE, DEFAULT_TRIALS, MonteCarloSimulator
from src.montecarlo.visualizer import generate_report_html


def _parse_args() -> argparse.Namespace:
    """コマンドライン引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="python -m src.montecarlo",
        description="宝くじ番号 マルコフ・モンテカルロ シミュレーション",
    )
    parser.add_argument(
        "--game",
        type=str,
        default="ssq",
        choices=[key.lower() for key in LOTTERY_CONFIG],
        help="対象ゲーム（デフォルト: ssq）",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=DEFAULT_TRIALS,
        help=f"シミュレーション試行回数（デフォルト: {DEFAULT_TRIALS:,}）",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"1チャンクあたりの試行回数（デフォルト: {DEFAULT_CHUNK_SIZE:,}）",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="乱数シード（省略時: 非決定的）",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="表示する頻出・低頻出数字の件数（デフォルト: 10）",
    )
    parser.add_argument("--csv", action="store_true", help="結果をCSVで保存する")
    parser.add_argument("--json", action="store_true", help="結果をJSONで保存する")
    parser.add_argument("--html", action="store_true", help="インタラクティブHTMLレポートを保存する")
    parser.add_argument("--ai-report", action="store_true", help="Gemini によるAI分析レポートを取得する")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="output",
        help="出力ディレクトリ（デフォルト: output）",
    )
    return parser.parse_args()


def _progress_printer(progress: float) -> None:
    """シミュレーション進行状況をコンソールに表示"""
    print(f"\r  進行中... {progress:5.1f}%", end="", flush=True)


def main() -> None:
    """メイン処理"""
    args = _parse_args()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    game_key = args.game.upper()
    config = get_game_config(game_key)

    print(f"\n🎲 {config.name} マルコフ・モンテカルロ シミュレーション")
    print(f"   本数字: {config.main_range[0]}〜{config.main_range[1]} から {config.main_count}個")
    if config.has_special:
        print(f"   特別数字: {config.special_range[0]}〜{config.special_range[1]} から {config.special_count}個")
    print(f"   試行回数: {args.trials:,}")

    # 1. シミュレーションの準備
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        simulator = MonteCarloSimulator(
            config,
            trials=args.trials,
            chunk_size=args.chunk_size,
            rng=rng,
        )
    except ValueError as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)

    # 2. シミュレーションの実行
    print(f"\n🎰 シミュレーション実行中...")
    result = asyncio.run(simulator.run(progress_callback=_progress_printer))
    print()  # 改行（進捗表示の後）
    print(f"   完了！ 実行時間: {result.time_taken / 1000:.2f}秒")

    # 3. 結果の表示
    print_report(result, config, top_n=args.top)

    # 4. AI分析レポート
    ai_report = None
    if args.ai_report:
        print(f"\n🤖 AI分析レポートを取得中...")
        ai_report = generate_ai_report(result, config)
        print()
        print(ai_report)

    # 5. ファイル出力
    if args.csv:
        path = export_csv(result, config, game_key, output_dir=args.output_dir)
        print(f"\n💾 CSV: {path}")
    if args.json:
        path = export_json(result, config, game_key, output_dir=args.output_dir)
        print(f"💾 JSON: {path}")
    if args.html:
        path = generate_report_html(result, config, game_key, output_dir=args.output_dir, ai_report=ai_report)
        print(f"📊 HTML: {path}")


if __name__ == "__main__":
    main()
