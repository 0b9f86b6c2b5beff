"""
ロト予測ツール - AI分析レポート生成モジュール

シミュレーション結果を Gemini に渡し、解説文（Markdown）を生成する。
生成に失敗してもシミュレーション結果には影響せず、固定のメッセージを返す。

APIキーは環境変数 GEMINI_API_KEY（または GOOGLE_API_KEY）から読み込まれる。
"""

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from src.common import GameConfig
from src.montecarlo.simulator import SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.7

FALLBACK_MESSAGE = "无法获取AI分析报告，请稍后再试。"


def build_prompt(result: SimulationResult, config: GameConfig) -> str:
    """
    AIに渡すプロンプトを組み立てる。

    ゲームルール・推奨番号・試行回数・処理時間を埋め込み、
    統計的な解釈、ラッキー分析、手法の要約を中国語のMarkdownで求める。
    """
    main_low, main_high = config.main_range
    lines = [
        "You are a professional lottery analyst and statistician.",
        f"I have run {result.total_trials:,} Monte Carlo simulations using a Markov Chain model "
        f'for the "{config.name}" lottery.',
        "",
        "Game Rules:",
        f"- Main Pool: {main_low}-{main_high} (Pick {config.main_count})",
    ]
    if config.has_special:
        special_low, special_high = config.special_range
        lines.append(f"- Special Pool: {special_low}-{special_high} (Pick {config.special_count})")

    lines += [
        "",
        "Simulation Results:",
        f"- Recommended Main Numbers: {', '.join(str(n) for n in result.recommended)}",
    ]
    if result.recommended_special is not None:
        lines.append(f"- Recommended Special Numbers: {', '.join(str(n) for n in result.recommended_special)}")
    lines += [
        f"- Total Trials: {result.total_trials:,}",
        f"- Processing Time: {result.time_taken}ms",
        "",
        "Please provide:",
        "1. A statistical interpretation of these numbers (e.g., dispersion, odd/even ratio).",
        '2. A "Lucky Analysis" in a professional but encouraging tone.',
        "3. A brief summary of why Monte Carlo/Markov methods are useful for this kind of pattern finding.",
        "",
        "Keep the response concise and formatted in Markdown. Use Chinese.",
    ]
    return "\n".join(lines)


def generate_ai_report(
    result: SimulationResult,
    config: GameConfig,
    client: Optional[Any] = None,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
) -> str:
    """
    シミュレーション結果のAI分析レポートを生成する。

    Args:
        result: シミュレーション結果（変更しない）
        config: 対象ゲームの GameConfig
        client: genai.Client 互換のクライアント（省略時は環境変数から生成）
        model: 使用するモデル名
        temperature: 生成時の temperature

    Returns:
        レポート本文。取得に失敗した場合は FALLBACK_MESSAGE
    """
    prompt = build_prompt(result, config)

    try:
        if client is None:
            client = genai.Client()
        response = client.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(temperature=temperature),
        )
        text = response.text
    except Exception:
        logger.exception("AI分析レポートの取得に失敗しました (model=%s)", model)
        return FALLBACK_MESSAGE

    if not text:
        logger.warning("AI分析レポートが空でした (model=%s)", model)
        return FALLBACK_MESSAGE

    return text
