"""
ロト予測ツール - インタラクティブ可視化モジュール

plotly を使用してシミュレーション結果を
インタラクティブなHTMLグラフとして出力する。
"""

import html
import os
from datetime import datetime
from typing import Optional

import plotly.graph_objects as go

from src.common import GameConfig
from src.montecarlo.analyzer import expected_count
from src.montecarlo.simulator import SimulationResult

# ── カラーパレット ──
BG_COLOR = "#0d1117"
CARD_COLOR = "#161b22"
TEXT_COLOR = "#e6edf3"
ACCENT_COLOR = "#58a6ff"
GRID_COLOR = "#30363d"
MUTED_COLOR = "#475569"
SPECIAL_COLOR = "#a371f7"


def _ensure_output_dir(output_dir: str) -> None:
    """出力ディレクトリが存在しない場合は作成する"""
    os.makedirs(output_dir, exist_ok=True)


def _layout(fig: go.Figure, title: str, height: int = 450) -> None:
    """共通のダークテーマを適用する"""
    fig.update_layout(
        title=dict(
            text=title,
            font=dict(size=20, color=TEXT_COLOR),
            x=0.5,
        ),
        plot_bgcolor=CARD_COLOR,
        paper_bgcolor=BG_COLOR,
        font=dict(color=TEXT_COLOR),
        hoverlabel=dict(
            bgcolor=CARD_COLOR,
            font_size=13,
            font_color=TEXT_COLOR,
        ),
        margin=dict(l=60, r=30, t=60, b=40),
        height=height,
    )


def build_frequency_figure(
    frequencies: dict[int, int],
    recommended: list[int],
    total_trials: int,
    pick_count: int,
    title: str,
    highlight_color: str = ACCENT_COLOR,
) -> go.Figure:
    """
    数字別出現頻度の棒グラフを作成する。推奨番号の棒は強調色で描画する。

    Args:
        frequencies: {数字: 出現回数}
        recommended: 推奨番号
        total_trials: 試行回数
        pick_count: 1回の抽選で選ぶ個数（期待値ラインの計算に使用）
        title: グラフタイトル
        highlight_color: 推奨番号の棒の色

    Returns:
        plotly の Figure
    """
    numbers = sorted(frequencies)
    counts = [frequencies[n] for n in numbers]
    pcts = [(c / total_trials) * 100 for c in counts]
    bar_colors = [highlight_color if n in recommended else MUTED_COLOR for n in numbers]

    expected = expected_count(total_trials, pick_count, len(numbers))

    fig = go.Figure()

    # 期待値ライン
    fig.add_hline(
        y=expected,
        line_dash="dash",
        line_color="#8b949e",
        line_width=1,
        annotation_text=f"期待値 ({expected:,.0f})",
        annotation_position="top right",
        annotation_font_color="#8b949e",
    )

    fig.add_trace(
        go.Bar(
            x=numbers,
            y=counts,
            marker_color=bar_colors,
            marker_line_width=0,
            hovertemplate=("<b>数字 %{x}</b><br>出現回数: %{y:,}<br>割合: %{customdata:.2f}%<extra></extra>"),
            customdata=pcts,
        )
    )

    _layout(fig, title)
    fig.update_xaxes(title="数字", tickmode="linear", dtick=1, gridcolor=GRID_COLOR, color=TEXT_COLOR)
    fig.update_yaxes(title="出現回数", gridcolor=GRID_COLOR, color=TEXT_COLOR)

    return fig


def build_heatmap_figure(frequencies: dict[int, int], title: str, cols_per_row: int = 10) -> go.Figure:
    """数字を10個ずつの行に並べた出現頻度ヒートマップを作成する"""
    numbers = sorted(frequencies)
    low, high = numbers[0], numbers[-1]

    heatmap_rows = []
    heatmap_labels = []
    row_labels = []

    for start in range(low, high + 1, cols_per_row):
        row_data = []
        row_text = []
        for n in range(start, start + cols_per_row):
            if n <= high:
                row_data.append(frequencies[n])
                row_text.append(str(n))
            else:
                row_data.append(None)
                row_text.append("")
        heatmap_rows.append(row_data)
        heatmap_labels.append(row_text)
        row_labels.append(f"{start}-{min(start + cols_per_row - 1, high)}")

    fig = go.Figure()
    fig.add_trace(
        go.Heatmap(
            z=heatmap_rows,
            text=heatmap_labels,
            texttemplate="%{text}",
            textfont=dict(size=14, color="white"),
            colorscale=[
                [0, "#1a1a2e"],
                [0.25, "#16213e"],
                [0.5, "#0f3460"],
                [0.75, "#e94560"],
                [1, "#ff6b6b"],
            ],
            showscale=True,
            colorbar=dict(
                title=dict(text="出現回数", font=dict(color=TEXT_COLOR)),
                tickfont=dict(color=TEXT_COLOR),
            ),
            hovertemplate=("数字: %{text}<br>出現回数: %{z:,}<extra></extra>"),
            ygap=3,
            xgap=3,
        )
    )

    _layout(fig, title, height=max(200, len(row_labels) * 60 + 100))
    fig.update_layout(plot_bgcolor=BG_COLOR)
    fig.update_xaxes(showticklabels=False, showgrid=False)
    fig.update_yaxes(
        ticktext=row_labels,
        tickvals=list(range(len(row_labels))),
        color=TEXT_COLOR,
        showgrid=False,
    )

    return fig


def generate_report_html(
    result: SimulationResult,
    config: GameConfig,
    game_key: str,
    output_dir: str = "output",
    filepath: Optional[str] = None,
    ai_report: Optional[str] = None,
) -> str:
    """
    シミュレーション結果のインタラクティブHTMLレポートを生成する。

    含まれるグラフ:
    1. 本数字の出現頻度（棒グラフ、推奨番号を強調）
    2. 本数字の出現頻度（ヒートマップ）
    3. 特別数字の出現頻度（特別数字があるゲームのみ）

    Args:
        result: シミュレーション結果
        config: 対象ゲームの GameConfig
        game_key: ゲームキー
        output_dir: 出力ディレクトリ
        filepath: 出力ファイルパス（省略時は自動生成）
        ai_report: AI分析レポート（Markdownテキスト、省略可）

    Returns:
        保存したHTMLファイルのパス
    """
    if filepath is None:
        _ensure_output_dir(output_dir)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(output_dir, f"mc_{game_key.lower()}_{timestamp}.html")

    game_name = config.name
    main_low, main_high = config.main_range

    fig_main = build_frequency_figure(
        result.frequencies,
        result.recommended,
        result.total_trials,
        config.main_count,
        f"🎰 {game_name} 本数字 出現頻度",
    )
    fig_heat = build_heatmap_figure(result.frequencies, f"🔥 {game_name} 出現頻度ヒートマップ")

    sections = [
        fig_main.to_html(full_html=False, include_plotlyjs=False),
        fig_heat.to_html(full_html=False, include_plotlyjs=False),
    ]

    if config.has_special and result.recommended_special is not None:
        fig_special = build_frequency_figure(
            result.special_frequencies,
            result.recommended_special,
            result.total_trials,
            config.special_count,
            f"🔵 {game_name} 特別数字 出現頻度",
            highlight_color=SPECIAL_COLOR,
        )
        sections.append(fig_special.to_html(full_html=False, include_plotlyjs=False))

    balls = "".join(f'<span class="ball">{n:02d}</span>' for n in result.recommended)
    if result.recommended_special is not None:
        balls += "".join(f'<span class="ball special">{n:02d}</span>' for n in result.recommended_special)

    charts_html = "\n".join(f'    <div class="chart-section">\n        {s}\n    </div>' for s in sections)

    ai_html = ""
    if ai_report:
        ai_html = f'    <div class="chart-section"><h2>AI 分析レポート</h2><pre class="ai">{html.escape(ai_report)}</pre></div>'

    timestamp_str = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    html_content = f"""<!DOCTYPE html>
<html lang="ja">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{game_name} マルコフ・モンテカルロ シミュレーション結果</title>
    <script src="https://cdn.plot.ly/plotly-3.0.1.min.js"></script>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            background: {BG_COLOR};
            color: {TEXT_COLOR};
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
            padding: 20px;
        }}
        .header {{
            text-align: center;
            padding: 30px 0;
            border-bottom: 1px solid {GRID_COLOR};
            margin-bottom: 30px;
        }}
        .header h1 {{ font-size: 2em; margin-bottom: 10px; }}
        .header .meta {{ color: #8b949e; font-size: 0.9em; }}
        .stats {{
            display: flex;
            justify-content: center;
            gap: 40px;
            margin: 20px 0;
            flex-wrap: wrap;
        }}
        .stat-card {{
            background: {CARD_COLOR};
            border: 1px solid {GRID_COLOR};
            border-radius: 8px;
            padding: 15px 25px;
            text-align: center;
        }}
        .stat-card .label {{ color: #8b949e; font-size: 0.85em; margin-bottom: 5px; }}
        .stat-card .value {{ font-size: 1.5em; font-weight: bold; color: {ACCENT_COLOR}; }}
        .balls {{ text-align: center; margin: 25px 0; }}
        .ball {{
            display: inline-block;
            width: 48px;
            height: 48px;
            line-height: 48px;
            border-radius: 50%;
            margin: 4px;
            background: #e5484d;
            font-weight: bold;
        }}
        .ball.special {{ background: #3b82f6; }}
        .chart-section {{
            background: {CARD_COLOR};
            border: 1px solid {GRID_COLOR};
            border-radius: 12px;
            padding: 20px;
            margin-bottom: 25px;
        }}
        .ai {{ white-space: pre-wrap; font-family: inherit; line-height: 1.6; margin-top: 10px; }}
        footer {{
            text-align: center;
            padding: 20px;
            color: #484f58;
            font-size: 0.8em;
            border-top: 1px solid {GRID_COLOR};
            margin-top: 30px;
        }}
    </style>
</head>
<body>
    <div class="header">
        <h1>🎰 {game_name} マルコフ・モンテカルロ シミュレーション</h1>
        <p class="meta">実行日時: {timestamp_str}</p>
    </div>

    <div class="stats">
        <div class="stat-card">
            <div class="label">ゲーム</div>
            <div class="value">{game_name}</div>
        </div>
        <div class="stat-card">
            <div class="label">本数字</div>
            <div class="value">{main_low} 〜 {main_high} から {config.main_count}個</div>
        </div>
        <div class="stat-card">
            <div class="label">試行回数</div>
            <div class="value">{result.total_trials:,}</div>
        </div>
        <div class="stat-card">
            <div class="label">実行時間</div>
            <div class="value">{result.time_taken:,} ms</div>
        </div>
    </div>

    <div class="balls">{balls}</div>

{charts_html}

{ai_html}

    <footer>
        Loto Predictor - マルコフ・モンテカルロ シミュレーション | Generated by loto-predictor
    </footer>
</body>
</html>"""

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html_content)

    return filepath
