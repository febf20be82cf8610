"""
Text Reporter v0.1

Generate plain-text reports for multi-exchange market snapshots.

- 快照報表 render_snapshot()
- ASCII 表格渲染 render_table()（box-drawing characters）
- 摘要：缺失欄位統計、交易所請求失敗數、RSI 超買超賣、多空傾向
"""

from typing import List, Optional

import pandas as pd

from coinpulse.data.models import PLACEHOLDER, MarketSnapshot
from coinpulse.indicators.rsi import OVERBOUGHT_LEVEL, OVERSOLD_LEVEL, classify_rsi

# (欄位, 標題, 對齊)
COLUMNS = [
    ("symbol", "Coin", "left"),
    ("binance_price", "Binance", "right"),
    ("coinbase_price", "Coinbase", "right"),
    ("okx_price", "OKX", "right"),
    ("funding_rate", "Funding Rate", "right"),
    ("price_change_24h", "24h Change", "right"),
    ("long_short_ratio", "Long/Short Ratio", "right"),
    ("rsi", "RSI", "right"),
]


def render_snapshot(snapshot: MarketSnapshot, show_summary: bool = True) -> str:
    """
    生成快照報表

    Args:
        snapshot: 多交易所快照
        show_summary: 是否附加摘要區塊

    Returns:
        str: 格式化的報表文本
    """
    table = render_table(snapshot.to_dataframe())
    width = max(len(table.split("\n", 1)[0]), 40)

    lines: List[str] = []
    lines.append("=" * width)
    lines.append("MARKET SNAPSHOT".center(width).rstrip())
    lines.append("=" * width)
    lines.append(f"Captured at: {snapshot.captured_at:%Y-%m-%d %H:%M:%S}")
    lines.append("")
    lines.append(table)
    lines.append("")

    if show_summary:
        lines.extend(_render_summary(snapshot))
        lines.append("")

    lines.append("=" * width)
    return "\n".join(lines)


def render_table(df: pd.DataFrame) -> str:
    """
    渲染 ASCII 表格

    使用 box-drawing characters: ┌ ┬ ┐ ├ ┼ ┤ └ ┴ ┘ │ ─
    欄寬依標題與內容自動調整，缺少的欄位以 N/A 顯示。
    """
    col_widths = {}
    for column, title, _ in COLUMNS:
        values = [str(v) for v in df[column]] if column in df.columns else [PLACEHOLDER]
        col_widths[column] = max([len(title)] + [len(v) for v in values])

    header = "┌" + "┬".join("─" * (col_widths[col] + 2) for col, _, _ in COLUMNS) + "┐"
    col_names = (
        "│ "
        + " │ ".join(_align(title, col_widths[col], align) for col, title, align in COLUMNS)
        + " │"
    )
    separator = "├" + "┼".join("─" * (col_widths[col] + 2) for col, _, _ in COLUMNS) + "┤"

    rows: List[str] = []
    for _, row in df.iterrows():
        row_str = (
            "│ "
            + " │ ".join(
                _align(str(row.get(col, PLACEHOLDER)), col_widths[col], align)
                for col, _, align in COLUMNS
            )
            + " │"
        )
        rows.append(row_str)

    footer = "└" + "┴".join("─" * (col_widths[col] + 2) for col, _, _ in COLUMNS) + "┘"
    table = [header, col_names, separator] + rows + [footer]
    return "\n".join(table)


def _render_summary(snapshot: MarketSnapshot) -> List[str]:
    """生成摘要區塊"""
    lines: List[str] = []
    records = snapshot.iter_records()

    lines.append("SUMMARY")
    lines.append(f"  Symbols           : {len(snapshot)}")
    lines.append(
        f"  Unavailable Cells : {snapshot.count_unavailable()} / {snapshot.total_cells()}"
    )
    for name, stats in snapshot.stats.items():
        lines.append(f"  {name.title():<18}: {stats.failures}/{stats.requests} requests failed")
    lines.append("")

    overbought: List[str] = []
    oversold: List[str] = []
    for record in records:
        value = _to_float(record.rsi)
        if value is None:
            continue
        zone = classify_rsi(value)
        if zone == "overbought":
            overbought.append(record.symbol)
        elif zone == "oversold":
            oversold.append(record.symbol)

    long_heavy: List[str] = []
    short_heavy: List[str] = []
    for record in records:
        ratio = _to_float(record.long_short_ratio)
        # 空方為 0 時比值記為 0，不列入傾向
        if ratio is None or ratio == 0:
            continue
        if ratio > 1:
            long_heavy.append(record.symbol)
        elif ratio < 1:
            short_heavy.append(record.symbol)

    lines.append("SIGNALS")
    lines.append(f"  RSI Overbought    : {_fmt_symbols(overbought)}")
    lines.append(f"  RSI Oversold      : {_fmt_symbols(oversold)}")
    lines.append(f"  Long Heavy        : {_fmt_symbols(long_heavy)}")
    lines.append(f"  Short Heavy       : {_fmt_symbols(short_heavy)}")
    lines.append("")

    lines.append("NOTES")
    lines.append(
        f"  RSI ranges 0-100: below {OVERSOLD_LEVEL:.0f} is oversold, "
        f"above {OVERBOUGHT_LEVEL:.0f} is overbought."
    )
    lines.append("  Long/Short Ratio > 1 means more long accounts, < 1 more short accounts.")

    return lines


def _align(text: str, width: int, align: str) -> str:
    if align == "left":
        return text.ljust(width)
    return text.rjust(width)


def _fmt_symbols(symbols: List[str]) -> str:
    if not symbols:
        return "-"
    return ", ".join(symbols)


def _to_float(text: str) -> Optional[float]:
    """解析報表文字中的數值，佔位符或無效值回傳 None"""
    if text is None or text == PLACEHOLDER:
        return None
    try:
        return float(text.rstrip("%"))
    except ValueError:
        return None
