"""
RSI Indicator for CoinPulse v0.1

相對強弱指標 (RSI) - 由收盤價序列計算

計算方式（固定除數）:
- 相鄰收盤價差 >= 0 計為上漲，< 0 計為下跌（取絕對值）
- 平均漲幅 = 漲幅總和 / period，平均跌幅 = 跌幅總和 / period
- 14 根 K 線只有 13 個差值，但除數固定為 period (14)
- 平均跌幅為 0 時 RSI = 100

RSI 介於 0 到 100 之間，通常 30 以下視為超賣，70 以上視為超買。

Version: v0.1
"""

from typing import Sequence

import numpy as np

RSI_PERIOD = 14

OVERBOUGHT_LEVEL = 70.0
OVERSOLD_LEVEL = 30.0


def calculate_rsi(closes: Sequence[float], period: int = RSI_PERIOD) -> float:
    """計算 RSI

    呼叫端負責確認收盤價數量（Binance 連接器僅在剛好 14 根時呼叫）。

    Args:
        closes: 收盤價序列（由舊到新）
        period: 平均值除數

    Returns:
        float: RSI 值 (0 ~ 100)

    Example:
        >>> calculate_rsi([float(i) for i in range(1, 15)])
        100.0
    """
    prices = np.asarray(closes, dtype=float)
    deltas = np.diff(prices)

    gains = np.where(deltas >= 0, deltas, 0.0)
    losses = np.where(deltas >= 0, 0.0, -deltas)

    average_gain = gains.sum() / period
    average_loss = losses.sum() / period

    if average_loss == 0:
        return 100.0

    rs = average_gain / average_loss
    return float(100 - (100 / (1 + rs)))


def classify_rsi(value: float) -> str:
    """RSI 區間分類：overbought / oversold / neutral"""
    if value >= OVERBOUGHT_LEVEL:
        return "overbought"
    if value <= OVERSOLD_LEVEL:
        return "oversold"
    return "neutral"
