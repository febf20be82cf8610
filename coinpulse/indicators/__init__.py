"""
Technical Indicators for CoinPulse

技術指標模組
"""

from .rsi import OVERBOUGHT_LEVEL, OVERSOLD_LEVEL, RSI_PERIOD, calculate_rsi, classify_rsi

__all__ = [
    "RSI_PERIOD",
    "OVERBOUGHT_LEVEL",
    "OVERSOLD_LEVEL",
    "calculate_rsi",
    "classify_rsi",
]
