"""
Reports for CoinPulse

純文字報表
"""

from .text_reporter import render_snapshot, render_table

__all__ = ["render_snapshot", "render_table"]
