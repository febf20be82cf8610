"""
Multi-Exchange Snapshot Aggregation for CoinPulse

多交易所快照聚合 - 整合多個交易所的數據源
"""

from .multi_exchange import MultiExchangeAggregator, collect_snapshot

__all__ = [
    "MultiExchangeAggregator",
    "collect_snapshot",
]
