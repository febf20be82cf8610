"""
CoinPulse Data Layer

數據層 - 配置、模型、交易所連接器與多交易所聚合
"""

from .config import ConfigError, SnapshotConfig, load_config
from .models import PLACEHOLDER, CoinRecord, ExchangeStats, MarketSnapshot

__all__ = [
    "ConfigError",
    "SnapshotConfig",
    "load_config",
    "PLACEHOLDER",
    "CoinRecord",
    "ExchangeStats",
    "MarketSnapshot",
]
