"""
Snapshot Data Models for CoinPulse v0.1

快照數據模型 - 單一幣種的跨交易所記錄與整體快照

CoinRecord 的每個欄位皆為文字，取得失敗時保留佔位符 "N/A"。

Version: v0.1
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, Iterator, List, Optional

import pandas as pd

PLACEHOLDER = "N/A"

# 報表欄位順序
RECORD_FIELDS = [
    "binance_price",
    "coinbase_price",
    "okx_price",
    "funding_rate",
    "price_change_24h",
    "long_short_ratio",
    "rsi",
]


@dataclass
class CoinRecord:
    """單一幣種的聚合記錄

    每個欄位獨立，任一欄位失敗不影響其他欄位。
    """

    symbol: str
    binance_price: str = PLACEHOLDER
    coinbase_price: str = PLACEHOLDER
    okx_price: str = PLACEHOLDER
    funding_rate: str = PLACEHOLDER
    price_change_24h: str = PLACEHOLDER
    long_short_ratio: str = PLACEHOLDER
    rsi: str = PLACEHOLDER

    def unavailable_fields(self) -> List[str]:
        """回傳仍為佔位符的欄位名稱"""
        return [name for name in RECORD_FIELDS if getattr(self, name) == PLACEHOLDER]

    def to_dict(self) -> dict:
        """轉換為字典"""
        return asdict(self)


@dataclass
class ExchangeStats:
    """單一交易所本次抓取的請求統計"""

    requests: int = 0
    failures: int = 0

    @property
    def success_rate(self) -> Optional[float]:
        if self.requests == 0:
            return None
        return (self.requests - self.failures) / self.requests


@dataclass
class MarketSnapshot:
    """多交易所市場快照

    由 MultiExchangeAggregator 建立，交給報表後僅供讀取。
    """

    symbols: List[str]
    records: Dict[str, CoinRecord]
    captured_at: datetime = field(default_factory=datetime.now)
    stats: Dict[str, ExchangeStats] = field(default_factory=dict)

    def __iter__(self) -> Iterator[CoinRecord]:
        return iter(self.iter_records())

    def __len__(self) -> int:
        return len(self.symbols)

    def iter_records(self) -> List[CoinRecord]:
        """按幣種順序回傳記錄"""
        return [self.records[symbol] for symbol in self.symbols]

    def get(self, symbol: str) -> Optional[CoinRecord]:
        return self.records.get(symbol)

    def count_unavailable(self) -> int:
        """統計佔位符欄位總數"""
        return sum(len(record.unavailable_fields()) for record in self.iter_records())

    def total_cells(self) -> int:
        return len(self.symbols) * len(RECORD_FIELDS)

    def to_dataframe(self) -> pd.DataFrame:
        """轉換為 DataFrame（一列一幣種，保持幣種順序）"""
        rows = [record.to_dict() for record in self.iter_records()]
        return pd.DataFrame(rows, columns=["symbol"] + RECORD_FIELDS)
