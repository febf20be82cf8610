"""
Multi-Exchange Snapshot Aggregation for CoinPulse v0.1

多交易所快照聚合器 - 整合 Binance, Coinbase, OKX 的數據

Features:
- 三個交易所並行獲取（各自內部再按幣種、端點並行）
- 以 Binance 記錄為基礎，補上 Coinbase / OKX 價格
- 任何欄位或交易所失敗都只以 "N/A" 呈現，不中斷整體流程

Version: v0.1
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from coinpulse.data.config import SnapshotConfig
from coinpulse.data.exchanges import (
    BinanceConnector,
    CoinbaseConnector,
    ExchangeConnector,
    OKXConnector,
)
from coinpulse.data.models import PLACEHOLDER, CoinRecord, ExchangeStats, MarketSnapshot
from coinpulse.data.symbol_mapper import normalize_symbols

logger = logging.getLogger(__name__)


class MultiExchangeAggregator:
    """多交易所快照聚合器

    Example:
        >>> aggregator = MultiExchangeAggregator(SnapshotConfig(symbols=['BTC', 'ETH']))
        >>> snapshot = aggregator.collect()
        >>> snapshot.get('BTC').okx_price
        '64250.1'
    """

    def __init__(
        self,
        config: Optional[SnapshotConfig] = None,
        connectors: Optional[Dict[str, ExchangeConnector]] = None,
    ):
        """初始化多交易所聚合器

        Args:
            config: 快照配置（默認：SnapshotConfig()）
            connectors: {exchange: connector}（默認依配置建立）
        """
        self.config = config or SnapshotConfig()

        if connectors is None:
            connectors = {name: self._create_connector(name) for name in self.config.exchanges}
        self.connectors = connectors

        logger.info(f"MultiExchangeAggregator initialized with exchanges: {list(self.connectors)}")

    def _create_connector(self, name: str) -> ExchangeConnector:
        """依名稱建立連接器"""
        if name == "binance":
            return BinanceConnector(
                timeout=self.config.request_timeout,
                max_workers=self.config.max_workers,
                kline_interval=self.config.kline_interval,
                long_short_period=self.config.long_short_period,
            )
        if name == "coinbase":
            return CoinbaseConnector(
                timeout=self.config.request_timeout, max_workers=self.config.max_workers
            )
        if name == "okx":
            return OKXConnector(
                timeout=self.config.request_timeout, max_workers=self.config.max_workers
            )
        raise ValueError(f"Unsupported exchange: {name}")

    def collect(self, symbols: Optional[List[str]] = None) -> MarketSnapshot:
        """收集所有幣種的跨交易所快照

        Args:
            symbols: 幣種列表（默認使用配置中的列表）

        Returns:
            MarketSnapshot，每個幣種都有一筆完整記錄
        """
        # 與配置相同：轉為基礎幣種、大寫並去重
        symbols = normalize_symbols(symbols) if symbols is not None else list(self.config.symbols)
        captured_at = datetime.now()

        data_dict = self._fetch_parallel(symbols)

        binance_records: Dict[str, CoinRecord] = data_dict.get("binance") or {}
        coinbase_prices: Dict[str, str] = data_dict.get("coinbase") or {}
        okx_prices: Dict[str, str] = data_dict.get("okx") or {}

        # 合併數據
        records: Dict[str, CoinRecord] = {}
        for symbol in symbols:
            base_record = binance_records.get(symbol) or CoinRecord(symbol=symbol)
            records[symbol] = replace(
                base_record,
                coinbase_price=coinbase_prices.get(symbol, PLACEHOLDER),
                okx_price=okx_prices.get(symbol, PLACEHOLDER),
            )

        stats = {
            name: ExchangeStats(
                requests=connector.request_count, failures=connector.failure_count
            )
            for name, connector in self.connectors.items()
        }

        snapshot = MarketSnapshot(
            symbols=symbols, records=records, captured_at=captured_at, stats=stats
        )
        logger.info(
            f"Collected snapshot for {len(symbols)} symbols "
            f"({snapshot.count_unavailable()}/{snapshot.total_cells()} cells unavailable)"
        )
        return snapshot

    def close(self) -> None:
        """關閉所有連接器的 HTTP session"""
        for connector in self.connectors.values():
            connector.close()

    def _fetch_parallel(self, symbols: List[str]) -> Dict[str, Any]:
        """並行獲取多交易所數據

        Args:
            symbols: 幣種列表

        Returns:
            {exchange: 結果} 字典；binance 為 {symbol: CoinRecord}，其他為 {symbol: price}
        """
        results: Dict[str, Any] = {}
        if not self.connectors:
            return results

        def fetch_single_exchange(exchange: str) -> tuple:
            connector = self.connectors[exchange]
            connector.reset_stats()
            try:
                if isinstance(connector, BinanceConnector):
                    data = connector.get_coin_records(symbols)
                else:
                    data = connector.get_spot_prices(symbols)
                return (exchange, data)

            except Exception as e:
                logger.warning(f"Failed to fetch snapshot data from {exchange}: {e}")
                return (exchange, {})

        # 並行執行
        with ThreadPoolExecutor(max_workers=len(self.connectors)) as executor:
            futures = {
                executor.submit(fetch_single_exchange, exchange): exchange
                for exchange in self.connectors
            }

            for future in as_completed(futures):
                exchange, data = future.result()
                results[exchange] = data

        return results


# 便捷函數
def collect_snapshot(
    symbols: Optional[List[str]] = None, config: Optional[SnapshotConfig] = None
) -> MarketSnapshot:
    """便捷函數：收集多交易所快照

    Example:
        >>> snapshot = collect_snapshot(['BTC', 'ETH'])
        >>> print(snapshot.get('ETH').rsi)
    """
    config = config or SnapshotConfig()
    if symbols is not None:
        config = config.with_symbols(symbols)

    aggregator = MultiExchangeAggregator(config)
    try:
        return aggregator.collect()
    finally:
        aggregator.close()
