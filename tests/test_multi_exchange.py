"""
Multi-Exchange Aggregator 測試

測試跨交易所合併、失敗隔離與請求統計
"""

from unittest.mock import MagicMock, patch

import pandas as pd
import pytest
import requests

from coinpulse.data.aggregation.multi_exchange import MultiExchangeAggregator, collect_snapshot
from coinpulse.data.config import SnapshotConfig
from coinpulse.data.exchanges import BinanceConnector, CoinbaseConnector, OKXConnector
from coinpulse.data.models import PLACEHOLDER, RECORD_FIELDS, CoinRecord


def _binance_record(symbol, price):
    return CoinRecord(
        symbol=symbol,
        binance_price=price,
        funding_rate="0.0100%",
        price_change_24h="1.2%",
        long_short_ratio="1.25",
        rsi="61.20",
    )


def _mock_connector(spec, name, requests_made=0, failures=0):
    connector = MagicMock(spec=spec)
    connector.name = name
    connector.request_count = requests_made
    connector.failure_count = failures
    return connector


@pytest.fixture
def connectors():
    """創建 mock 連接器"""
    binance = _mock_connector(BinanceConnector, "binance", requests_made=10)
    binance.get_coin_records.return_value = {
        "BTC": _binance_record("BTC", "50000.00"),
        "ETH": _binance_record("ETH", "3000.00"),
    }

    coinbase = _mock_connector(CoinbaseConnector, "coinbase", requests_made=2, failures=1)
    coinbase.get_spot_prices.return_value = {"BTC": "50010.12"}

    okx = _mock_connector(OKXConnector, "okx", requests_made=2)
    okx.get_spot_prices.return_value = {"BTC": "49995.5", "ETH": "2999.8"}

    return {"binance": binance, "coinbase": coinbase, "okx": okx}


@pytest.fixture
def config():
    return SnapshotConfig(symbols=["BTC", "ETH"])


class TestMultiExchangeAggregator:
    """MultiExchangeAggregator 測試類"""

    def test_merge_prices(self, config, connectors):
        """測試以 Binance 記錄為基礎合併其他交易所價格"""
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        snapshot = aggregator.collect()

        btc = snapshot.get("BTC")
        assert btc.binance_price == "50000.00"
        assert btc.coinbase_price == "50010.12"
        assert btc.okx_price == "49995.5"
        assert btc.funding_rate == "0.0100%"
        assert btc.rsi == "61.20"

    def test_missing_coinbase_symbol(self, config, connectors):
        """測試 Coinbase 缺少的幣種以 N/A 呈現，其他欄位不受影響"""
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        eth = aggregator.collect().get("ETH")

        assert eth.coinbase_price == PLACEHOLDER
        assert eth.okx_price == "2999.8"
        assert eth.binance_price == "3000.00"
        assert eth.long_short_ratio == "1.25"

    def test_binance_exception(self, config, connectors):
        """測試 Binance 拋出例外時仍產生每個幣種的記錄"""
        connectors["binance"].get_coin_records.side_effect = RuntimeError("boom")
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        snapshot = aggregator.collect()

        btc = snapshot.get("BTC")
        assert btc.binance_price == PLACEHOLDER
        assert btc.rsi == PLACEHOLDER
        assert btc.coinbase_price == "50010.12"
        assert btc.okx_price == "49995.5"
        assert len(snapshot) == 2

    def test_missing_binance_record(self, config, connectors):
        """測試 Binance 結果缺少某幣種"""
        connectors["binance"].get_coin_records.return_value = {
            "BTC": _binance_record("BTC", "50000.00")
        }
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        eth = aggregator.collect().get("ETH")

        assert eth.symbol == "ETH"
        assert eth.binance_price == PLACEHOLDER
        assert eth.okx_price == "2999.8"

    def test_symbol_order_and_count(self, connectors):
        """測試記錄數量與順序依照幣種列表"""
        config = SnapshotConfig(symbols=["ETH", "SOL", "BTC"])
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        snapshot = aggregator.collect()

        assert [record.symbol for record in snapshot] == ["ETH", "SOL", "BTC"]
        sol = snapshot.get("SOL")
        assert sol.unavailable_fields() == RECORD_FIELDS

    def test_collect_with_explicit_symbols(self, config, connectors):
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        snapshot = aggregator.collect(["BTC"])

        assert snapshot.symbols == ["BTC"]
        connectors["okx"].get_spot_prices.assert_called_once_with(["BTC"])

    def test_collect_normalizes_symbols(self, config, connectors):
        """測試明確傳入的幣種同樣轉為大寫並去重"""
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        snapshot = aggregator.collect(["btc", "BTC", "BTCUSDT", "eth"])

        assert snapshot.symbols == ["BTC", "ETH"]
        assert len(snapshot) == 2
        assert snapshot.get("BTC").binance_price == "50000.00"
        connectors["binance"].get_coin_records.assert_called_once_with(["BTC", "ETH"])

    def test_uses_coin_records_for_binance(self, config, connectors):
        """測試 Binance 取完整記錄，其他交易所只取價格"""
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        aggregator.collect()

        connectors["binance"].get_coin_records.assert_called_once_with(["BTC", "ETH"])
        connectors["binance"].get_spot_prices.assert_not_called()
        connectors["coinbase"].get_spot_prices.assert_called_once_with(["BTC", "ETH"])

    def test_stats(self, config, connectors):
        """測試每個交易所的請求統計"""
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        snapshot = aggregator.collect()

        assert snapshot.stats["binance"].requests == 10
        assert snapshot.stats["coinbase"].failures == 1
        assert snapshot.stats["coinbase"].success_rate == pytest.approx(0.5)
        for connector in connectors.values():
            connector.reset_stats.assert_called_once()

    def test_snapshot_dataframe(self, config, connectors):
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        df = aggregator.collect().to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["symbol"] + RECORD_FIELDS
        assert list(df["symbol"]) == ["BTC", "ETH"]

    def test_close(self, config, connectors):
        aggregator = MultiExchangeAggregator(config, connectors=connectors)
        aggregator.close()
        for connector in connectors.values():
            connector.close.assert_called_once()

    def test_default_connectors(self):
        """測試依配置建立連接器"""
        config = SnapshotConfig(symbols=["BTC"], request_timeout=5.0, exchanges=["binance", "okx"])
        aggregator = MultiExchangeAggregator(config)
        try:
            assert set(aggregator.connectors) == {"binance", "okx"}
            assert isinstance(aggregator.connectors["binance"], BinanceConnector)
            assert aggregator.connectors["okx"].timeout == 5.0
        finally:
            aggregator.close()


class TestNetworkFailure:
    """網路完全中斷時的端到端測試"""

    @patch("requests.Session.get")
    def test_all_requests_fail(self, mock_get):
        """測試所有請求失敗時仍輸出完整的全 N/A 快照"""
        mock_get.side_effect = requests.exceptions.ConnectionError("network down")

        snapshot = collect_snapshot(["BTC", "ETH"])

        assert snapshot.symbols == ["BTC", "ETH"]
        for record in snapshot:
            assert record.unavailable_fields() == RECORD_FIELDS
        assert snapshot.count_unavailable() == 14
        assert snapshot.stats["binance"].requests == 10
        assert snapshot.stats["binance"].failures == 10
        assert snapshot.stats["coinbase"].failures == 2
        assert snapshot.stats["okx"].failures == 2

    @patch("requests.Session.get")
    def test_collect_snapshot_uses_config(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout("timed out")
        config = SnapshotConfig(symbols=["SOL"], exchanges=["okx"])

        snapshot = collect_snapshot(config=config)

        assert snapshot.symbols == ["SOL"]
        assert list(snapshot.stats) == ["okx"]
        assert mock_get.call_count == 1
