"""
Binance Connector for CoinPulse v0.1

Binance 數據連接器 - 現貨價格、資金費率、24h 漲跌、多空比與 RSI

API 文檔:
- Spot: https://binance-docs.github.io/apidocs/spot/en/
- Futures: https://binance-docs.github.io/apidocs/futures/en/

每個幣種並行請求 5 個端點，所有幣種的請求一次發出並共同等待完成。

Version: v0.1
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from coinpulse.data.exchanges.base_connector import ExchangeConnector, FetchTask
from coinpulse.data.extract import extract, extract_list, extract_str, parse_float
from coinpulse.data.models import CoinRecord
from coinpulse.data.symbol_mapper import SymbolMapper
from coinpulse.indicators.rsi import RSI_PERIOD, calculate_rsi

logger = logging.getLogger(__name__)

# K 線陣列中收盤價的位置
KLINE_CLOSE_INDEX = 4


class BinanceConnector(ExchangeConnector):
    """Binance 數據連接器

    特性：
    - 無需 API Key 即可獲取公開數據
    - 現貨 (api.binance.com) 與永續合約 (fapi.binance.com) 端點
    - 每個欄位獨立擷取，任一端點失敗只影響對應欄位

    Example:
        >>> connector = BinanceConnector()
        >>> records = connector.get_coin_records(['BTC', 'ETH'])
        >>> records['BTC'].funding_rate
        '0.0100%'
    """

    SPOT_URL = "https://api.binance.com"
    FUTURES_URL = "https://fapi.binance.com"

    PRICE_ENDPOINT = "/api/v3/ticker/price"
    TICKER_24H_ENDPOINT = "/api/v3/ticker/24hr"
    KLINES_ENDPOINT = "/api/v3/klines"
    PREMIUM_INDEX_ENDPOINT = "/fapi/v1/premiumIndex"
    LONG_SHORT_ENDPOINT = "/futures/data/globalLongShortAccountRatio"

    def __init__(
        self,
        timeout: float = 30.0,
        max_workers: Optional[int] = None,
        kline_interval: str = "1h",
        long_short_period: str = "5m",
        session: Optional[requests.Session] = None,
    ):
        """初始化 Binance 連接器

        Args:
            timeout: 單一請求逾時秒數
            max_workers: 並行請求的最大執行緒數（None 時每個請求一個執行緒）
            kline_interval: RSI 使用的 K 線週期
            long_short_period: 多空比統計週期
            session: 共用的 HTTP session（可選）
        """
        super().__init__(name="binance", timeout=timeout, max_workers=max_workers, session=session)
        self.base_url = self.SPOT_URL
        self.kline_interval = kline_interval
        self.long_short_period = long_short_period
        self.mapper = SymbolMapper()

    def get_spot_prices(self, symbols: List[str]) -> Dict[str, str]:
        """獲取 Binance 現貨價格

        API: GET /api/v3/ticker/price
        """
        tasks = [
            FetchTask(
                key=symbol,
                endpoint=self.PRICE_ENDPOINT,
                params={"symbol": self.mapper.to_binance(symbol)},
            )
            for symbol in symbols
        ]
        results = self._fetch_parallel(tasks)

        prices = {}
        for symbol in symbols:
            price = self.extract_price(results.get(symbol))
            if price is not None:
                prices[symbol] = price
        return prices

    def get_coin_records(self, symbols: List[str]) -> Dict[str, CoinRecord]:
        """獲取每個幣種的 Binance 欄位

        每個請求的幣種都會有一筆記錄，即使 5 個請求全部失敗。
        coinbase_price / okx_price 保持佔位符，由聚合器填入。

        Args:
            symbols: 基礎幣種列表

        Returns:
            {symbol: CoinRecord}
        """
        tasks: List[FetchTask] = []
        for symbol in symbols:
            tasks.extend(self._build_tasks(symbol))

        results = self._fetch_parallel(tasks)

        records: Dict[str, CoinRecord] = {}
        for symbol in symbols:
            record = CoinRecord(symbol=symbol)

            price = self.extract_price(results.get((symbol, "price")))
            if price is not None:
                record.binance_price = price

            funding_rate = self.extract_funding_rate(results.get((symbol, "funding_rate")))
            if funding_rate is not None:
                record.funding_rate = funding_rate

            change = self.extract_price_change(results.get((symbol, "ticker_24h")))
            if change is not None:
                record.price_change_24h = change

            ratio = self.extract_long_short_ratio(results.get((symbol, "long_short")))
            if ratio is not None:
                record.long_short_ratio = ratio

            rsi = self.extract_rsi(results.get((symbol, "klines")))
            if rsi is not None:
                record.rsi = rsi

            records[symbol] = record

        logger.info(
            f"Fetched Binance data for {len(symbols)} symbols "
            f"({self.failure_count}/{self.request_count} requests failed)"
        )
        return records

    def _build_tasks(self, symbol: str) -> List[FetchTask]:
        """建立單一幣種的 5 個請求"""
        pair = self.mapper.to_binance(symbol)
        return [
            FetchTask(
                key=(symbol, "price"),
                endpoint=self.PRICE_ENDPOINT,
                params={"symbol": pair},
            ),
            FetchTask(
                key=(symbol, "funding_rate"),
                endpoint=self.PREMIUM_INDEX_ENDPOINT,
                params={"symbol": pair},
                base_url=self.FUTURES_URL,
            ),
            FetchTask(
                key=(symbol, "ticker_24h"),
                endpoint=self.TICKER_24H_ENDPOINT,
                params={"symbol": pair},
            ),
            FetchTask(
                key=(symbol, "long_short"),
                endpoint=self.LONG_SHORT_ENDPOINT,
                params={"symbol": pair, "period": self.long_short_period},
                base_url=self.FUTURES_URL,
            ),
            FetchTask(
                key=(symbol, "klines"),
                endpoint=self.KLINES_ENDPOINT,
                params={"symbol": pair, "interval": self.kline_interval, "limit": RSI_PERIOD},
            ),
        ]

    # ===== 欄位擷取 =====

    @staticmethod
    def extract_price(document: Any) -> Optional[str]:
        """現貨價格：{"price": "..."}"""
        return extract_str(document, "price")

    @staticmethod
    def extract_funding_rate(document: Any) -> Optional[str]:
        """資金費率：lastFundingRate × 100，保留 4 位小數

        數值無法解析時以 0 計算。
        """
        rate = extract_str(document, "lastFundingRate")
        if rate is None:
            return None
        return f"{parse_float(rate) * 100:.4f}%"

    @staticmethod
    def extract_price_change(document: Any) -> Optional[str]:
        """24h 漲跌：priceChangePercent 原文加上 %"""
        change = extract_str(document, "priceChangePercent")
        if change is None:
            return None
        return f"{change}%"

    @staticmethod
    def extract_long_short_ratio(document: Any) -> Optional[str]:
        """多空比：取回應陣列的第一筆（假設為最新週期）

        longAccount / shortAccount，空方為 0 時比值記為 0。
        """
        entry = extract(document, 0)
        long_text = extract_str(entry, "longAccount")
        short_text = extract_str(entry, "shortAccount")
        if long_text is None or short_text is None:
            return None

        long_account = parse_float(long_text)
        short_account = parse_float(short_text)
        ratio = long_account / short_account if short_account != 0 else 0.0
        return f"{ratio:.2f}"

    @staticmethod
    def extract_rsi(document: Any) -> Optional[str]:
        """RSI：由 K 線收盤價計算

        無法解析的收盤價直接略過；剩餘收盤價剛好 14 筆時才計算。
        """
        klines = extract_list(document)
        if klines is None:
            return None

        closes = []
        for kline in klines:
            close_text = extract_str(kline, KLINE_CLOSE_INDEX)
            if close_text is None:
                continue
            try:
                closes.append(float(close_text))
            except ValueError:
                continue

        if len(closes) != RSI_PERIOD:
            logger.debug(f"RSI 需要 {RSI_PERIOD} 筆收盤價，實際 {len(closes)} 筆")
            return None

        return f"{calculate_rsi(closes):.2f}"
