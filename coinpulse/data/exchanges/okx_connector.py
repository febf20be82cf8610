"""
OKX Connector for CoinPulse v0.1

OKX 現貨價格連接器

API: GET https://www.okx.com/api/v5/market/ticker?instId={BASE}-USDT
回應格式: {"code": "0", "msg": "", "data": [{"instId": "BTC-USDT", "last": "..."}]}

OKX 的錯誤回應仍為 HTTP 200 且 data 為空陣列，擷取時自然視為缺失。

Version: v0.1
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from coinpulse.data.exchanges.base_connector import ExchangeConnector, FetchTask
from coinpulse.data.extract import extract_str
from coinpulse.data.symbol_mapper import SymbolMapper

logger = logging.getLogger(__name__)


class OKXConnector(ExchangeConnector):
    """OKX 現貨價格連接器"""

    TICKER_ENDPOINT = "/api/v5/market/ticker"

    def __init__(
        self,
        timeout: float = 30.0,
        max_workers: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(name="okx", timeout=timeout, max_workers=max_workers, session=session)
        self.base_url = "https://www.okx.com"
        self.mapper = SymbolMapper()

    def get_spot_prices(self, symbols: List[str]) -> Dict[str, str]:
        """獲取 OKX 現貨最新成交價，失敗的幣種不出現在結果中"""
        tasks = [
            FetchTask(
                key=symbol,
                endpoint=self.TICKER_ENDPOINT,
                params={"instId": self.mapper.to_okx(symbol)},
            )
            for symbol in symbols
        ]
        results = self._fetch_parallel(tasks)

        prices = {}
        for symbol in symbols:
            price = self.extract_price(results.get(symbol))
            if price is not None:
                prices[symbol] = price

        logger.info(f"Fetched OKX prices for {len(prices)}/{len(symbols)} symbols")
        return prices

    @staticmethod
    def extract_price(document: Any) -> Optional[str]:
        return extract_str(document, "data", 0, "last")
