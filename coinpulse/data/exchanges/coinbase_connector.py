"""
Coinbase Connector for CoinPulse v0.1

Coinbase 現貨價格連接器

API: GET https://api.coinbase.com/v2/prices/{BASE}-USD/spot
回應格式: {"data": {"base": "BTC", "currency": "USD", "amount": "..."}}

Version: v0.1
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from coinpulse.data.exchanges.base_connector import ExchangeConnector, FetchTask
from coinpulse.data.extract import extract_str
from coinpulse.data.symbol_mapper import SymbolMapper

logger = logging.getLogger(__name__)


class CoinbaseConnector(ExchangeConnector):
    """Coinbase 現貨價格連接器"""

    def __init__(
        self,
        timeout: float = 30.0,
        max_workers: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(name="coinbase", timeout=timeout, max_workers=max_workers, session=session)
        self.base_url = "https://api.coinbase.com"
        self.mapper = SymbolMapper()

    def get_spot_prices(self, symbols: List[str]) -> Dict[str, str]:
        """獲取 Coinbase 現貨價格，失敗的幣種不出現在結果中"""
        tasks = [
            FetchTask(key=symbol, endpoint=f"/v2/prices/{self.mapper.to_coinbase(symbol)}/spot")
            for symbol in symbols
        ]
        results = self._fetch_parallel(tasks)

        prices = {}
        for symbol in symbols:
            price = self.extract_price(results.get(symbol))
            if price is not None:
                prices[symbol] = price

        logger.info(f"Fetched Coinbase prices for {len(prices)}/{len(symbols)} symbols")
        return prices

    @staticmethod
    def extract_price(document: Any) -> Optional[str]:
        return extract_str(document, "data", "amount")
