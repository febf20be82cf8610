"""
Exchange Connectors for CoinPulse

交易所數據連接器

Supported Exchanges:
- Binance (現貨價格、資金費率、24h 漲跌、多空比、K 線)
- Coinbase (現貨價格)
- OKX (現貨價格)
"""

from .base_connector import DataFormatError, ExchangeAPIError, ExchangeConnector, FetchTask
from .binance_connector import BinanceConnector
from .coinbase_connector import CoinbaseConnector
from .okx_connector import OKXConnector

__all__ = [
    "ExchangeConnector",
    "ExchangeAPIError",
    "DataFormatError",
    "FetchTask",
    "BinanceConnector",
    "CoinbaseConnector",
    "OKXConnector",
]
