"""
CoinPulse - Multi-Exchange Crypto Market Snapshot

從 Binance、Coinbase、OKX 並行抓取現貨價格、資金費率、24h 漲跌、
多空比與 RSI，合併後輸出為終端表格。
"""

__version__ = "0.1.0"
