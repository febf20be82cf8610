"""
Symbol Mapper for CoinPulse v0.1

符號映射器 - 處理不同交易所的符號格式轉換

功能:
- 將使用者輸入（BTC、BTCUSDT、BTC/USDT、BTC-USDT）統一為基礎幣種
- 產生各交易所的交易對格式（Binance、Coinbase、OKX）
- 幣種列表標準化與去重

Version: v0.1
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ParsedSymbol:
    """解析後的符號結構"""

    base: str  # 基礎貨幣 (BTC)
    quote: Optional[str]  # 報價貨幣 (USDT)，僅輸入基礎幣種時為 None
    original: str  # 原始符號


class SymbolMapper:
    """符號映射器

    Example:
        >>> mapper = SymbolMapper()
        >>> mapper.to_binance("btc")
        'BTCUSDT'
        >>> mapper.to_coinbase("BTC/USDT")
        'BTC-USD'
        >>> mapper.to_okx("ETHUSDT")
        'ETH-USDT'
    """

    # 無分隔符號時可辨識的報價貨幣（由長至短比對）
    QUOTE_CURRENCIES = ["FDUSD", "USDT", "USDC", "BUSD"]

    BINANCE_QUOTE = "USDT"
    COINBASE_QUOTE = "USD"
    OKX_QUOTE = "USDT"

    def parse(self, symbol: str) -> Optional[ParsedSymbol]:
        """解析符號"""
        if not symbol:
            return None

        symbol = symbol.strip().upper()
        if not symbol:
            return None
        original = symbol

        # 處理 OKX 永續格式: BTC-USDT-SWAP
        if symbol.endswith("-SWAP"):
            symbol = symbol[: -len("-SWAP")]

        # 處理 CCXT / OKX / Coinbase 格式: BTC/USDT, BTC-USDT
        for separator in ("/", "-"):
            if separator in symbol:
                parts = symbol.split(separator)
                if len(parts) == 2 and parts[0] and parts[1]:
                    return ParsedSymbol(base=parts[0], quote=parts[1], original=original)
                logger.warning(f"無法解析符號: {original}")
                return None

        # 處理 Binance 格式: BTCUSDT
        for quote in self.QUOTE_CURRENCIES:
            if symbol.endswith(quote) and len(symbol) > len(quote):
                return ParsedSymbol(base=symbol[: -len(quote)], quote=quote, original=original)

        return ParsedSymbol(base=symbol, quote=None, original=original)

    def to_base(self, symbol: str) -> Optional[str]:
        """取得基礎幣種"""
        parsed = self.parse(symbol)
        return parsed.base if parsed else None

    def to_binance(self, symbol: str) -> Optional[str]:
        """轉換為 Binance 格式 (BTCUSDT)"""
        base = self.to_base(symbol)
        if base:
            return f"{base}{self.BINANCE_QUOTE}"
        return None

    def to_coinbase(self, symbol: str) -> Optional[str]:
        """轉換為 Coinbase 格式 (BTC-USD)"""
        base = self.to_base(symbol)
        if base:
            return f"{base}-{self.COINBASE_QUOTE}"
        return None

    def to_okx(self, symbol: str) -> Optional[str]:
        """轉換為 OKX 現貨格式 (BTC-USDT)"""
        base = self.to_base(symbol)
        if base:
            return f"{base}-{self.OKX_QUOTE}"
        return None

    def normalize(self, symbols: Iterable[str]) -> List[str]:
        """標準化幣種列表：轉為基礎幣種、大寫、去重並保持順序"""
        result: List[str] = []
        for symbol in symbols:
            base = self.to_base(symbol)
            if not base:
                continue
            if base not in result:
                result.append(base)
        return result


# ===== 便捷函數 =====


def normalize_symbols(symbols: Iterable[str]) -> List[str]:
    """標準化幣種列表"""
    return SymbolMapper().normalize(symbols)
