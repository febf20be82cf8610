"""
Snapshot Config - 快照配置

配置來源優先順序:
1. 明確傳入的 YAML 路徑
2. 環境變數 COINPULSE_CONFIG（支援 .env 檔）
3. 內建預設值

YAML 範例:

    symbols:
      list: [BTC, ETH, SOL]
    binance:
      kline_interval: 1h
      long_short_period: 5m
    http:
      timeout: 30
      max_workers: 8    # 可選，省略時所有請求同時發出

Version: v0.1
"""

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

import yaml
from dotenv import load_dotenv

from coinpulse.data.symbol_mapper import normalize_symbols

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "COINPULSE_CONFIG"

DEFAULT_SYMBOLS = ["BTC", "ETH", "SOL", "DOT", "INJ", "STRK", "ARB", "POL", "SUI", "RENDER"]

SUPPORTED_EXCHANGES = ["binance", "coinbase", "okx"]


class ConfigError(Exception):
    """配置錯誤（啟動階段，無法繼續執行）"""

    pass


@dataclass
class SnapshotConfig:
    """快照配置"""

    # 幣種設置
    symbols: List[str] = field(default_factory=lambda: list(DEFAULT_SYMBOLS))

    # Binance 設置
    kline_interval: str = "1h"
    long_short_period: str = "5m"

    # HTTP 設置
    request_timeout: float = 30.0
    max_workers: Optional[int] = None  # None: 不限制並行數

    # 交易所
    exchanges: List[str] = field(default_factory=lambda: list(SUPPORTED_EXCHANGES))

    def __post_init__(self):
        self.symbols = normalize_symbols(self.symbols)
        if not self.symbols:
            raise ConfigError("幣種列表不可為空")

        unknown = [name for name in self.exchanges if name not in SUPPORTED_EXCHANGES]
        if unknown:
            raise ConfigError(f"Unsupported exchange: {', '.join(unknown)}")

        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout 必須大於 0: {self.request_timeout}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers 必須至少為 1: {self.max_workers}")

    def with_symbols(self, symbols: Iterable[str]) -> "SnapshotConfig":
        """回傳使用指定幣種列表的新配置"""
        return replace(self, symbols=list(symbols))

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "SnapshotConfig":
        """從 YAML 文件載入配置"""
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"無法讀取配置檔 {yaml_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"配置檔格式錯誤 {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"配置檔頂層必須為映射: {yaml_path}")

        try:
            # 解析 symbols 配置（允許直接寫成列表）
            symbols_config = data.get("symbols") or {}
            if isinstance(symbols_config, list):
                symbols = symbols_config
            else:
                symbols = symbols_config.get("list", DEFAULT_SYMBOLS)

            # 解析 binance 配置
            binance_config = data.get("binance") or {}

            # 解析 http 配置
            http_config = data.get("http") or {}
            max_workers = http_config.get("max_workers")

            config = cls(
                symbols=[str(symbol) for symbol in symbols],
                kline_interval=str(binance_config.get("kline_interval", "1h")),
                long_short_period=str(binance_config.get("long_short_period", "5m")),
                request_timeout=float(http_config.get("timeout", 30.0)),
                max_workers=int(max_workers) if max_workers is not None else None,
                exchanges=list(data.get("exchanges", SUPPORTED_EXCHANGES)),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"配置值無效 {yaml_path}: {e}") from e

        logger.info(f"已載入配置 {yaml_path}: {len(config.symbols)} 個幣種")
        return config


def load_config(config_path: Optional[str] = None) -> SnapshotConfig:
    """載入快照配置

    Args:
        config_path: YAML 路徑（None 時改用環境變數 COINPULSE_CONFIG）

    Returns:
        SnapshotConfig

    Raises:
        ConfigError: 配置檔不存在或內容無效
    """
    if config_path is None:
        load_dotenv()
        config_path = os.getenv(CONFIG_ENV_VAR)

    if config_path:
        if not os.path.exists(config_path):
            raise ConfigError(f"配置檔不存在: {config_path}")
        return SnapshotConfig.from_yaml(config_path)

    return SnapshotConfig()
