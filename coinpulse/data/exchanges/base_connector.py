"""
Base Exchange Connector for CoinPulse v0.1

交易所連接器基底類別 - 定義統一的數據獲取接口與並行請求工具

Version: v0.1
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional

import requests

logger = logging.getLogger(__name__)


class ExchangeAPIError(Exception):
    """交易所 API 錯誤基底類別（連線、DNS、逾時）"""

    pass


class DataFormatError(Exception):
    """數據格式錯誤（回應無法解析為 JSON）"""

    pass


@dataclass
class FetchTask:
    """單一請求任務

    key 用於在並行結果中識別此請求，通常為 (symbol, field)。
    """

    key: Hashable
    endpoint: str
    params: Optional[Dict[str, Any]] = None
    base_url: Optional[str] = None


class ExchangeConnector(ABC):
    """交易所連接器基底類別

    所有交易所連接器必須實作 get_spot_prices，確保數據格式統一。
    同一連接器的所有請求共用一個 requests.Session（連線池）。

    Example:
        >>> class MyExchangeConnector(ExchangeConnector):
        ...     def get_spot_prices(self, symbols):
        ...         # 實作具體邏輯
        ...         pass
    """

    def __init__(
        self,
        name: str,
        timeout: float = 30.0,
        max_workers: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """初始化連接器

        Args:
            name: 交易所名稱（如 'binance', 'coinbase', 'okx'）
            timeout: 單一請求逾時秒數
            max_workers: 並行請求的最大執行緒數（None 時每個請求一個執行緒）
            session: 共用的 HTTP session（None 時自動建立）
        """
        self.name = name
        self.base_url: Optional[str] = None
        self.timeout = timeout
        self.max_workers = max_workers

        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": "CoinPulse/0.1", "Accept": "application/json"})
        self.session = session

        # 請求統計
        self.request_count = 0
        self.failure_count = 0

    @abstractmethod
    def get_spot_prices(self, symbols: List[str]) -> Dict[str, str]:
        """獲取現貨價格

        Args:
            symbols: 基礎幣種列表（如 ['BTC', 'ETH']）

        Returns:
            {symbol: price_text}，失敗或格式錯誤的幣種不出現在結果中
        """
        pass

    def reset_stats(self) -> None:
        """重置請求統計"""
        self.request_count = 0
        self.failure_count = 0

    def close(self) -> None:
        """關閉 HTTP session"""
        self.session.close()

    def _make_request(
        self, endpoint: str, params: Optional[Dict] = None, base_url: Optional[str] = None
    ) -> Any:
        """發送 GET 請求並解析 JSON

        不檢查 HTTP 狀態碼：錯誤回應若仍為 JSON，交由欄位擷取判斷。

        Args:
            endpoint: API 端點
            params: 請求參數
            base_url: 覆蓋預設的 base_url

        Returns:
            已解析的 JSON 文件

        Raises:
            ExchangeAPIError: 當請求失敗時
            DataFormatError: 當回應不是有效 JSON 時
        """
        url = (base_url or self.base_url or "") + endpoint

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ExchangeAPIError(f"Request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise DataFormatError(f"Invalid JSON from {url}: {e}") from e

    def _fetch_parallel(self, tasks: List[FetchTask]) -> Dict[Hashable, Optional[Any]]:
        """並行執行所有請求並等待全部完成

        單一請求失敗只記錄警告並以 None 表示，不會取消其他請求。

        Args:
            tasks: 請求任務列表

        Returns:
            {task.key: JSON 文件或 None} 字典
        """
        results: Dict[Hashable, Optional[Any]] = {}
        if not tasks:
            return results

        def fetch_single(task: FetchTask) -> tuple:
            try:
                data = self._make_request(task.endpoint, task.params, base_url=task.base_url)
                return (task, data, None)
            except (ExchangeAPIError, DataFormatError) as e:
                return (task, None, e)

        # 預設所有請求同時發出；設定 max_workers 時才限制並行數
        workers = len(tasks) if self.max_workers is None else min(self.max_workers, len(tasks))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(fetch_single, task) for task in tasks]

            for future in as_completed(futures):
                task, data, error = future.result()
                self.request_count += 1
                if error is not None:
                    self.failure_count += 1
                    logger.warning(f"[{self.name}] {task.endpoint} failed for {task.key}: {error}")
                results[task.key] = data

        return results

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
