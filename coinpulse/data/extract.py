"""
JSON Field Extraction for CoinPulse v0.1

JSON 欄位擷取 - 交易所回應的容錯讀取

交易所回應的結構不固定，所有讀取都必須容忍欄位缺失或型別錯誤，
失敗時回傳 None 而不拋出例外。

Example:
    >>> extract_str({"data": [{"last": "101.5"}]}, "data", 0, "last")
    '101.5'
    >>> extract_str({"data": []}, "data", 0, "last") is None
    True

Version: v0.1
"""

import logging
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

PathKey = Union[str, int]


def extract(document: Any, *path: PathKey) -> Optional[Any]:
    """沿路徑讀取巢狀欄位

    Args:
        document: 已解析的 JSON 文件（可為 None）
        *path: 字串鍵用於物件，整數索引用於陣列

    Returns:
        路徑末端的值；任何一段不存在或型別不符時回傳 None
    """
    current = document
    for key in path:
        if isinstance(key, int) and not isinstance(key, bool):
            if not isinstance(current, list) or key < 0 or key >= len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]
    return current


def extract_str(document: Any, *path: PathKey) -> Optional[str]:
    """讀取字串欄位，非字串值視為缺失"""
    value = extract(document, *path)
    if isinstance(value, str):
        return value
    return None


def extract_list(document: Any, *path: PathKey) -> Optional[list]:
    """讀取陣列欄位，非陣列值視為缺失"""
    value = extract(document, *path)
    if isinstance(value, list):
        return value
    return None


def parse_float(text: Optional[str], default: float = 0.0) -> float:
    """將文字轉為浮點數，無法解析時回傳 default"""
    if text is None:
        return default
    try:
        return float(text)
    except ValueError:
        logger.debug(f"無法解析數值 {text!r}，使用 {default}")
        return default
