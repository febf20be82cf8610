"""
共用測試工具

fake_session: 依 URL 結尾路由的假 HTTP session，不會發出真實請求
"""

from unittest.mock import MagicMock

import pytest
import requests


def _build_session(routes):
    """建立假 session

    routes: {url 結尾: 回應}，回應可以是
    - JSON 文件（dict / list）
    - Exception 實例（請求時拋出）
    - callable(params) 回傳上述兩者之一
    未匹配的 URL 一律拋出 ConnectionError。
    """
    session = MagicMock()

    def fake_get(url, params=None, timeout=None):
        for suffix, payload in routes.items():
            if url.endswith(suffix):
                if callable(payload):
                    payload = payload(params)
                if isinstance(payload, Exception):
                    raise payload
                response = MagicMock()
                response.json.return_value = payload
                return response
        raise requests.exceptions.ConnectionError(f"no route for {url}")

    session.get.side_effect = fake_get
    return session


@pytest.fixture
def fake_session():
    """回傳建立假 session 的工廠函數"""
    return _build_session
