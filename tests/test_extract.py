"""
JSON Field Extraction 測試
"""

import pytest

from coinpulse.data.extract import extract, extract_list, extract_str, parse_float


class TestExtract:
    """extract 測試類"""

    @pytest.fixture
    def document(self):
        return {
            "data": [{"last": "101.5", "vol": 12}],
            "price": "50000",
            "nested": {"amount": "1.23"},
        }

    def test_nested_path(self, document):
        """測試物件與陣列混合路徑"""
        assert extract(document, "data", 0, "last") == "101.5"
        assert extract(document, "nested", "amount") == "1.23"

    def test_empty_path_returns_document(self, document):
        """測試空路徑回傳原文件"""
        assert extract(document) is document

    def test_missing_key(self, document):
        """測試缺少欄位"""
        assert extract(document, "missing") is None
        assert extract(document, "nested", "missing") is None

    def test_index_out_of_range(self, document):
        """測試陣列索引超出範圍"""
        assert extract(document, "data", 1, "last") is None
        assert extract(document, "data", -1, "last") is None

    def test_wrong_container_type(self, document):
        """測試型別不符：對物件用索引、對陣列用鍵"""
        assert extract(document, 0) is None
        assert extract(document, "data", "last") is None
        assert extract(document, "price", 0) is None

    def test_none_document(self):
        """測試請求失敗時的 None 文件"""
        assert extract(None, "price") is None
        assert extract_str(None, "price") is None
        assert extract_list(None) is None

    def test_bool_is_not_index(self):
        """測試布林值不會被當成陣列索引"""
        assert extract(["a", "b"], True) is None


class TestTypedExtract:
    """extract_str / extract_list 測試類"""

    def test_extract_str_rejects_numbers(self):
        """測試數值欄位不視為字串"""
        assert extract_str({"price": 50000}, "price") is None
        assert extract_str({"price": "50000"}, "price") == "50000"

    def test_extract_str_rejects_null(self):
        assert extract_str({"price": None}, "price") is None

    def test_extract_list(self):
        assert extract_list([[1], [2]]) == [[1], [2]]
        assert extract_list({"code": -1121, "msg": "Invalid symbol."}) is None


class TestParseFloat:
    """parse_float 測試類"""

    def test_valid(self):
        assert parse_float("0.0005") == pytest.approx(0.0005)
        assert parse_float("-1.5") == -1.5

    def test_invalid_falls_back_to_zero(self):
        """測試無法解析時回傳 0"""
        assert parse_float("abc") == 0.0
        assert parse_float("") == 0.0
        assert parse_float(None) == 0.0

    def test_custom_default(self):
        assert parse_float("n/a", default=-1.0) == -1.0
