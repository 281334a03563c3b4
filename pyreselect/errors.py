"""
PyReselect 錯誤定義模組。

建構選擇器時的參數驗證錯誤與快取策略設定錯誤都在此定義。
選擇器執行期間由輸入選擇器或結果函數拋出的異常不會被包裝，
會原樣傳遞給呼叫者。
"""
import traceback
from typing import Any, Dict, Optional


class ReselectError(Exception):
    """所有 PyReselect 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = "".join(traceback.format_stack()[:-1])

    def to_dict(self) -> Dict[str, Any]:
        """
        轉換為可序列化的字典，方便記錄或回報。

        Returns:
            包含錯誤類型、訊息與細節的字典
        """
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ValidationError(ReselectError, TypeError, ValueError):
    """建構選擇器時的參數驗證錯誤。"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        expected_type: Optional[str] = None,
        **kwargs: Any
    ):
        details = {
            "field": field,
            "value": value,
            "expected_type": expected_type,
            **kwargs,
        }
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.expected_type = expected_type


class ConfigurationError(ReselectError):
    """快取策略選項設定錯誤。"""

    def __init__(
        self,
        message: str,
        component: str,
        config_key: Optional[str] = None,
        **kwargs: Any
    ):
        details = {"component": component, "config_key": config_key, **kwargs}
        super().__init__(message, details)
        self.component = component
        self.config_key = config_key
