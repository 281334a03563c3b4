"""
選擇器的除錯工具。

log_selector 包裝一個選擇器，每次呼叫時打印是否重新計算以及耗時，
用於觀察選擇器的快取命中情況。核心的選擇器本身不輸出任何日誌。
"""
import time
from typing import Any, Callable, Optional

# 包裝後仍保留的選擇器屬性
_METADATA = ("result_func", "dependencies", "recomputations", "reset_recomputations", "keys")


def _label_of(selector: Callable[..., Any]) -> str:
    target = getattr(selector, "result_func", selector)
    return getattr(target, "__name__", "selector")


def log_selector(
    selector: Callable[..., Any],
    name: Optional[str] = None,
    printer: Callable[[str], Any] = print,
    threshold_ms: Optional[float] = None,
) -> Callable[..., Any]:
    """
    包裝選擇器，打印每次呼叫的快取狀態與耗時。

    有 recomputations() 的選擇器以計數變化判斷是否重新計算；
    其他選擇器（例如結構化選擇器）則以結果是否換成新物件判斷。

    Args:
        selector: 要觀察的選擇器
        name: 日誌中顯示的名稱，預設為結果函數的名稱
        printer: 輸出函數，預設為 print
        threshold_ms: 設定後只打印重新計算或超過此耗時（毫秒）的呼叫

    Returns:
        呼叫方式與原選擇器相同的函數
    """
    label = name or _label_of(selector)
    get_recomputations = getattr(selector, "recomputations", None)
    last_result: Any = None
    called = False

    def logged_selector(state: Any, *args: Any) -> Any:
        nonlocal last_result, called

        before = get_recomputations() if get_recomputations else None
        start_time = time.perf_counter()
        try:
            result = selector(state, *args)
        except Exception as err:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            printer(f"❌ selector {label} failed after {elapsed_ms:.2f}ms: {err}")
            raise
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if get_recomputations:
            recomputed = get_recomputations() != before
        else:
            recomputed = not called or result is not last_result
        last_result = result
        called = True

        slow = threshold_ms is not None and elapsed_ms > threshold_ms
        if threshold_ms is None or recomputed or slow:
            if recomputed:
                printer(f"🔄 selector {label} recomputed in {elapsed_ms:.2f}ms")
            else:
                printer(f"✅ selector {label} served from cache in {elapsed_ms:.2f}ms")
            if slow:
                printer(f"⚠️ Warning: selector {label} exceeded threshold ({threshold_ms}ms)")
        return result

    for attr in _METADATA:
        if hasattr(selector, attr):
            setattr(logged_selector, attr, getattr(selector, attr))

    return logged_selector
