"""
將選擇器套用到 ReactiveX 狀態流的運算子。
"""
from typing import Any, Callable

from reactivex import Observable, operators as ops

from .memoize import identity_equality


def select(
    selector: Callable[..., Any], *args: Any, pairs: bool = False
) -> Callable[[Observable], Observable]:
    """
    以選擇器觀察狀態流的一部分。

    每個狀態都經過 selector(state, *args) 轉換，結果與上一個發出的值
    為同一物件時不會再次發出。選擇器拋出的異常會以 on_error 傳遞。

    Args:
        selector: 選擇器函數
        *args: 每次呼叫時額外傳給選擇器的參數
        pairs: 來源發出的是 (old_state, new_state) 元組時設為 True，只取新狀態

    Returns:
        可用於 Observable.pipe 的運算子
    """

    def select_state(state: Any) -> Any:
        if pairs:
            _, state = state
        return selector(state, *args)

    def _select(source: Observable) -> Observable:
        return source.pipe(
            ops.map(select_state),
            # 只有當選擇結果換成另一個物件時才發出
            ops.distinct_until_changed(comparer=identity_equality),
        )

    return _select
