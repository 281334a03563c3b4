"""
PyReselect 的共用類型定義。

集中定義選擇器、記憶化函數與相等比較函數的類型，
供其他模組與類型存根文件引用。
"""
from typing import Any, Callable, List, TypeVar

from typing_extensions import Protocol


# 狀態類型
S = TypeVar("S")
# 選擇器輸出類型
R = TypeVar("R")
T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)
R_co = TypeVar("R_co", covariant=True)

# (state, *extra_args) -> value
InputSelector = Callable[..., Any]
# (*input_values) -> result
ResultFunc = Callable[..., R]


class EqualityCheck(Protocol[T_contra]):
    """比較前一次與本次參數是否「相同」的函數。"""

    def __call__(self, previous: T_contra, next: T_contra) -> bool: ...


class MemoizedFunction(Protocol[R_co]):
    """經過記憶化包裝後的函數，呼叫約定與原函數相同。"""

    def __call__(self, *args: Any) -> R_co: ...

    def cache_clear(self) -> None: ...


class MemoizeFunction(Protocol):
    """
    快取策略介面：接收函數與選項，回傳呼叫約定相同的包裝函數。

    default_memoize 與 hash_memoize 都符合此介面。
    """

    def __call__(self, fn: Callable[..., Any], *options: Any) -> Callable[..., Any]: ...


class OutputSelector(Protocol[R_co]):
    """由 create_selector 產生的複合選擇器。"""

    result_func: Callable[..., Any]
    dependencies: List[InputSelector]

    def __call__(self, state: Any, *args: Any) -> R_co: ...

    def recomputations(self) -> int: ...

    def reset_recomputations(self) -> int: ...


class SelectorCreator(Protocol):
    """與 create_selector 呼叫方式相同的選擇器建立函數。"""

    def __call__(self, *funcs: Any, result_fn: Any = None) -> OutputSelector[Any]: ...
