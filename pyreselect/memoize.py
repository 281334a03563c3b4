"""
PyReselect 記憶化模組。

提供選擇器使用的預設記憶化函數（單一快取槽、逐位置比較參數），
以及可替換的多條目雜湊快取策略。
"""
import functools
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError
from .types import EqualityCheck


def identity_equality(previous: Any, next: Any) -> bool:
    """預設的相等比較：只有同一個物件才算相同。"""
    return previous is next


def shallow_equal(previous: Any, next: Any) -> bool:
    """
    淺層比較，可作為自訂的 equality_check 使用。

    先比較物件身分；若是映射或序列，再逐一比較第一層的值是否為同一物件，
    其餘類型則退回 == 比較。

    Args:
        previous: 前一次呼叫的參數
        next: 本次呼叫的參數

    Returns:
        兩者是否視為相同
    """
    if previous is next:
        return True
    if isinstance(previous, Mapping) and isinstance(next, Mapping):
        if len(previous) != len(next):
            return False
        return all(key in next and previous[key] is next[key] for key in previous)
    if isinstance(previous, (list, tuple)) and type(previous) is type(next):
        if len(previous) != len(next):
            return False
        return all(a is b for a, b in zip(previous, next))
    return previous == next


def _arguments_equal(
    equality_check: EqualityCheck,
    previous: Optional[Sequence[Any]],
    next: Sequence[Any],
) -> bool:
    if previous is None or len(previous) != len(next):
        return False

    # 依序比較，遇到第一個不同的位置就停止
    for index in range(len(next)):
        if not equality_check(previous[index], next[index]):
            return False
    return True


def default_memoize(
    fn: Callable[..., Any], equality_check: EqualityCheck = identity_equality
) -> Callable[..., Any]:
    """
    以單一快取槽記憶化函數。

    與上一次呼叫的參數逐位置比較，全部相同時直接回傳上一次的結果；
    參數數量不同或任一位置不同則重新呼叫 fn。fn 拋出異常時不更新快取，
    下一次相同參數的呼叫會再次呼叫 fn。

    Args:
        fn: 要記憶化的函數
        equality_check: 比較 (前一次參數, 本次參數) 的函數，預設為 identity_equality

    Returns:
        記憶化後的函數，附帶 cache_clear() 方法
    """
    last_args: Optional[Tuple[Any, ...]] = None
    last_result: Any = None

    @functools.wraps(fn)
    def memoized(*args: Any) -> Any:
        nonlocal last_args, last_result

        if not _arguments_equal(equality_check, last_args, args):
            last_result = fn(*args)

        # 命中時也更新參數，下一次比較可以直接以身分判斷
        last_args = args
        return last_result

    def cache_clear() -> None:
        nonlocal last_args, last_result
        last_args = None
        last_result = None

    memoized.cache_clear = cache_clear  # type: ignore
    return memoized


class HashMemoizeOptions(BaseModel):
    """hash_memoize 的選項。"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    hash_fn: Optional[Callable[..., Any]] = None
    maxsize: Optional[StrictInt] = Field(default=None, ge=1)


_SCALARS = (type(None), bool, int, float, complex, str, bytes)


def _structural_key(value: Any, refs: List[Any]) -> Hashable:
    """
    產生帶有類型標記的快取鍵。

    純量與容器依結構比較，tuple、list 與映射的鍵類型彼此區分；
    其他物件以 id() 表示，並把物件放進 refs，讓快取條目持有它，
    避免物件被回收後位址被新物件重用。
    """
    if isinstance(value, _SCALARS):
        return (type(value), value)
    if isinstance(value, Mapping):
        return (
            type(value),
            frozenset(
                (_structural_key(key, refs), _structural_key(item, refs))
                for key, item in value.items()
            ),
        )
    if isinstance(value, (list, tuple)):
        return (type(value), tuple(_structural_key(item, refs) for item in value))
    if isinstance(value, (set, frozenset)):
        return (type(value), frozenset(_structural_key(item, refs) for item in value))
    refs.append(value)
    return (type(value), "id", id(value))


def hash_memoize(
    fn: Callable[..., Any],
    hash_fn: Optional[Callable[..., Any]] = None,
    maxsize: Optional[int] = None,
) -> Callable[..., Any]:
    """
    以雜湊鍵記憶化函數，可保留多筆結果。

    鍵由 hash_fn(*args) 產生；預設依參數的類型與結構產生，
    無法依結構比較的物件則以身分比較。
    maxsize 為 None 時不限制條目數，否則淘汰最久未使用的條目。

    Args:
        fn: 要記憶化的函數
        hash_fn: 由參數產生快取鍵的函數
        maxsize: 快取的最大條目數

    Returns:
        記憶化後的函數，附帶 cache_info() 與 cache_clear() 方法

    Raises:
        ConfigurationError: 選項不合法時
    """
    try:
        options = HashMemoizeOptions(hash_fn=hash_fn, maxsize=maxsize)
    except PydanticValidationError as err:
        first = err.errors()[0]
        config_key = str(first["loc"][0]) if first.get("loc") else None
        raise ConfigurationError(
            f"Invalid hash_memoize option '{config_key}': {first['msg']}",
            component="hash_memoize",
            config_key=config_key,
        ) from err

    # 快取條目：鍵 -> (結果, 鍵中以 id 表示的物件)
    cache: "OrderedDict[Any, Tuple[Any, List[Any]]]" = OrderedDict()
    hits = 0
    misses = 0

    @functools.wraps(fn)
    def memoized(*args: Any) -> Any:
        nonlocal hits, misses

        refs: List[Any] = []
        if options.hash_fn is not None:
            key = options.hash_fn(*args)
        else:
            key = _structural_key(args, refs)

        if key in cache:
            hits += 1
            cache.move_to_end(key)
            return cache[key][0]

        misses += 1
        result = fn(*args)
        cache[key] = (result, refs)
        if options.maxsize is not None and len(cache) > options.maxsize:
            cache.popitem(last=False)
        return result

    def cache_info() -> Tuple[int, int, Optional[int], int]:
        return (hits, misses, options.maxsize, len(cache))

    def cache_clear() -> None:
        nonlocal hits, misses
        cache.clear()
        hits = 0
        misses = 0

    memoized.cache_info = cache_info  # type: ignore
    memoized.cache_clear = cache_clear  # type: ignore
    return memoized
