"""
PyReselect 選擇器模組。

提供複合選擇器的建立函數：輸入選擇器從 state 中取值，
結果函數經過記憶化包裝，只有在輸入值改變時才重新計算。
"""
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence, cast

from .errors import ValidationError
from .memoize import default_memoize
from .types import InputSelector, MemoizeFunction, OutputSelector, SelectorCreator


def _identity(value: Any) -> Any:
    return value


def _type_name(value: Any) -> str:
    # 可呼叫物件一律視為 function
    return "function" if callable(value) else type(value).__name__


def _get_dependencies(funcs: Sequence[Any]) -> List[InputSelector]:
    """
    將輸入選擇器整理成一個有序列表並驗證。

    Args:
        funcs: 攤平傳入的選擇器，或只含一個列表/元組的序列

    Returns:
        輸入選擇器列表

    Raises:
        ValidationError: 有任一輸入選擇器不可呼叫時
    """
    if len(funcs) == 1 and isinstance(funcs[0], (list, tuple)):
        dependencies = list(funcs[0])
    else:
        dependencies = list(funcs)

    for position, dependency in enumerate(dependencies):
        if not callable(dependency):
            types = ", ".join(_type_name(dep) for dep in dependencies)
            raise ValidationError(
                "Selector creators expect all input-selectors to be functions, "
                f"instead received the following types: [{types}] "
                f"(input-selector at position {position} is a {_type_name(dependency)})",
                field=f"dependencies[{position}]",
                value=dependency,
                expected_type="function",
            )
    return dependencies


def create_selector_creator(
    memoize: MemoizeFunction, *memoize_options: Any
) -> SelectorCreator:
    """
    以指定的記憶化策略建立 create_selector。

    結果函數會以 memoize(result_fn, *memoize_options) 包裝，
    因此可換成自訂的相等比較或多條目快取。

    Args:
        memoize: 快取策略，接收函數並回傳呼叫約定相同的包裝函數
        *memoize_options: 轉交給 memoize 的額外參數

    Returns:
        與 create_selector 用法相同的函數
    """
    if not callable(memoize):
        raise ValidationError(
            "create_selector_creator expects memoize to be a function, "
            f"instead received a {_type_name(memoize)}",
            field="memoize",
            value=memoize,
            expected_type="function",
        )

    def create_selector(*funcs: Any, result_fn: Optional[Callable[..., Any]] = None) -> OutputSelector[Any]:
        """
        創建一個複合選擇器。

        可以攤平傳入 create_selector(a, b, result_fn)，
        也可以用列表傳入 create_selector([a, b], result_fn)，
        或以關鍵字指定 create_selector(a, b, result_fn=fn)。

        Args:
            *funcs: 輸入選擇器，未指定 result_fn 時最後一個為結果函數
            result_fn: 結果函數，接收所有輸入選擇器的輸出

        Returns:
            記憶化的選擇器，附帶 result_func、dependencies、
            recomputations() 與 reset_recomputations()

        Raises:
            ValidationError: 結果函數或任一輸入選擇器不可呼叫時
        """
        if result_fn is None:
            if not funcs:
                raise ValidationError(
                    "create_selector expects a result function, instead received no arguments",
                    field="result_fn",
                    expected_type="function",
                )
            *input_funcs, result_fn = funcs
        else:
            input_funcs = list(funcs)

        if not callable(result_fn):
            raise ValidationError(
                "create_selector expects the result function to be a function, "
                f"instead received a {_type_name(result_fn)}",
                field="result_fn",
                value=result_fn,
                expected_type="function",
            )

        dependencies = _get_dependencies(input_funcs)
        recomputations = 0

        def counted_result(*args: Any) -> Any:
            nonlocal recomputations
            recomputations += 1
            return result_fn(*args)

        memoized_result = memoize(counted_result, *memoize_options)

        def selector(state: Any, *args: Any) -> Any:
            # 每次都重新執行輸入選擇器，結果函數則交給快取決定是否重新計算
            params = [dependency(state, *args) for dependency in dependencies]
            return memoized_result(*params)

        def get_recomputations() -> int:
            return recomputations

        def reset_recomputations() -> int:
            nonlocal recomputations
            recomputations = 0
            return recomputations

        selector.result_func = result_fn  # type: ignore
        selector.dependencies = dependencies  # type: ignore
        selector.recomputations = get_recomputations  # type: ignore
        selector.reset_recomputations = reset_recomputations  # type: ignore

        return cast(OutputSelector[Any], selector)

    return cast(SelectorCreator, create_selector)


create_selector = create_selector_creator(default_memoize)


def create_structured_selector(
    selectors: Mapping, selector_creator: SelectorCreator = create_selector
) -> Callable[..., dict]:
    """
    由 {鍵: 輸入選擇器} 建立結構化選擇器。

    每個鍵各自建立一個複合選擇器，最後組成同樣鍵值的 dict。
    所有鍵的值都沒有改變時，回傳的 dict 是同一個物件。

    Args:
        selectors: 鍵到輸入選擇器的映射，不可為空
        selector_creator: 用來建立每個鍵的選擇器，預設為 create_selector

    Returns:
        結構化選擇器，附帶 keys 與 dependencies

    Raises:
        ValidationError: selectors 不是映射、為空或含有不可呼叫的值時
    """
    if not isinstance(selectors, Mapping):
        raise ValidationError(
            "create_structured_selector expects first argument to be a mapping "
            "where each value is a selector, instead received a "
            f"{_type_name(selectors)}",
            field="selectors",
            value=selectors,
            expected_type="mapping",
        )
    if not selectors:
        raise ValidationError(
            "create_structured_selector expects a non-empty mapping of selectors, "
            "instead received an empty mapping",
            field="selectors",
            value=selectors,
            expected_type="mapping",
        )

    keys = list(selectors.keys())
    for key in keys:
        if not callable(selectors[key]):
            types = ", ".join(_type_name(selectors[k]) for k in keys)
            raise ValidationError(
                "create_structured_selector expects all input-selectors to be functions, "
                f"instead received the following types: [{types}] "
                f"(selector for key {key!r} is a {_type_name(selectors[key])})",
                field=str(key),
                value=selectors[key],
                expected_type="function",
            )

    key_selectors = [selector_creator([selectors[key]], _identity) for key in keys]

    def build(*values: Any) -> dict:
        return dict(zip(keys, values))

    memoized_build = default_memoize(build)

    def structured_selector(state: Any, *args: Any) -> dict:
        values = [selector(state, *args) for selector in key_selectors]
        return memoized_build(*values)

    structured_selector.keys = keys  # type: ignore
    structured_selector.dependencies = key_selectors  # type: ignore

    return structured_selector
