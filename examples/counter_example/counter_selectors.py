from pyreselect import (
    create_selector, create_selector_creator, create_structured_selector,
    default_memoize, hash_memoize, shallow_equal
)

get_counter_state = lambda state: state["counter"]

# 列表形式傳入輸入選擇器
get_count = create_selector([get_counter_state], lambda counter: counter.count)
get_loading = create_selector([get_counter_state], lambda counter: counter.loading)

# 以 shallow_equal 比較：內容相同的新 dict 也會沿用快取
create_shallow_selector = create_selector_creator(default_memoize, shallow_equal)
get_counter_info = create_shallow_selector(
    get_count,
    lambda state: {"last_updated": state["counter"].last_updated},
    lambda count, meta: {"count": count, **meta},
)

# 多條目快取：回到先前出現過的計數時不需重新計算
create_cached_selector = create_selector_creator(hash_memoize, None, 16)
get_count_label = create_cached_selector(
    get_count,
    result_fn=lambda count: f"第 {count} 次",
)

# 結構化選擇器，各欄位不變時回傳同一個 dict
get_counter_view = create_structured_selector({
    "count": get_count,
    "label": get_count_label,
    "loading": get_loading,
})
