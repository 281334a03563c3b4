import json
import time
from typing import Optional

from pydantic import BaseModel
from reactivex.subject import BehaviorSubject

from pyreselect import log_selector, select
from counter_selectors import get_count, get_count_label, get_counter_info, get_counter_view


class CounterState(BaseModel):
    count: int = 0
    loading: bool = False
    last_updated: Optional[float] = None


def update(states: BehaviorSubject, **changes) -> None:
    """以新的 CounterState 取代目前狀態（不修改原物件）。"""
    counter = states.value["counter"]
    states.on_next({"counter": counter.model_copy(update=changes)})


if __name__ == "__main__":
    states = BehaviorSubject({"counter": CounterState()})

    # 訂閱狀態變化
    states.pipe(select(get_count)).subscribe(
        on_next=lambda count: print(f"計數變化: {count}")
    )
    states.pipe(select(get_counter_info)).subscribe(
        on_next=lambda info: print(
            f"計數器信息更新: {json.dumps(info, ensure_ascii=False, indent=2)}"
        )
    )
    states.pipe(select(get_count_label)).subscribe(on_next=print)
    view = log_selector(get_counter_view, name="counter_view")

    print("\n==== 開始測試基本操作 ====")
    update(states, count=1, last_updated=time.time())
    update(states, count=6, last_updated=time.time())
    update(states, loading=True)
    update(states, count=1)
    view(states.value)
    view(states.value)

    print("\n==== 最終狀態 ====")
    print(states.value)
    print(f"get_counter_info 重新計算次數: {get_counter_info.recomputations()}")
    print(f"get_count_label 重新計算次數: {get_count_label.recomputations()}")
