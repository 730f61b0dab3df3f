"""日付/時刻アーカイブの粒度判定.

CMS では「time」は「date」の一種として扱われます（時刻アーカイブも is_date が真）。
両者をまとめて timeframe と呼び、CSS のクラス名とも衝突しにくくしています。
"""

from __future__ import annotations

from .state import RequestState
from .tokens import is_numeric

# 時刻アーカイブは細かい単位から順に判定する
TIME_UNITS: tuple[str, ...] = ("second", "minute", "hour")

# 年 → 月 → 日 の順に辿るクエリ変数名
DATE_PATH: tuple[tuple[str, str], ...] = (("year", "year"), ("month", "monthnum"), ("day", "day"))


def timeframe(state: RequestState | None) -> str | bool | None:
    """日付アーカイブの粒度を返す.

    Returns:
        - None: リクエスト状態がまだ無い（判定不能）
        - False: 日付アーカイブではない
        - "day" | "week" | "month" | "year" | "hour" | "minute" | "second"
        - True: 日付アーカイブだが名前付きの単位に当てはまらない
    """
    if state is None:
        return None

    if not state.is_date:
        return False

    unit: str | None = None
    if not state.is_time:
        if state.is_day:
            unit = "day"
        elif state.get_query_var("w"):
            unit = "week"
        elif state.is_month:
            unit = "month"
        elif state.is_year:
            unit = "year"
    else:
        for name in TIME_UNITS:
            value = state.get_query_var(name)
            if value or is_numeric(value):
                unit = name
                break

    return unit or True
