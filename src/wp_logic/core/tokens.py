"""クラストークン（CSS class 名）の操作ユーティリティ.

テンプレートに出力する class 属性は「空白区切りのトークン列」です。
ここではトークンの分割・結合・フィルタリングを行う純粋関数をまとめます。

設計方針:
    - 入力は文字列 / スカラー / ネストしたシーケンス / マッピングのどれでも受け付ける
    - 空トークンは出力に残さない（二重スペースを作らない）
    - 重複除去は結合とは分離する（unique() を明示的に呼ぶ）
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Mapping, Sequence

_NUMERIC = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def is_empty(value: object) -> bool:
    """JavaScript 風の「空」判定.

    None / False / "" / 整数の 0 / NaN を空とみなします。
    "0" や 0.0、空のコンテナは空扱いしません。

    Examples:
        >>> is_empty("")
        True
        >>> is_empty("0")
        False
        >>> is_empty([])
        False
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if type(value) is int:
        return value == 0
    if isinstance(value, float):
        return math.isnan(value)
    return False


def is_numeric(value: object) -> bool:
    """数値、または数値として読める文字列かどうか."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC.match(value))
    return False


def sift(
    items: Mapping[int | str, object] | Sequence[object],
    fn: Callable[[object, int | str, object], object] | None = None,
    invert: bool = False,
) -> dict[int | str, object] | list[object]:
    """マッピング/シーケンスをフィルタする.

    Args:
        items: フィルタ対象
        fn: 判定関数 ``fn(value, key, items)``。省略時は空でない値を残す
        invert: True の場合は判定結果を反転する

    Returns:
        マッピング入力なら dict（整数キーは 0 から振り直し、文字列キーは保持）、
        シーケンス入力なら list
    """
    pairs = list(items.items()) if isinstance(items, Mapping) else list(enumerate(items))

    result: dict[int | str, object] = {}
    position = 0
    for key, value in pairs:
        keep = bool(fn(value, key, items)) if fn is not None else not is_empty(value)
        if keep == invert:
            continue
        if isinstance(key, int):
            result[position] = value
            position += 1
        else:
            result[key] = value

    if isinstance(items, Mapping):
        return result
    return list(result.values())


def pluck(items: Iterable[object], field: str) -> list[object]:
    """各要素（dict またはオブジェクト）から field の値を取り出す."""
    values: list[object] = []
    for item in items:
        if isinstance(item, Mapping):
            if field in item:
                values.append(item[field])
        elif hasattr(item, field):
            values.append(getattr(item, field))
    return values


def kv(items: Mapping[int | str, object], glue: str = "") -> dict[int | str, object]:
    """文字列キーの値を ``key + glue + value`` 形式のトークンに変換する.

    値が truthy または数値なら ``key=value``、それ以外はキーだけを残します。
    True（名前のない単位など）は ``key=1`` になります。整数キーの値はそのまま。

    Examples:
        >>> kv({0: "archive", "unit": "month", "paged": ""}, "=")
        {0: 'archive', 'unit': 'unit=month', 'paged': 'paged'}
    """
    result: dict[int | str, object] = {}
    for key, value in items.items():
        if isinstance(key, int):
            result[key] = value
        elif value or is_numeric(value):
            text = _scalar_text(value) if isinstance(value, bool) else value
            result[key] = f"{key}{glue}{text}"
        else:
            result[key] = key
    return result


def _scalar_text(value: bool | int | float) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def _flatten(tokens: object) -> list[str]:
    if tokens is None:
        return []
    if isinstance(tokens, str):
        return tokens.split()
    if isinstance(tokens, bytes | bytearray):
        return tokens.decode("utf-8", errors="replace").split()
    if isinstance(tokens, bool | int | float):
        text = _scalar_text(tokens)
        return [text] if text else []
    if isinstance(tokens, Mapping):
        tokens = tokens.values()
    if isinstance(tokens, Iterable):
        out: list[str] = []
        for token in tokens:
            out.extend(_flatten(token))
        return out
    return str(tokens).split()


def tokens_to_class_string(tokens: object, glue: str = " ") -> str:
    """トークン入力を1本の文字列に結合する.

    文字列は空白で分割し、シーケンス/マッピング（値のみ）は再帰的に平坦化します。
    空トークンは落とし、重複除去はしません。

    Examples:
        >>> tokens_to_class_string(["a", "", ["b", "c"], None])
        'a b c'
        >>> tokens_to_class_string("  x  y ")
        'x y'
    """
    return glue.join(_flatten(tokens))


# 元プラグインの名前
token_implode = tokens_to_class_string


def token_explode(tokens: object, glue: str | Sequence[str] = " ") -> list[str]:
    """トークン文字列をリストに分割する.

    Args:
        tokens: 文字列、スカラー、またはシーケンス（先に結合してから分割する）
        glue: 区切り文字。リストを渡すと全て先頭の区切りに寄せてから分割する。
            空白の区切りは連続する空白全体で分割する。

    Returns:
        トークンのリスト（入力が空なら空リスト）
    """
    delimiters = [glue] if isinstance(glue, str) else list(glue)
    primary = delimiters[0] if delimiters else " "

    if isinstance(tokens, str):
        text = tokens.strip()
    elif isinstance(tokens, bool | int | float):
        text = _scalar_text(tokens)
        return [text] if text else []
    else:
        text = tokens_to_class_string(tokens, primary)

    if text == "":
        return []

    for delimiter in delimiters[1:]:
        text = text.replace(delimiter, primary)

    if primary == "" or primary.isspace():
        return text.split()
    return text.split(primary)


def unique(tokens: Iterable[str]) -> list[str]:
    """順序を保ったまま重複を除く."""
    return list(dict.fromkeys(tokens))
