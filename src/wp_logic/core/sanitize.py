"""HTML 出力向けの整形関数."""

from __future__ import annotations

import html
import re
from collections.abc import Mapping

_PERCENT_OCTET = re.compile(r"%[a-fA-F0-9][a-fA-F0-9]")
_INVALID_CLASS_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_html_class(value: object, fallback: str = "") -> str:
    """CSS クラス名として使えない文字を取り除く.

    パーセントエンコードされたオクテットを先に除去し、その後
    ``[A-Za-z0-9_-]`` 以外の文字を全て除去します。
    結果が空で fallback が指定されていれば fallback を同様に整形して返します。

    Examples:
        >>> sanitize_html_class("hello-world")
        'hello-world'
        >>> sanitize_html_class("caf%C3%A9 au lait")
        'cafaulait'
        >>> sanitize_html_class("!!!", "default")
        'default'
    """
    text = "" if value is None else str(value)
    sanitized = _INVALID_CLASS_CHARS.sub("", _PERCENT_OCTET.sub("", text))
    if sanitized == "" and fallback:
        return sanitize_html_class(fallback)
    return sanitized


def zeroise(number: int | str, width: int) -> str:
    """数値を width 桁までゼロ埋めする."""
    return str(number).rjust(width, "0")


def format_attributes(attrs: Mapping[str, object]) -> str:
    """属性マッピングを ``key="value"`` の空白区切り文字列にする.

    値が空（None / ""）の属性はキーだけを出力します。
    """
    parts: list[str] = []
    for key, value in attrs.items():
        if value is None or value == "":
            parts.append(key)
        else:
            parts.append(f'{key}="{html.escape(str(value), quote=True)}"')
    return " ".join(parts)
