"""Renderização de respostas XML para o webhook."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from xml.sax.saxutils import escape


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if "]]>" in text:
        return escape(text)
    return f"<![CDATA[{text}]]>"


def render_xml(fields: Mapping[str, Any], root: str = "xml") -> str:
    """Documento plano `<xml><Tag>valor</Tag></xml>`; strings vão em CDATA."""
    body = "".join(
        f"<{name}>{_render_value(value)}</{name}>"
        for name, value in fields.items()
        if value is not None
    )
    return f"<{root}>{body}</{root}>"
