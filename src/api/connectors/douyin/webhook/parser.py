"""Parse de corpos de webhook (XML plano ou JSON objeto).

Documentos XML são planos (`<xml><Tag>valor</Tag></xml>`); os limites abaixo
rejeitam payloads fora desse formato antes de qualquer processamento.
"""

from __future__ import annotations

import json
from typing import Any
from xml.etree import ElementTree as ET

XML_MAX_PAYLOAD_BYTES = 64 * 1024
XML_MAX_DEPTH = 3
XML_MAX_FIELDS = 50
XML_MAX_FIELD_VALUE_LEN = 16_384


class BodyParseError(ValueError):
    """Corpo não reconhecido ou fora dos limites."""


def _check_depth(element: ET.Element, depth: int = 1) -> None:
    if depth > XML_MAX_DEPTH:
        raise BodyParseError(f"xml_depth_exceeded: {depth}")
    for child in element:
        _check_depth(child, depth + 1)


def parse_xml(raw: bytes) -> dict[str, str]:
    """Converte `<xml>` plano em dict tag -> texto."""
    if len(raw) > XML_MAX_PAYLOAD_BYTES:
        raise BodyParseError(f"payload_too_large: {len(raw)}")
    if b"<!DOCTYPE" in raw or b"<!ENTITY" in raw:
        raise BodyParseError("xml_dtd_not_allowed")

    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise BodyParseError(f"invalid_xml: {exc}") from exc

    _check_depth(root)

    fields: dict[str, str] = {}
    for count, child in enumerate(root, start=1):
        if count > XML_MAX_FIELDS:
            raise BodyParseError("xml_too_many_fields")
        value = (child.text or "").strip()
        if len(value) > XML_MAX_FIELD_VALUE_LEN:
            raise BodyParseError(f"xml_field_too_long: {child.tag}")
        fields[child.tag] = value
    return fields


def parse_json(raw: bytes) -> dict[str, Any]:
    if len(raw) > XML_MAX_PAYLOAD_BYTES:
        raise BodyParseError(f"payload_too_large: {len(raw)}")
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise BodyParseError("invalid_json") from exc
    if not isinstance(payload, dict):
        raise BodyParseError("payload_not_object")
    return payload


def parse_fields(raw: bytes | str) -> dict[str, Any]:
    """Detecta o formato (XML ou JSON) e retorna o mapeamento de campos.

    Corpo vazio retorna dict vazio.

    Raises:
        BodyParseError: Formato desconhecido, inválido ou acima dos limites
    """
    data = raw.encode("utf-8") if isinstance(raw, str) else raw
    data = data.strip()
    if not data:
        return {}
    if data.startswith(b"<"):
        return parse_xml(data)
    if data.startswith(b"{"):
        return parse_json(data)
    raise BodyParseError("unknown_body_format")
