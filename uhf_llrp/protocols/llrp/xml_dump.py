# uhf_llrp/protocols/llrp/xml_dump.py

"""Renders decoded LLRP messages as XML for diagnostic output."""

import enum
import xml.etree.ElementTree as ET
from dataclasses import fields, is_dataclass
from typing import Any

from uhf_llrp.protocols.llrp.messages import Message, UnknownMessage
from uhf_llrp.protocols.llrp.parameters import Parameter, UnknownParameter


def _camel(name: str) -> str:
    return ''.join(part[:1].upper() + part[1:] for part in name.split('_'))


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


def _add_value(parent: ET.Element, tag: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, (Parameter, Message)):
        parent.append(_element(value))
    elif isinstance(value, (list, tuple)):
        if value and isinstance(value[0], (Parameter, Message)):
            for item in value:
                parent.append(_element(item))
        else:
            ET.SubElement(parent, tag).text = ' '.join(f"{v:04x}" for v in value)
    else:
        ET.SubElement(parent, tag).text = _text(value)


def _element(obj) -> ET.Element:
    if isinstance(obj, (UnknownParameter, UnknownMessage)):
        element = ET.Element(type(obj).__name__)
    else:
        element = ET.Element(obj.name)
    if isinstance(obj, Message):
        element.set('MessageID', str(obj.message_id))
    if is_dataclass(obj):
        for f in fields(obj):
            if f.name == 'message_id':
                continue
            _add_value(element, _camel(f.name), getattr(obj, f.name))
    return element


def to_xml(message: Message) -> str:
    """
    Returns an indented XML rendering of a message.

    The message is only read, never modified.
    """
    root = _element(message)
    ET.indent(root, space='  ')
    return ET.tostring(root, encoding='unicode')
