"""XmlFormat — CloudEvents XML event format."""

from __future__ import annotations

import base64
import xml.etree.ElementTree as ET  # noqa: N817, S405

from ..envelope import CloudEvent
from ..exceptions import EncodingError
from .base import extension_value, format_time

MEDIA_TYPE = "application/cloudevents+xml"
XML_NAMESPACE = "http://cloudevents.io/xmlformat/V1"
XS_NAMESPACE = "http://www.w3.org/2001/XMLSchema"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

_DECLARATION = b'<?xml version="1.0" encoding="UTF-8" standalone="no"?>'

_ATTRIBUTE_TYPES = {
    "dataschema": "xs:anyURI",
    "time": "xs:dateTime",
}


def _xsi_type(value: bool | int | str | bytes) -> tuple[str, str]:
    if isinstance(value, bool):
        return "xs:boolean", "true" if value else "false"
    if isinstance(value, int):
        return "xs:int", str(value)
    if isinstance(value, bytes):
        return "xs:base64Binary", base64.b64encode(value).decode("ascii")
    return "xs:string", value


class XmlFormat:
    """Serialize CloudEvents to the XML event format.

    Context attributes and extensions become child elements of ``<event>``;
    only ``time`` and ``dataschema`` carry an ``xsi:type``. Data is always
    ``xs:base64Binary``.
    """

    media_type = MEDIA_TYPE

    def serialize(self, event: CloudEvent) -> bytes:
        root = ET.Element(
            "event",
            {
                "xmlns:xs": XS_NAMESPACE,
                "xmlns:xsi": XSI_NAMESPACE,
                "specversion": event.specversion,
                "xmlns": XML_NAMESPACE,
            },
        )
        for name, value in event.attributes().items():
            if name == "specversion":
                continue
            child = ET.SubElement(root, name)
            if name in _ATTRIBUTE_TYPES:
                child.set("xsi:type", _ATTRIBUTE_TYPES[name])
            child.text = format_time(value) if name == "time" else str(value)

        for name, value in event.extensions.items():
            if not name.isidentifier() and not name.replace("-", "_").isidentifier():
                raise EncodingError(f"Extension '{name}' is not a valid XML element name")
            xsi_type, text = _xsi_type(extension_value(name, value))
            child = ET.SubElement(root, name, {"xsi:type": xsi_type})
            child.text = text

        if event.data:
            data = ET.SubElement(root, "data", {"xsi:type": "xs:base64Binary"})
            data.text = base64.b64encode(event.data).decode("ascii")

        try:
            return _DECLARATION + ET.tostring(root, encoding="unicode").encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(str(e)) from e
