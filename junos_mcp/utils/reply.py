"""Junos XML reply extraction and decoding.

Replies are decoded into the nested mapping shape that Junos tooling
conventionally consumes:

    <rpc-reply>                       {"rpc-reply": {
      <system-information>              "system-information": [{
        <host-name>r1</host-name>   ->      "host-name": ["r1"],
      </system-information>             }],
    </rpc-reply>                      }}

- the root element maps to its value directly
- every child element maps to a list with one entry per occurrence
- attributes are collected under "$"
- text of an element that also has attributes or children goes under "_"
- a plain leaf is its text
"""

import re
from typing import Any
from xml.parsers import expat

from junos_mcp.errors import ReplyParseError

REPLY_PATTERN = re.compile(r"<rpc-reply[\s\S]*?</rpc-reply>")


def find_reply(text: str) -> str | None:
    """Return the first rpc-reply fragment embedded in CLI output.

    Only the first fragment is honored; later ones are ignored.
    """
    match = REPLY_PATTERN.search(text)
    return match.group(0) if match else None


class _Frame:
    __slots__ = ("tag", "attrs", "children", "text")

    def __init__(self, tag: str, attrs: dict[str, str]) -> None:
        self.tag = tag
        self.attrs = attrs
        self.children: dict[str, list[Any]] = {}
        self.text: list[str] = []

    def value(self) -> Any:
        text = "".join(self.text)
        if not self.attrs and not self.children:
            return text

        node: dict[str, Any] = {}
        if self.attrs:
            node["$"] = self.attrs
        node.update(self.children)
        if text.strip():
            node["_"] = text
        return node


def parse_reply(fragment: str) -> dict[str, Any]:
    """Decode an XML fragment into a nested mapping.

    Namespace prefixes are kept as part of tag names (``xnm:error``), and
    prefixes without a declaration are accepted.

    Args:
        fragment: Well-formed XML text

    Returns:
        ``{root_tag: value}``

    Raises:
        ReplyParseError: If the fragment is not well-formed XML.
    """
    stack: list[_Frame] = []
    root: dict[str, Any] = {}

    def start(tag: str, attrs: dict[str, str]) -> None:
        stack.append(_Frame(tag, attrs))

    def end(tag: str) -> None:
        frame = stack.pop()
        if stack:
            stack[-1].children.setdefault(tag, []).append(frame.value())
        else:
            root[tag] = frame.value()

    def data(text: str) -> None:
        if stack:
            stack[-1].text.append(text)

    parser = expat.ParserCreate()
    parser.buffer_text = True
    parser.StartElementHandler = start
    parser.EndElementHandler = end
    parser.CharacterDataHandler = data

    try:
        parser.Parse(fragment, True)
    except expat.ExpatError as e:
        raise ReplyParseError(f"Malformed XML reply: {e}") from e

    if not root:
        raise ReplyParseError("XML reply has no root element")
    return root


def node_text(node: Any) -> str:
    """Text content of a decoded node, whether leaf or element."""
    if isinstance(node, dict):
        return str(node.get("_", ""))
    return str(node)
