"""Tracker rich-text documents (Atlassian Document Format).

Only the node shapes prfill writes are modelled. Everything else found in an
existing field is kept as an OpaqueNode and written back exactly as it was read.
"""

import copy
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class TextNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str

    def to_adf(self) -> dict:
        return {"type": "text", "text": self.text}


class LinkNode(BaseModel):
    """A text node carrying a single link mark."""

    model_config = ConfigDict(frozen=True)

    text: str
    href: str

    def to_adf(self) -> dict:
        return {
            "type": "text",
            "text": self.text,
            "marks": [{"type": "link", "attrs": {"href": self.href}}],
        }


class ParagraphNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: tuple[TextNode | LinkNode, ...] = ()

    def to_adf(self) -> dict:
        return {"type": "paragraph", "content": [node.to_adf() for node in self.content]}


class OpaqueNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: Any

    def to_adf(self) -> Any:
        return copy.deepcopy(self.raw)


Node = TextNode | LinkNode | ParagraphNode | OpaqueNode


def _parse_inline(raw: Any) -> TextNode | LinkNode | None:
    if not isinstance(raw, dict) or raw.get("type") != "text" or not isinstance(raw.get("text"), str):
        return None
    if raw.keys() == {"type", "text"}:
        return TextNode(text=raw["text"])
    if raw.keys() == {"type", "text", "marks"}:
        marks = raw["marks"]
        if isinstance(marks, list) and len(marks) == 1 and isinstance(marks[0], dict):
            mark = marks[0]
            attrs = mark.get("attrs")
            if (
                mark.keys() == {"type", "attrs"}
                and mark["type"] == "link"
                and isinstance(attrs, dict)
                and attrs.keys() == {"href"}
                and isinstance(attrs["href"], str)
            ):
                return LinkNode(text=raw["text"], href=attrs["href"])
    return None


def parse_node(raw: Any) -> Node:
    """Map a raw node onto a typed variant, falling back to OpaqueNode.

    A typed variant is only chosen when it serialises back to exactly ``raw``.
    """
    inline = _parse_inline(raw)
    if inline is not None:
        return inline
    if isinstance(raw, dict) and raw.get("type") == "paragraph" and raw.keys() == {"type", "content"}:
        children = raw["content"]
        if isinstance(children, list):
            parsed = [_parse_inline(child) for child in children]
            if all(node is not None for node in parsed):
                return ParagraphNode(content=tuple(parsed))  # type: ignore[arg-type]
    return OpaqueNode(raw=copy.deepcopy(raw))


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: int = 1
    content: tuple[Node, ...] = ()

    @classmethod
    def from_adf(cls, raw: Any) -> "Document":
        """Build a Document from a field value. Missing or unreadable values give an empty document."""
        if raw is None:
            return cls()
        if not isinstance(raw, dict) or raw.get("type") != "doc" or not isinstance(raw.get("content", []), list):
            logger.warning("Unreadable rich-text field content, treating as empty: %r", raw)
            return cls()
        version = raw.get("version", 1)
        if not isinstance(version, int) or isinstance(version, bool):
            version = 1
        return cls(version=version, content=tuple(parse_node(node) for node in raw.get("content", [])))

    def append(self, node: Node) -> "Document":
        return self.model_copy(update={"content": (*self.content, node)})

    def to_adf(self) -> dict:
        return {
            "version": self.version,
            "type": "doc",
            "content": [node.to_adf() for node in self.content],
        }


def solution_note(pr_url: str) -> ParagraphNode:
    """Paragraph pointing readers at the pull request: "See <link>'s description"."""
    return ParagraphNode(
        content=(
            TextNode(text="See "),
            LinkNode(text=pr_url, href=pr_url),
            TextNode(text="'s description"),
        )
    )
