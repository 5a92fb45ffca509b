"""Tests for the rich-text document model and solution note."""

import copy

from prfill.adf import Document, LinkNode, OpaqueNode, ParagraphNode, TextNode, parse_node, solution_note

PR_URL = "https://github.com/acme/widget/pull/42"

_NOTE = {
    "type": "paragraph",
    "content": [
        {"type": "text", "text": "See "},
        {"type": "text", "text": PR_URL, "marks": [{"type": "link", "attrs": {"href": PR_URL}}]},
        {"type": "text", "text": "'s description"},
    ],
}

_EXISTING = {
    "version": 1,
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Notes"}]},
        {"type": "paragraph", "content": [{"type": "text", "text": "bold", "marks": [{"type": "strong"}]}]},
        {"type": "paragraph", "content": [{"type": "text", "text": "plain"}]},
        {"type": "bulletList", "content": [{"type": "listItem", "content": []}]},
    ],
}


class TestSolutionNote:
    def test_shape(self) -> None:
        assert solution_note(PR_URL).to_adf() == _NOTE

    def test_link_node(self) -> None:
        link = solution_note(PR_URL).content[1]
        assert isinstance(link, LinkNode)
        assert link.text == PR_URL
        assert link.href == PR_URL


class TestParseNode:
    def test_plain_text(self) -> None:
        assert parse_node({"type": "text", "text": "hi"}) == TextNode(text="hi")

    def test_link_text(self) -> None:
        node = parse_node({"type": "text", "text": "x", "marks": [{"type": "link", "attrs": {"href": "y"}}]})
        assert node == LinkNode(text="x", href="y")

    def test_paragraph(self) -> None:
        assert isinstance(parse_node(_NOTE), ParagraphNode)

    def test_other_marks_stay_opaque(self) -> None:
        raw = {"type": "text", "text": "bold", "marks": [{"type": "strong"}]}
        assert isinstance(parse_node(raw), OpaqueNode)

    def test_link_with_extra_attrs_stays_opaque(self) -> None:
        raw = {"type": "text", "text": "x", "marks": [{"type": "link", "attrs": {"href": "y", "title": "t"}}]}
        node = parse_node(raw)
        assert isinstance(node, OpaqueNode)
        assert node.to_adf() == raw

    def test_paragraph_with_unknown_child_stays_opaque(self) -> None:
        raw = _EXISTING["content"][1]
        assert isinstance(parse_node(raw), OpaqueNode)

    def test_non_dict_stays_opaque(self) -> None:
        assert parse_node("junk").to_adf() == "junk"


class TestDocument:
    def test_none_is_empty(self) -> None:
        doc = Document.from_adf(None)
        assert doc.to_adf() == {"version": 1, "type": "doc", "content": []}

    def test_unparsable_is_empty(self) -> None:
        assert Document.from_adf("not a doc").content == ()
        assert Document.from_adf({"type": "paragraph"}).content == ()
        assert Document.from_adf({"type": "doc", "content": "nope"}).content == ()

    def test_round_trip_preserves_unknown_nodes(self) -> None:
        assert Document.from_adf(copy.deepcopy(_EXISTING)).to_adf() == _EXISTING

    def test_append_keeps_existing_content_first(self) -> None:
        doc = Document.from_adf(copy.deepcopy(_EXISTING)).append(solution_note(PR_URL))
        assert doc.to_adf()["content"] == [*_EXISTING["content"], _NOTE]

    def test_append_to_empty(self) -> None:
        doc = Document.from_adf(None).append(solution_note(PR_URL))
        assert doc.to_adf()["content"] == [_NOTE]

    def test_appends_keep_order(self) -> None:
        other = "https://github.com/acme/widget/pull/43"
        doc = Document.from_adf(copy.deepcopy(_EXISTING)).append(solution_note(PR_URL)).append(solution_note(other))
        content = doc.to_adf()["content"]
        assert content[: len(_EXISTING["content"])] == _EXISTING["content"]
        assert content[-2:] == [_NOTE, solution_note(other).to_adf()]

    def test_append_does_not_mutate(self) -> None:
        doc = Document.from_adf(None)
        doc.append(solution_note(PR_URL))
        assert doc.content == ()

    def test_version_preserved(self) -> None:
        assert Document.from_adf({"version": 2, "type": "doc", "content": []}).to_adf()["version"] == 2

    def test_written_copy_is_independent_of_input(self) -> None:
        raw = copy.deepcopy(_EXISTING)
        doc = Document.from_adf(raw)
        raw["content"][0]["attrs"]["level"] = 9
        assert doc.to_adf() == _EXISTING
