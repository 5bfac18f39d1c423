"""
Tests for code block extraction
Tests extract, extract_sections, load_document and malformed fences
"""

import pytest

from snipcheck.document import extract, extract_sections, load_document
from snipcheck.exceptions import MalformedDocumentError, SnipCheckError


def _document_with_blocks(count: int) -> str:
    parts = ["# Title\n", "\n"]
    for i in range(count):
        parts.append(f"## Part {i}\n\n```c\nint v{i};\n```\n\n")
    return "".join(parts)


class TestExtract:
    """Test extract()"""

    @pytest.mark.parametrize("count", [0, 1, 2, 5])
    def test_indices_are_sequential(self, count):
        """N well-formed blocks yield indices 0..N-1"""
        blocks = extract(_document_with_blocks(count))
        assert len(blocks) == count
        assert [b.index for b in blocks] == list(range(count))

    def test_empty_document(self):
        assert extract("") == []
        assert extract("Just prose.\n\nNo code here.\n") == []

    def test_language_tags_and_text(self, sample_guide):
        blocks = extract(sample_guide)
        assert [b.language for b in blocks] == ["c", "Python", "", "C"]
        assert blocks[0].text == "int main(void) { return 0; }\n"
        assert blocks[2].text == "plain text\n"
        assert blocks[3].text == "# not a heading\nint x;\n"

    def test_positions(self, sample_guide):
        blocks = extract(sample_guide)
        assert [b.line for b in blocks] == [7, 13, 17, 23]
        for block in blocks:
            assert sample_guide[block.offset:].startswith("```")
        assert blocks[0].offset == 34

    def test_sections(self, sample_guide):
        blocks = extract(sample_guide)
        assert [b.section_title for b in blocks] == ["Hello", "Python", "Python", "Debugging"]
        assert blocks[3].section.level == 3

    def test_block_before_first_heading(self):
        blocks = extract("```sh\necho hi\n```\n# Later\n")
        assert blocks[0].section is None
        assert blocks[0].location() == "#0 line 1"

    def test_empty_block(self):
        blocks = extract("```c\n```\n")
        assert len(blocks) == 1
        assert blocks[0].text == ""

    def test_info_string(self):
        text = "```python title=example.py\nx = 1\n```\n```{.haskell .numberLines}\nmain = pure ()\n```\n"
        assert [b.language for b in extract(text)] == ["python", "haskell"]

    def test_longer_fence_and_indentation(self):
        text = "   ````bash\nls\n````\n"
        blocks = extract(text)
        assert len(blocks) == 1
        assert blocks[0].language == "bash"
        assert blocks[0].text == "ls\n"

    def test_first_fence_closes(self):
        """No nesting: the first fence marker after an opener closes the block"""
        text = "```markdown\nbefore\n```c\nafter\n```\n```\n"
        blocks = extract(text)
        assert len(blocks) == 2
        assert blocks[0].text == "before\n"
        assert blocks[0].language == "markdown"
        assert blocks[1].language == ""
        assert blocks[1].line == 5

    def test_crlf_line_endings(self):
        blocks = extract("# T\r\n```c\r\nint x;\r\n```\r\n")
        assert len(blocks) == 1
        assert blocks[0].language == "c"
        assert blocks[0].text == "int x;\r\n"
        assert blocks[0].section_title == "T"

    def test_form_feed_inside_block(self):
        """Only \\n separates lines, so backticks after a form feed are snippet text"""
        text = "```c\nchar *s = \"a\x0c```\";\nint y;\n```\n"
        blocks = extract(text)
        assert len(blocks) == 1
        assert blocks[0].text == "char *s = \"a\x0c```\";\nint y;\n"

    def test_unicode_breaks_do_not_shift_lines(self):
        blocks = extract("# T\n\x0c \x85\n```c\nint x;\n```\n")
        assert blocks[0].line == 3
        assert blocks[0].offset == 8

    def test_blocks_are_immutable(self, sample_guide):
        block = extract(sample_guide)[0]
        with pytest.raises(Exception):
            block.index = 5


class TestMalformed:
    """Test unterminated fences"""

    def test_unterminated_fence(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            extract("# T\n\n```c\nint main(){\n")

        err = exc_info.value
        assert err.offset == 5
        assert err.line == 3
        assert err.language == "c"
        assert "offset 5" in str(err)

    def test_single_opener(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            extract("```c")
        assert exc_info.value.offset == 0

    def test_unterminated_after_valid_block(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            extract("```\na\n```\n```python\nx\n")
        assert exc_info.value.offset == 10
        assert exc_info.value.line == 4

    def test_is_snipcheck_error(self):
        with pytest.raises(SnipCheckError):
            load_document("```\n")


class TestSections:
    """Test extract_sections()"""

    def test_sections(self, sample_guide):
        sections = extract_sections(sample_guide)
        assert [s.title for s in sections] == ["C Guide", "Hello", "Python", "Debugging"]
        assert [s.level for s in sections] == [1, 2, 2, 3]
        assert [s.ordinal for s in sections] == [0, 1, 2, 3]
        assert sections[1].line == 5

    def test_heading_rules(self):
        text = "#include <stdio.h>\n## Closed ##\n####### too deep\n# C#\n"
        assert [s.title for s in extract_sections(text)] == ["Closed", "C#"]

    def test_load_document(self, sample_guide):
        document = load_document(sample_guide, source="guide.md")
        assert document.source == "guide.md"
        assert document.text == sample_guide
        assert len(document.blocks) == 4
        assert len(document.sections) == 4
