#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Code Block Extractor

从文档文本中提取围栏代码块和章节标题
"""

import re
from typing import List, Optional, Tuple
from loguru import logger

from ..exceptions import MalformedDocumentError
from .schema import CodeBlock, Document, Section


# Up to three spaces of indentation, then a run of at least three backticks
FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,})(?P<info>.*)$")
HEADING_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<title>.*?))?[ \t]*$")
CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
# Only \n ends a line; form feeds and other Unicode breaks stay inside it
LINE_RE = re.compile(r"[^\n]*\n|[^\n]+$")


def _language_tag(info: str) -> str:
    """First token of the info string, without pandoc-style `{.lang}` decoration"""
    tokens = info.strip().split()
    if not tokens:
        return ""
    return tokens[0].strip("{}").lstrip(".")


def _heading(line: str, line_no: int, offset: int, ordinal: int) -> Optional[Section]:
    match = HEADING_RE.match(line)
    if not match:
        return None
    title = CLOSING_HASHES_RE.sub("", match.group("title") or "").strip()
    return Section(
        title=title,
        level=len(match.group("hashes")),
        offset=offset,
        line=line_no,
        ordinal=ordinal,
    )


def _scan(text: str) -> Tuple[List[Section], List[CodeBlock]]:
    sections: List[Section] = []
    blocks: List[CodeBlock] = []

    current_section: Optional[Section] = None
    # (offset, line, language) of the fence currently open
    opener: Optional[Tuple[int, int, str]] = None
    body: List[str] = []
    offset = 0

    for line_no, raw in enumerate(LINE_RE.findall(text), 1):
        line = raw.rstrip("\r\n")
        fence = FENCE_RE.match(line)

        if opener is not None:
            if fence:
                open_offset, open_line, language = opener
                blocks.append(CodeBlock(
                    language=language,
                    text="".join(body),
                    section=current_section,
                    index=len(blocks),
                    offset=open_offset,
                    line=open_line,
                ))
                opener = None
                body = []
            else:
                body.append(raw)
        elif fence:
            opener = (offset, line_no, _language_tag(fence.group("info")))
        else:
            section = _heading(line, line_no, offset, len(sections))
            if section is not None:
                sections.append(section)
                current_section = section

        offset += len(raw)

    if opener is not None:
        open_offset, open_line, language = opener
        raise MalformedDocumentError(open_offset, open_line, language)

    return sections, blocks


def extract(text: str) -> List[CodeBlock]:
    """
    提取文档中的所有围栏代码块

    Args:
        text: 文档原文

    Returns:
        按文档顺序排列的代码块，index从0开始

    Raises:
        MalformedDocumentError: 存在未闭合的围栏
    """
    _, blocks = _scan(text)
    return blocks


def extract_sections(text: str) -> List[Section]:
    """Headings outside of fenced blocks, in document order"""
    sections, _ = _scan(text)
    return sections


def load_document(text: str, source: str = "<string>") -> Document:
    """Segment text into a Document with its sections and code blocks"""
    sections, blocks = _scan(text)
    logger.debug(
        f"Extracted {len(blocks)} code blocks and {len(sections)} sections from {source}"
    )
    return Document(text=text, source=source, sections=sections, blocks=blocks)
