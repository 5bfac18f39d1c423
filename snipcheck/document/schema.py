#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document Schema定义

定义文档、章节与代码块的数据结构
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """A `#`-prefixed heading and its position in the document"""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Heading text without the leading hashes")
    level: int = Field(1, ge=1, le=6, description="Heading level (1-6)")
    offset: int = Field(..., ge=0, description="Character offset of the heading line")
    line: int = Field(..., ge=1, description="1-based line number")
    ordinal: int = Field(..., ge=0, description="Position among the document's headings")


class CodeBlock(BaseModel):
    """One fenced snippet"""
    model_config = ConfigDict(frozen=True)

    language: str = Field("", description="Declared language tag, empty if none")
    text: str = Field("", description="Snippet body between the fences")
    section: Optional[Section] = Field(default=None, description="Nearest preceding heading")
    index: int = Field(..., ge=0, description="Ordinal of the block in document order")
    offset: int = Field(..., ge=0, description="Character offset of the opening fence")
    line: int = Field(..., ge=1, description="1-based line of the opening fence")

    @property
    def section_title(self) -> Optional[str]:
        return self.section.title if self.section else None

    def location(self) -> str:
        """Human readable location, e.g. `#3 line 42 (Pointers)`"""
        where = f"#{self.index} line {self.line}"
        if self.section:
            where += f" ({self.section.title})"
        return where


class Document(BaseModel):
    """The full guide text"""
    model_config = ConfigDict(frozen=True)

    text: str
    source: str = Field("<string>", description="Path the text was read from")
    sections: List[Section] = Field(default_factory=list)
    blocks: List[CodeBlock] = Field(default_factory=list)
