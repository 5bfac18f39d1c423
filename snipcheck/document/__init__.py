#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document 模块

文档切分：章节、围栏代码块
"""

from .schema import CodeBlock, Document, Section
from .extractor import extract, extract_sections, load_document

__all__ = [
    'CodeBlock',
    'Document',
    'Section',
    'extract',
    'extract_sections',
    'load_document',
]
