#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SnipCheck Report

校验结果汇总与渲染：
- Summary汇总
- 多格式渲染（text/JSON Lines/JSON）
"""

from .summary import ResultEntry, Summary, report
from .renderers import JsonLinesRenderer, JsonRenderer, TextRenderer, get_renderer

__all__ = [
    'ResultEntry',
    'Summary',
    'report',
    'TextRenderer',
    'JsonLinesRenderer',
    'JsonRenderer',
    'get_renderer',
]
