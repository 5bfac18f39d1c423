#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
JSON Renderers

机器可读输出：JSON Lines（每个代码块一行）与完整JSON
"""

import json

from .base import BaseRenderer
from ..summary import Summary


JSON_INDENT = 2


class JsonLinesRenderer(BaseRenderer):
    """One record per block: status, section, index, language, line, failure, diagnostic"""

    format_name = "jsonl"

    def render(self, summary: Summary) -> str:
        return "".join(
            json.dumps(entry.to_dict(), ensure_ascii=False) + "\n"
            for entry in summary.entries
        )


class JsonRenderer(BaseRenderer):
    """The whole summary as a single JSON document"""

    format_name = "json"

    def render(self, summary: Summary) -> str:
        return json.dumps(summary.to_dict(), ensure_ascii=False, indent=JSON_INDENT) + "\n"
