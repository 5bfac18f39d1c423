#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Text Renderer

将校验汇总渲染为可读文本
"""

from typing import List

from .base import BaseRenderer
from ..summary import ResultEntry, Summary


NO_SECTION = "(before first heading)"
DIAGNOSTIC_INDENT = " " * 6


class TextRenderer(BaseRenderer):
    """Human-readable summary"""

    format_name = "text"

    def render(self, summary: Summary) -> str:
        lines: List[str] = []

        lines.append(f"Code blocks: {summary.total}")
        lines.append(
            f"  passed: {summary.passed}  failed: {summary.failed}  skipped: {summary.skipped}"
        )

        if summary.by_language:
            languages = ", ".join(f"{tag}={count}" for tag, count in summary.by_language.items())
            lines.append(f"  languages: {languages}")

        if summary.failures:
            lines.append("")
            lines.append(f"Failures ({len(summary.failures)}):")
            for entry in summary.failures:
                lines.extend(self._render_failure(entry))

        lines.append("")
        lines.append("FAILED" if summary.exit_code else "OK")
        return "\n".join(lines) + "\n"

    def _render_failure(self, entry: ResultEntry) -> List[str]:
        section = entry.section if entry.section else NO_SECTION
        kind = entry.failure.value if entry.failure else "failed"
        header = f"  [{entry.index}] line {entry.line} {entry.language or '-'} in {section}: {kind}"

        body = [f"{DIAGNOSTIC_INDENT}{line}" for line in entry.diagnostic.splitlines() if line.strip()]
        return [header] + body
