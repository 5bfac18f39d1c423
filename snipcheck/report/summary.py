#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Summary

汇总校验结果，输出顺序与文档顺序一致
"""

from typing import Any, Dict, Iterable, List, Optional
from pydantic import BaseModel, ConfigDict

from ..classifier import language_key
from ..verifier.types import FailureKind, VerificationResult, VerificationStatus


class ResultEntry(BaseModel):
    """One block's line in the summary"""
    model_config = ConfigDict(frozen=True)

    index: int
    line: int
    language: str
    section: Optional[str] = None
    status: VerificationStatus
    failure: Optional[FailureKind] = None
    diagnostic: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status.value,
            'section': self.section,
            'index': self.index,
            'line': self.line,
            'language': self.language,
            'failure': self.failure.value if self.failure else None,
            'diagnostic': self.diagnostic,
        }


class Summary(BaseModel):
    """Aggregated verification results"""
    model_config = ConfigDict(frozen=True)

    total: int
    counts: Dict[str, int]
    by_language: Dict[str, int]
    failures: List[ResultEntry]
    entries: List[ResultEntry]

    @property
    def passed(self) -> int:
        return self.counts[VerificationStatus.PASSED.value]

    @property
    def failed(self) -> int:
        return self.counts[VerificationStatus.FAILED.value]

    @property
    def skipped(self) -> int:
        return self.counts[VerificationStatus.SKIPPED.value]

    @property
    def exit_code(self) -> int:
        """0 when every block passed or was skipped, 1 otherwise"""
        return 1 if self.failed else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'counts': dict(self.counts),
            'by_language': dict(self.by_language),
            'failures': [entry.to_dict() for entry in self.failures],
            'entries': [entry.to_dict() for entry in self.entries],
        }


def _entry(result: VerificationResult) -> ResultEntry:
    block = result.block
    return ResultEntry(
        index=block.index,
        line=block.line,
        language=block.language,
        section=block.section_title,
        status=result.status,
        failure=result.failure,
        diagnostic=result.diagnostic,
    )


def report(results: Iterable[VerificationResult]) -> Summary:
    """
    汇总校验结果

    Args:
        results: 校验结果（任意顺序）

    Returns:
        Summary, entries and failures sorted by block index
    """
    ordered = sorted(results, key=lambda result: result.block.index)

    counts = {status.value: 0 for status in VerificationStatus}
    by_language: Dict[str, int] = {}
    for result in ordered:
        counts[result.status.value] += 1
        key = language_key(result.block.language)
        by_language[key] = by_language.get(key, 0) + 1

    entries = [_entry(result) for result in ordered]
    return Summary(
        total=len(entries),
        counts=counts,
        by_language=dict(sorted(by_language.items())),
        failures=[entry for entry in entries if entry.status == VerificationStatus.FAILED],
        entries=entries,
    )
