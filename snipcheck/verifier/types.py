#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Verification types

校验状态、失败类型与校验结果
"""

from enum import Enum
from typing import Awaitable, Callable, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..document.schema import CodeBlock


class VerificationStatus(str, Enum):
    """校验状态"""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"  # no toolchain registered for the language


class FailureKind(str, Enum):
    """失败类型"""
    SYNTAX_ERROR = "syntax_error"
    TOOLCHAIN_UNAVAILABLE = "toolchain_unavailable"
    TIMEOUT = "timeout"
    INTERNAL_ERROR = "internal_error"


class CheckOutcome(BaseModel):
    """Outcome of one checker invocation"""
    model_config = ConfigDict(frozen=True)

    status: VerificationStatus
    failure: Optional[FailureKind] = None
    diagnostic: str = ""

    @classmethod
    def passed(cls) -> "CheckOutcome":
        return cls(status=VerificationStatus.PASSED)

    @classmethod
    def failed(cls, failure: FailureKind, diagnostic: str) -> "CheckOutcome":
        return cls(status=VerificationStatus.FAILED, failure=failure, diagnostic=diagnostic)

    @classmethod
    def syntax_error(cls, diagnostic: str) -> "CheckOutcome":
        return cls.failed(FailureKind.SYNTAX_ERROR, diagnostic)

    @classmethod
    def unavailable(cls, diagnostic: str) -> "CheckOutcome":
        return cls.failed(FailureKind.TOOLCHAIN_UNAVAILABLE, f"toolchain unavailable: {diagnostic}")

    @classmethod
    def timed_out(cls, timeout: Optional[float]) -> "CheckOutcome":
        limit = f" after {timeout:g}s" if timeout else ""
        return cls.failed(FailureKind.TIMEOUT, f"timeout: check did not finish{limit}")


class VerificationResult(BaseModel):
    """Outcome for one CodeBlock"""
    model_config = ConfigDict(frozen=True)

    block: CodeBlock
    status: VerificationStatus
    failure: Optional[FailureKind] = None
    diagnostic: str = ""
    duration: float = Field(0.0, ge=0, description="Checker wall time (seconds)")

    @classmethod
    def from_outcome(
        cls, block: CodeBlock, outcome: CheckOutcome, duration: float = 0.0
    ) -> "VerificationResult":
        return cls(
            block=block,
            status=outcome.status,
            failure=outcome.failure,
            diagnostic=outcome.diagnostic,
            duration=duration,
        )

    @classmethod
    def skipped(cls, block: CodeBlock) -> "VerificationResult":
        return cls(block=block, status=VerificationStatus.SKIPPED)


# (language tag, source text) -> outcome
Checker = Callable[[str, str], Awaitable[CheckOutcome]]
