#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Verifier 模块

外部工具链校验：
- 工具链注册表
- 子进程校验器
- 并发校验调度
"""

from .types import (
    CheckOutcome,
    Checker,
    FailureKind,
    VerificationResult,
    VerificationStatus,
)
from .toolchain import ToolchainRegistry, build_argv, parse_override
from .runner import SubprocessChecker
from .verifier import Verifier

__all__ = [
    'CheckOutcome',
    'Checker',
    'FailureKind',
    'VerificationResult',
    'VerificationStatus',
    'ToolchainRegistry',
    'build_argv',
    'parse_override',
    'SubprocessChecker',
    'Verifier',
]
