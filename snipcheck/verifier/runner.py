#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Subprocess Checker

通过外部编译器/语法检查器校验代码片段
"""

import asyncio
import tempfile
from pathlib import Path
from typing import List, Optional
from loguru import logger

from .toolchain import ToolchainRegistry, build_argv
from .types import CheckOutcome


SNIPPET_PLACEHOLDER = "<snippet>"


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace").strip()


class SubprocessChecker:
    """
    Checker that runs the registered toolchain as a subprocess

    Each call is a scoped invocation: the process is killed and any temp
    file removed on every exit path, cancellation included.
    """

    def __init__(self, registry: ToolchainRegistry):
        self.registry = registry

    async def __call__(self, tag: str, source: str) -> CheckOutcome:
        spec = self.registry.get(tag)
        if spec is None:
            raise LookupError(f"No toolchain registered for language: {tag!r}")

        if not spec.uses_file:
            return await self._run(build_argv(spec), source.encode("utf-8"))

        with tempfile.TemporaryDirectory(prefix="snipcheck-") as tmp_dir:
            snippet_path = Path(tmp_dir) / f"snippet{spec.suffix or ''}"
            snippet_path.write_text(source, encoding="utf-8")
            outcome = await self._run(build_argv(spec, str(snippet_path)), None)

        if outcome.diagnostic:
            outcome = outcome.model_copy(
                update={"diagnostic": outcome.diagnostic.replace(str(snippet_path), SNIPPET_PLACEHOLDER)}
            )
        return outcome

    async def _run(self, argv: List[str], stdin_data: Optional[bytes]) -> CheckOutcome:
        logger.debug(f"Running checker: {' '.join(argv)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if stdin_data is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            return CheckOutcome.unavailable(f"'{argv[0]}' not found")
        except OSError as e:
            # PermissionError, ENOEXEC and other exec failures
            return CheckOutcome.unavailable(f"'{argv[0]}' cannot be executed ({e})")

        try:
            stdout, stderr = await process.communicate(input=stdin_data)
        finally:
            if process.returncode is None:
                # Cancelled mid-run (timeout)
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
                await process.wait()
                logger.debug(f"Killed checker process {process.pid}")

        if process.returncode == 0:
            return CheckOutcome.passed()

        diagnostic = _decode(stderr) or _decode(stdout) or f"exited with status {process.returncode}"
        return CheckOutcome.syntax_error(diagnostic)
