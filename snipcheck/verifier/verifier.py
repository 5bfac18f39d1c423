"""
Snippet verifier
Dispatches checker invocations through a bounded worker pool
"""

import asyncio
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from snipcheck.classifier import UNTAGGED, language_key
from snipcheck.document.schema import CodeBlock
from snipcheck.utils.logger import get_logger
from snipcheck.verifier.runner import SubprocessChecker
from snipcheck.verifier.toolchain import ToolchainRegistry
from snipcheck.verifier.types import (
    CheckOutcome,
    Checker,
    FailureKind,
    VerificationResult,
    VerificationStatus,
)

logger = get_logger("verifier")

Job = Tuple[str, CodeBlock]


class Verifier:
    """
    Verifier for extracted code blocks

    Features:
    - Injectable checker capability (defaults to SubprocessChecker)
    - Bounded worker pool fed from a queue of pending blocks
    - Global deadline; in-flight checks past it are cancelled
    - Results always returned in document order
    """

    def __init__(
        self,
        workers: int = 1,
        timeout: Optional[float] = None,
        checker: Optional[Checker] = None,
    ):
        """
        Initialize verifier

        Args:
            workers: Maximum number of concurrent checker invocations
            timeout: Global timeout for one run (seconds), None disables it
            checker: Async callable (tag, source) -> CheckOutcome
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.workers = workers
        self.timeout = timeout
        self.checker = checker

    def verify(
        self,
        tag: str,
        blocks: Sequence[CodeBlock],
        registry: ToolchainRegistry,
    ) -> List[VerificationResult]:
        """Verify one language group (sync)"""
        return asyncio.run(self.verify_async(tag, blocks, registry))

    async def verify_async(
        self,
        tag: str,
        blocks: Sequence[CodeBlock],
        registry: ToolchainRegistry,
    ) -> List[VerificationResult]:
        """
        Verify one language group

        Args:
            tag: Language tag shared by the blocks
            blocks: Blocks of that language
            registry: Toolchain registry

        Returns:
            One result per block, in document order
        """
        return await self._run([(tag, block) for block in blocks], registry)

    def verify_groups(
        self,
        groups: Dict[str, List[CodeBlock]],
        registry: ToolchainRegistry,
    ) -> List[VerificationResult]:
        """Verify every group (sync)"""
        return asyncio.run(self.verify_groups_async(groups, registry))

    async def verify_groups_async(
        self,
        groups: Dict[str, List[CodeBlock]],
        registry: ToolchainRegistry,
    ) -> List[VerificationResult]:
        """Verify every group through one shared pool and deadline"""
        jobs = [(tag, block) for tag, blocks in groups.items() for block in blocks]
        return await self._run(jobs, registry)

    async def _run(self, jobs: Iterable[Job], registry: ToolchainRegistry) -> List[VerificationResult]:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout if self.timeout else None
        checker = self.checker or SubprocessChecker(registry)

        results: List[VerificationResult] = []
        results_lock = asyncio.Lock()
        queue: asyncio.Queue = asyncio.Queue()

        for tag, block in jobs:
            if language_key(tag) == UNTAGGED or not registry.supports(tag):
                results.append(VerificationResult.skipped(block))
            else:
                queue.put_nowait((tag, block))

        pending = queue.qsize()
        if pending:
            worker_count = min(self.workers, pending)
            logger.info(f"Verifying {pending} blocks with {worker_count} workers")
            await asyncio.gather(*[
                self._worker(queue, checker, deadline, results, results_lock)
                for _ in range(worker_count)
            ])

        results.sort(key=lambda result: result.block.index)

        failed = sum(1 for r in results if r.status == VerificationStatus.FAILED)
        logger.debug(f"Verification finished: {len(results)} results, {failed} failed")
        return results

    async def _worker(
        self,
        queue: asyncio.Queue,
        checker: Checker,
        deadline: Optional[float],
        results: List[VerificationResult],
        results_lock: asyncio.Lock,
    ) -> None:
        while True:
            try:
                tag, block = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            result = await self._check(tag, block, checker, deadline)
            async with results_lock:
                results.append(result)
            queue.task_done()

    async def _check(
        self,
        tag: str,
        block: CodeBlock,
        checker: Checker,
        deadline: Optional[float],
    ) -> VerificationResult:
        loop = asyncio.get_running_loop()
        started = loop.time()
        remaining = None if deadline is None else deadline - started

        if remaining is not None and remaining <= 0:
            outcome = CheckOutcome.timed_out(self.timeout)
        else:
            try:
                outcome = await asyncio.wait_for(checker(tag, block.text), timeout=remaining)
            except asyncio.TimeoutError:
                logger.warning(f"Check timed out for block {block.location()}")
                outcome = CheckOutcome.timed_out(self.timeout)
            except Exception as e:
                logger.error(f"Checker error for block {block.location()}: {e}")
                outcome = CheckOutcome.failed(FailureKind.INTERNAL_ERROR, str(e) or type(e).__name__)

        if outcome.status == VerificationStatus.FAILED:
            logger.debug(f"Block {block.location()} failed: {outcome.failure.value}")

        return VerificationResult.from_outcome(block, outcome, duration=max(0.0, loop.time() - started))
