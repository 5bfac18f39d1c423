"""
Pytest configuration and fixtures for SnipCheck test suite
Provides sample documents, fake checkers and test utilities
"""

import asyncio
import shlex
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Tuple

import pytest
from loguru import logger

from snipcheck.config import Config, VerifierConfig
from snipcheck.verifier.types import CheckOutcome


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Tests spawning real subprocesses")
    config.addinivalue_line("markers", "requires_gcc: Tests requiring gcc on PATH")


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to streams captured by a previous test"""
    yield
    logger.remove()


# ==================== Configuration Fixtures ====================

@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def python_command() -> str:
    """Syntax check command using the running interpreter"""
    return f"{shlex.quote(sys.executable)} -m py_compile {{file}}"


@pytest.fixture
def test_config(python_command):
    """Configuration with only the interpreter-backed python toolchain"""
    return Config(
        log_level="DEBUG",
        verifier=VerifierConfig(workers=2, timeout=30),
        toolchains={"python": {"command": python_command, "suffix": ".py"}},
    )


# ==================== Document Fixtures ====================

@pytest.fixture
def sample_guide() -> str:
    """A small guide with sections and several fenced blocks"""
    return (
        "# C Guide\n"
        "\n"
        "Intro text.\n"
        "\n"
        "## Hello\n"
        "\n"
        "```c\n"
        "int main(void) { return 0; }\n"
        "```\n"
        "\n"
        "## Python\n"
        "\n"
        "```Python\n"
        "print('hi')\n"
        "```\n"
        "\n"
        "```\n"
        "plain text\n"
        "```\n"
        "\n"
        "### Debugging\n"
        "\n"
        "```C\n"
        "# not a heading\n"
        "int x;\n"
        "```\n"
    )


@pytest.fixture
def python_guide() -> str:
    """Guide with one valid and one broken python block"""
    return (
        "# Python\n"
        "\n"
        "```python\n"
        "x = 1\n"
        "```\n"
        "\n"
        "## Broken\n"
        "\n"
        "```python\n"
        "def f(:\n"
        "```\n"
        "\n"
        "```cobol\n"
        "DISPLAY 'HI'.\n"
        "```\n"
    )


# ==================== Checker Fixtures ====================

class FakeChecker:
    """Deterministic checker: fails any source containing a marker"""

    def __init__(self, fail_marker: str = "BROKEN", delay: float = 0.0,
                 delays: Dict[str, float] = None, raise_marker: str = "CRASH"):
        self.fail_marker = fail_marker
        self.raise_marker = raise_marker
        self.delay = delay
        self.delays = delays or {}
        self.calls: List[Tuple[str, str]] = []
        self.active = 0
        self.max_active = 0

    async def __call__(self, tag: str, source: str) -> CheckOutcome:
        self.calls.append((tag, source))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            delay = next((d for key, d in self.delays.items() if key in source), self.delay)
            if delay:
                await asyncio.sleep(delay)
            if self.raise_marker in source:
                raise RuntimeError("checker exploded")
            if self.fail_marker in source:
                return CheckOutcome.syntax_error(f"{tag}: syntax error")
            return CheckOutcome.passed()
        finally:
            self.active -= 1


@pytest.fixture
def fake_checker():
    """Fake checker factory"""
    return FakeChecker
