"""
Toolchain registry
Maps language tags to external syntax-check commands
"""

import shlex
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from snipcheck.classifier import UNTAGGED, language_key
from snipcheck.config import ToolchainSpec


SpecLike = Union[str, Dict[str, Any], ToolchainSpec]


def _as_spec(spec: SpecLike) -> ToolchainSpec:
    if isinstance(spec, ToolchainSpec):
        return spec
    if isinstance(spec, dict):
        return ToolchainSpec(**spec)
    return ToolchainSpec(command=spec)


def parse_override(value: str) -> Tuple[str, ToolchainSpec]:
    """
    Parse a `TAG=COMMAND` override

    Raises:
        ValueError: value has no `=` or an empty tag/command
    """
    tag, sep, command = value.partition("=")
    tag, command = tag.strip(), command.strip()
    if not sep or not tag or not command:
        raise ValueError(f"Expected TAG=COMMAND, got: {value!r}")
    return tag.lower(), ToolchainSpec(command=command)


def build_argv(spec: ToolchainSpec, file_path: Optional[str] = None) -> List[str]:
    """Split the command template and substitute {file}"""
    argv = shlex.split(spec.command)
    if not argv:
        raise ValueError(f"Empty toolchain command: {spec.command!r}")
    if spec.uses_file:
        if file_path is None:
            raise ValueError(f"Command {spec.command!r} needs a file path")
        argv = [arg.replace("{file}", file_path) for arg in argv]
    return argv


class ToolchainRegistry:
    """Language tag -> ToolchainSpec, looked up case-insensitively"""

    def __init__(self, toolchains: Optional[Mapping[str, SpecLike]] = None):
        self._toolchains: Dict[str, ToolchainSpec] = {}
        for tag, spec in (toolchains or {}).items():
            self.register(tag, spec)

    def register(self, tag: str, spec: SpecLike) -> None:
        key = language_key(tag)
        if key == UNTAGGED:
            raise ValueError("Untagged blocks cannot have a toolchain")
        self._toolchains[key] = _as_spec(spec)

    def get(self, tag: str) -> Optional[ToolchainSpec]:
        return self._toolchains.get(language_key(tag))

    def supports(self, tag: str) -> bool:
        return self.get(tag) is not None

    def tags(self) -> List[str]:
        return sorted(self._toolchains)

    def merged(self, overrides: Iterable[Tuple[str, SpecLike]]) -> "ToolchainRegistry":
        """
        New registry with overrides applied on top of this one

        An override without a suffix keeps the suffix of the entry it replaces.
        """
        merged = ToolchainRegistry(self._toolchains)
        for tag, spec in overrides:
            spec = _as_spec(spec)
            previous = merged.get(tag)
            if spec.suffix is None and previous is not None and previous.suffix:
                spec = spec.model_copy(update={"suffix": previous.suffix})
            merged.register(tag, spec)
        return merged

    def to_dict(self) -> Dict[str, str]:
        return {tag: self._toolchains[tag].command for tag in self.tags()}

    def __contains__(self, tag: str) -> bool:
        return self.supports(tag)

    def __len__(self) -> int:
        return len(self._toolchains)
