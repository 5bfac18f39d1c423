"""
Block classifier
Groups code blocks by language tag
"""

from typing import Dict, Iterable, List

from snipcheck.document.schema import CodeBlock


UNTAGGED = "untagged"


def language_key(tag: str) -> str:
    """Normalized group key for a language tag"""
    tag = tag.strip().lower()
    return tag or UNTAGGED


def classify(blocks: Iterable[CodeBlock]) -> Dict[str, List[CodeBlock]]:
    """
    Group blocks by case-insensitive language tag

    Groups appear in order of first appearance. Within a group blocks keep
    document order. Blocks without a tag are grouped under UNTAGGED.
    """
    groups: Dict[str, List[CodeBlock]] = {}
    for block in blocks:
        groups.setdefault(language_key(block.language), []).append(block)
    return groups


def flatten(groups: Dict[str, List[CodeBlock]]) -> List[CodeBlock]:
    """Inverse of classify: all blocks back in document order"""
    return sorted(
        (block for group in groups.values() for block in group),
        key=lambda block: block.index,
    )
