from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based
    entry_index: Optional[int] = None  # 0-based position among a file's associations


def source_from_node(file_path: Any, node: Any, entry_index: Optional[int] = None) -> SourceLocation:
    """Create a SourceLocation from a parsed s-expression node carrying line/column."""
    return SourceLocation(
        file_path=Path(file_path) if file_path is not None else None,
        line=getattr(node, "line", None),
        column=getattr(node, "column", None),
        entry_index=entry_index,
    )


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc or loc.file_path is None:
        return ""

    if loc.line is not None and loc.column is not None:
        return f"{loc.file_path}:{loc.line}:{loc.column}"
    if loc.line is not None:
        return f"{loc.file_path}:{loc.line}"
    return str(loc.file_path)
