"""Base classes for source parser backends."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import DeclarationNode


class ParseError(RuntimeError):
    """Raised when a source file cannot be turned into a declaration tree."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class SourceParser(ABC):
    """Contract for backends that turn one source file into a declaration tree."""

    name: str = ""
    language: str = ""

    @abstractmethod
    def supports(self, path: Path) -> bool:
        """Return True when this parser understands the file at ``path``."""

    @abstractmethod
    def parse(self, path: Path) -> DeclarationNode:
        """Return the declaration tree for ``path`` or raise :class:`ParseError`."""
