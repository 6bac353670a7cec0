"""Character snapshot document and the remote persistence client."""

from .document import CharacterDocument, parse_document, validate_document
from .store import CharacterStore

__all__ = [
    "CharacterDocument",
    "CharacterStore",
    "parse_document",
    "validate_document",
]
