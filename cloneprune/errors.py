"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""


class ClonePruneError(Exception):
    """Base exception for ClonePrune."""


class FileProcessingError(ClonePruneError):
    """Error processing a source file."""


class ParseError(FileProcessingError):
    """AST parsing failed."""


class ValidationError(ClonePruneError):
    """Input validation failed."""


class UnitContractError(ClonePruneError):
    """Compilation unit violates a precondition of the pass."""
