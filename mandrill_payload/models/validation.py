"""
ValidationResult - encapsulates payload schema validation outcome.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ValidationResult:
    """Result of checking an assembled payload against its JSON Schema."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    data: Optional[dict] = None
