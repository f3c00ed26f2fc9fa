# In src/legal_licenses/dependency.py
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class DependencyRecord:
    """One locked dependency as declared in the manifest."""

    name: str
    version: str
    source_url: Optional[str] = None
    source_reference: Optional[str] = None
    licenses: Tuple[str, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    homepage: Optional[str] = None
    dev: bool = False
