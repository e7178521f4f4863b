"""Registry loading result object.

This module defines a standard result object for document loading operations,
so that "no local copy" and "corrupt local copy" stay distinguishable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .document import RegistryDocument


class LoadStatus(Enum):
    """Outcome of a load operation."""

    LOADED = "loaded"
    ABSENT = "absent"
    ERROR = "error"


@dataclass
class LoadResult:
    """Result of a registry loading operation.

    Attributes:
        status: Whether a document was loaded, was absent, or failed to load
        document: The loaded document (if status is LOADED)
        error: Error message (if status is ERROR or ABSENT)
        exception: Original exception (if an error occurred)
        path: Path or URL the document was loaded from (if applicable)
    """

    status: LoadStatus
    document: Optional["RegistryDocument"] = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    path: Optional[str] = None

    @property
    def success(self) -> bool:
        """Whether a document was loaded."""
        return self.status is LoadStatus.LOADED

    @classmethod
    def loaded(cls, document: "RegistryDocument", path: Optional[str] = None) -> "LoadResult":
        return cls(status=LoadStatus.LOADED, document=document, path=path)

    @classmethod
    def absent(cls, message: str, path: Optional[str] = None) -> "LoadResult":
        return cls(status=LoadStatus.ABSENT, error=message, path=path)

    @classmethod
    def failed(cls, exception: Exception, path: Optional[str] = None) -> "LoadResult":
        return cls(status=LoadStatus.ERROR, error=str(exception), exception=exception, path=path)
