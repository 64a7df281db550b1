from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """
    Forme uniforme `{data, error}` rendue par les stores.
    L'appelant vérifie `error` ; les stores ne lèvent jamais vers la vue.
    """
    data: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        if self.error is None:
            return None
        return getattr(self.error, "message", None) or str(self.error)

    @classmethod
    def success(cls, data: Any = None) -> "Result":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: Exception) -> "Result":
        return cls(data=None, error=error)
