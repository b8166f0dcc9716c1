"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Orchestrates domain services for one request model."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        """Run the use case and return its response model."""
        pass
