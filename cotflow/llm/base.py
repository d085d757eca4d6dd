"""
Model abstraction layer - request/response contract of a remote model.

Responsibilities:
- Accept a flat parameter map (``prompt``, ``stop``, generation options)
- Return the tensor-like result whose first block carries ``data["response"]``

Does NOT handle:
- The reasoning loop
- Prompt composition
"""

from abc import ABC, abstractmethod

from cotflow.domain.output import ExecutionResult


class ModelClient(ABC):
    """Unified entry point for model predictions."""

    @abstractmethod
    async def predict(self, model_id: str, parameters: dict[str, str]) -> ExecutionResult:
        """
        Run one prediction.

        Args:
            model_id: Target model identifier
            parameters: Flat string parameter map

        Returns:
            ExecutionResult whose first block holds ``data["response"]``
        """

    async def close(self) -> None:
        """Release client resources."""
        return None


__all__ = ["ModelClient"]
