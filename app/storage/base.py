"""
Result sink interface for categorization outcomes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from llm_classification.schema import Classification


class ResultSink(ABC):
    """
    Destination for accepted classifications and failed domains.
    """

    @abstractmethod
    async def record_success(self, classification: Classification) -> None:
        """
        Queue one accepted classification for persistence.
        """

    @abstractmethod
    async def record_failure(self, domain: str) -> None:
        """
        Queue one failed domain for persistence.
        """
