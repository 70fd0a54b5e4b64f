"""Domain classifier: prompt, complete, validate."""

import logging
from typing import Optional

from app.domain.categorization import KeywordDigest
from app.scraping.logging_utils import log_event
from llm_classification.adapter import BaseCompletionAdapter
from llm_classification.prompt_builder import CategoryPromptBuilder
from llm_classification.schema import Classification
from llm_classification.validator import validate_category_response

logger = logging.getLogger(__name__)


class CategoryClassifier:
    """Assigns one allow-list category to a domain from its keyword digest."""

    def __init__(
        self,
        adapter: BaseCompletionAdapter,
        prompt_builder: Optional[CategoryPromptBuilder] = None,
    ) -> None:
        self._adapter = adapter
        self._prompt_builder = prompt_builder or CategoryPromptBuilder()

    async def classify(self, domain: str, digest: KeywordDigest) -> Classification:
        """Classify ``domain`` in a single completion call.

        Raises:
            CompletionError: If the completion call itself fails.
            CategoryValidationError: If the answer is rejected.
        """
        prompt = self._prompt_builder.build_prompt(domain, digest.text)
        response = await self._adapter.complete(prompt)
        log_event(
            logger,
            logging.DEBUG,
            "completion_received",
            domain=domain,
            response=response,
        )
        return validate_category_response(domain, response)
