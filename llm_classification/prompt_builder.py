"""Classification prompt builder."""

from llm_classification.categories import category_prompt

_INSTRUCTIONS = (
    "Please categorize this domain with a single keyword in English. "
    "Do not elaborate, do not explain or otherwise enhance the answer."
)


class CategoryPromptBuilder:
    """Builds the single-keyword classification prompt for one domain.

    The prompt holds the fixed instructions, the allow-list sentence, the
    domain name and the keyword digest, in that order.
    """

    def __init__(self) -> None:
        self._allowed_list = category_prompt()

    def build_prompt(self, domain: str, keywords: str) -> str:
        """Build the prompt for ``domain``.

        Args:
            domain: Normalized domain name.
            keywords: Space-joined keyword digest of the homepage.

        Returns:
            The prompt string sent to the completion service.
        """
        return (
            f"{_INSTRUCTIONS}\n\n"
            f"{self._allowed_list}. "
            f"The domain is: {domain}. "
            f"Here are some items from the website: {keywords}"
        )
