"""
Abstract base client for LLM tagging.

Defines the interface that tagging clients must adhere to, so the API
layer can be wired to any completion provider.
"""

from abc import ABC, abstractmethod
import structlog

from doc_tagger.models.llm_models import LLMModelInfo


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for tagging clients.

    Responsibilities:
    - Send one completion request per tagging call
    - Parse the reply into a flat list of tags
    - Classify every failure into a TaggingError subclass

    Does NOT handle:
    - Prompt wording (that's PromptBuilder's job)
    - Retries: every failure is terminal for the call
    """

    def __init__(self, model_info: LLMModelInfo, api_key: str):
        """
        Initialize base client.

        Args:
            model_info: Model identifier and capabilities
            api_key: API key for the completion endpoint
        """
        self.model_info = model_info
        self.api_key = api_key

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            model_id=model_info.model_id,
            tool_use=model_info.tool_use,
        )

    @property
    def model_name(self) -> str:
        return self.model_info.model_id

    @abstractmethod
    async def generate_tags(self, document_text: str) -> list[str]:
        """
        Tag a document.

        Args:
            document_text: Raw document text

        Returns:
            Flat list of '#'-prefixed tags (existing tags first, then new ones)

        Raises:
            TaggingError: Any failure, classified into its kind
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the completion endpoint is reachable with the configured key.

        Returns:
            True if healthy, False otherwise

        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass

    async def close(self):
        """
        Close client connections and cleanup resources.

        Default implementation does nothing.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model_id={self.model_info.model_id}, "
            f"tool_use={self.model_info.tool_use})"
        )
