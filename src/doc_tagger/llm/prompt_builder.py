"""
Prompt builder for tagging requests.

Responsible for:
- Loading and rendering Jinja2 templates (system + user prompts)
- Embedding the tag catalog in the system prompt
- Embedding the document in the user prompt
- Producing the two chat messages sent to the completion endpoint
"""

from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader
import structlog

from doc_tagger.models.llm_models import ChatMessage


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "prompts"

SYSTEM_TEMPLATE_NAME = "system_prompt.txt"
USER_TEMPLATE_NAME = "user_prompt_template.txt"


class PromptBuilder:
    """
    Build the system + user messages for a tagging call.

    Both templates are plain substitution: the catalog and the document
    end up in the rendered text exactly as given.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing system_prompt.txt and
                user_prompt_template.txt (default: packaged prompts)
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # We're generating prompts, not HTML
        )

        try:
            self.system_template = self.jinja_env.get_template(SYSTEM_TEMPLATE_NAME)
            self.user_template = self.jinja_env.get_template(USER_TEMPLATE_NAME)
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_system_prompt(self, tags_string: str, tool_use: bool = True) -> str:
        """
        Render the system prompt with the tag catalog.

        Args:
            tags_string: Tag catalog as a single block (one tag per line)
            tool_use: Whether the reply is forced through the tag_document
                function; without it the prompt also asks for a JSON reply

        Returns:
            Rendered system prompt
        """
        return self.system_template.render(tags_string=tags_string, tool_use=tool_use).strip()

    def build_user_prompt(self, document: str) -> str:
        """Render the user prompt wrapping the document text."""
        return self.user_template.render(document=document).strip()

    def build_messages(
        self,
        tags_string: str,
        document: str,
        tool_use: bool = True,
    ) -> list[ChatMessage]:
        """
        Build the [system, user] message pair.

        Args:
            tags_string: Tag catalog block
            document: Document text to tag
            tool_use: See build_system_prompt()

        Returns:
            List with the system message followed by the user message
        """
        system_prompt = self.build_system_prompt(tags_string, tool_use=tool_use)
        user_prompt = self.build_user_prompt(document)

        logger.debug(
            "Prompt built",
            system_prompt_length=len(system_prompt),
            user_prompt_length=len(user_prompt),
            tool_use=tool_use,
        )

        return [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ]
