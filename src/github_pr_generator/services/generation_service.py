"""
Generation service for the GitHub PR Generator.

Builds a single prompt from the whole codebase and the user's change request,
calls the chat model once, and separates the model's reasoning trace from
its answer.
"""

import asyncio
import re
from loguru import logger
from typing import Any, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from ..config import Config
from ..constants import REASONING, SYSTEM_INSTRUCTIONS
from ..exceptions import GenerationError
from ..models import GenerationResult, RepoFile

_THINK_PATTERN = re.compile(
    rf"<{REASONING.TAG_NAME}>(.*?)</{REASONING.TAG_NAME}>", re.DOTALL
)


class GenerationService:
    """Service that asks the language model for repository changes."""

    def __init__(self, config: Config, llm: Optional[BaseChatModel] = None):
        """
        Initialize generation service.

        Args:
            config: Configuration instance
            llm: Optional chat model; built from config on first use otherwise
        """
        self.config = config
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        """Get or create the chat model."""
        if self._llm is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            # Thoughts come back as "thinking" content parts; failed calls are not retried
            self._llm = ChatGoogleGenerativeAI(
                model=self.config.llm_model,
                temperature=self.config.llm_temperature,
                google_api_key=self.config.google_api_key,
                include_thoughts=True,
                max_retries=0,
            )
        return self._llm

    @staticmethod
    def build_codebase_context(files: List[RepoFile]) -> str:
        """Render every file as a `path:\\ncontent` block, blank-line separated."""
        return "\n\n".join(f"{f.path}:\n{f.content}" for f in files)

    def build_messages(self, files: List[RepoFile], requirement: str) -> List[BaseMessage]:
        """System message with instructions and codebase, user message with the request."""
        codebase_context = self.build_codebase_context(files)
        logger.debug(f"Codebase context:\n{codebase_context}")
        return [
            SystemMessage(content=SYSTEM_INSTRUCTIONS.format(codebase_context=codebase_context)),
            HumanMessage(content=requirement),
        ]

    async def generate_changes(self, files: List[RepoFile], requirement: str) -> GenerationResult:
        """
        Ask the model for changes implementing the requirement.

        Args:
            files: Every file of the repository
            requirement: Free-text change request

        Returns:
            The model's answer text and its reasoning trace

        Raises:
            GenerationError: If the model call fails
        """
        messages = self.build_messages(files, requirement)
        logger.info(f"Requesting changes from {self.config.llm_model} ({len(files)} files in context)")

        try:
            response = await asyncio.to_thread(self.llm.invoke, messages)
        except Exception as e:
            raise GenerationError(
                f"Language model call failed: {str(e)}",
                model=self.config.llm_model,
                requirement=requirement,
                cause=e
            )

        content = response.content if hasattr(response, "content") else str(response)
        result = extract_reasoning(content)
        logger.info(
            f"Model returned {len(result.text)} characters "
            f"({len(result.reasoning)} characters of reasoning)"
        )
        return result


def extract_reasoning(content: Any) -> GenerationResult:
    """
    Split a model reply into answer text and reasoning trace.

    Handles both reasoning returned as separate content parts (type
    "thinking"/"reasoning") and reasoning embedded as <think> tags in the
    text. Tagged segments are removed from the answer.
    """
    reasoning_parts: List[str] = []

    if isinstance(content, list):
        text_parts: List[str] = []
        for part in content:
            if isinstance(part, str):
                text_parts.append(part)
            elif isinstance(part, dict):
                part_type = part.get("type")
                if part_type in REASONING.PART_TYPES:
                    reasoning_parts.append(part.get(part_type) or part.get("text") or "")
                elif part_type == "text":
                    text_parts.append(part.get("text", ""))
        text = "".join(text_parts)
    else:
        text = str(content)

    reasoning_parts.extend(_THINK_PATTERN.findall(text))
    text = _THINK_PATTERN.sub("", text)

    reasoning = "\n\n".join(p.strip() for p in reasoning_parts if isinstance(p, str) and p.strip())
    return GenerationResult(text=text.strip(), reasoning=reasoning)
