"""Prompt bundle models.

This module defines the prompt data structures that are passed to the LLM
gateway, providing a unified interface for different provider formats.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Single message in LLM conversation."""

    role: str = Field(
        ..., description="Message role: 'system', 'user', or 'assistant'"
    )
    content: str = Field(..., description="Message content")


class PromptBundle(BaseModel):
    """Complete prompt package ready for LLM.

    Contains all information needed to make an LLM API call except the
    safety configuration, which the gateway owns.
    """

    messages: List[Message] = Field(..., description="Conversation messages")

    # Metadata for logging
    purpose: str = Field(default="chapter", description="'chapter' or 'titles'")

    @classmethod
    def from_instruction(
        cls, system_instruction: str, content: str, purpose: str = "chapter"
    ) -> "PromptBundle":
        """Build a two-message bundle: system instruction plus payload."""
        return cls(
            messages=[
                Message(role="system", content=system_instruction),
                Message(role="user", content=content),
            ],
            purpose=purpose,
        )

    @property
    def system_prompt(self) -> Optional[str]:
        """Extract system prompt from messages."""
        for msg in self.messages:
            if msg.role == "system":
                return msg.content
        return None

    @property
    def user_prompt(self) -> Optional[str]:
        """Extract user prompt from messages."""
        for msg in self.messages:
            if msg.role == "user":
                return msg.content
        return None

    def to_openai_format(self) -> List[Dict[str, str]]:
        """Convert to OpenAI API message format (what LiteLLM expects).

        Returns:
            List of message dicts with 'role' and 'content' keys
        """
        return [{"role": m.role, "content": m.content} for m in self.messages]
