"""Completion API configuration with environment variable loading.

Pydantic-based configuration for the Gemini generateContent client.
Credentials and model identifier come from the environment (or a .env file);
generation parameters are fixed defaults that users cannot adjust.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from pdf_chatbot.models.schemas import GenerationConfig

# Load environment variables from .env file
load_dotenv()


class CompletionConfig(BaseModel):
    """Configuration for the Gemini completion client.

    Attributes:
        api_key: API key for the Generative Language API.
        base_url: API base URL including the version segment.
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        top_p: Nucleus-sampling threshold.
        top_k: Top-k cutoff.
        max_output_tokens: Maximum tokens in generated response.
        timeout: HTTP timeout in seconds for a single request.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", "")),
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ),
        description="Gemini API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    top_p: float = Field(default=0.95, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1)
    max_output_tokens: int = Field(
        default=8192,
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )
    timeout: float = Field(default=120.0, gt=0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or GOOGLE_API_KEY in .env")
        return v.strip()

    @property
    def generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            max_output_tokens=self.max_output_tokens,
        )


def get_completion_config() -> CompletionConfig:
    """Create completion configuration from environment.

    Returns:
        Configured CompletionConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return CompletionConfig()
