import logging
from typing import Dict, List, Optional

import ollama
from openai import OpenAI

logger = logging.getLogger(__name__)


class LLMResponse:
    """A simple dataclass to structure the response from an LLM call."""
    def __init__(self, success: bool, content: Optional[str] = None, error: Optional[str] = None):
        self.success = success
        self.content = content
        self.error = error

    def __repr__(self) -> str:
        if self.success:
            return f"LLMResponse(success=True, content='{(self.content or '')[:50]}...')"
        return f"LLMResponse(success=False, error='{self.error}')"


class LLMProvider:
    """Provides an interface for interacting with different LLM backends (OpenAI, Ollama).

    Model names starting with ``openai-`` go to OpenAI with the prefix stripped,
    everything else is sent to a local Ollama server.
    """

    def __init__(self, model_name: str, temperature: float = 0.4, max_tokens: int = 200,
                 timeout: float = 20.0, api_key: Optional[str] = None):
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.use_openai = model_name.startswith("openai-")
        self.client = None

        if self.use_openai:
            self._setup_openai(api_key)
        else:
            self._setup_ollama()

    @property
    def backend(self) -> str:
        return "openai" if self.use_openai else "ollama"

    def _setup_openai(self, api_key: Optional[str]):
        """Initializes the OpenAI client."""
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not set for OpenAI models.")
        self.client = OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)
        logger.info(f"Using OpenAI model: {self.model_name}")

    def _setup_ollama(self):
        """Creates the Ollama client; the model is checked lazily on first use."""
        self.client = ollama.Client(timeout=self.timeout)
        logger.info(f"Using Ollama model: {self.model_name}")

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Generates a response from the configured LLM.
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        try:
            if self.use_openai:
                return self._generate_openai(messages)
            else:
                return self._generate_ollama(messages)
        except Exception as e:
            logger.error(f"An unexpected error occurred during LLM generation: {e}", exc_info=True)
            return LLMResponse(success=False, error=str(e))

    def _generate_openai(self, messages: List[Dict[str, str]]) -> LLMResponse:
        """Sends a request to the OpenAI API."""
        if not self.client:
            return LLMResponse(success=False, error="OpenAI client not initialized.")

        # Extract the model name without the 'openai-' prefix for the API call
        actual_model = self.model_name.replace("openai-", "", 1)
        response = self.client.chat.completions.create(
            model=actual_model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content
        return LLMResponse(success=True, content=content)

    def _generate_ollama(self, messages: List[Dict[str, str]]) -> LLMResponse:
        """Sends a request to the Ollama backend."""
        response = self.client.chat(
            model=self.model_name,
            messages=messages,
            options={"temperature": self.temperature, "num_predict": self.max_tokens},
        )
        content = response["message"]["content"]
        return LLMResponse(success=True, content=content)
