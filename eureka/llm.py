import json
import logging
import re
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from google import genai
from google.genai import types
from pydantic import ValidationError

from eureka.config import DEFAULT_MODEL, DEFAULT_TOP_P, get_api_key, model_chain
from eureka.models import ChatMessage, IdeaRecord
from eureka.prompts.loader import get_prompts

logger = logging.getLogger(__name__)

# Chat roles as understood by the Gemini API
_ROLE_MAP = {"user": "user", "assistant": "model", "model": "model"}

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class LLMUnavailableError(RuntimeError):
    """Raised when every model in the chain failed to answer."""


@dataclass
class AssistantReply:
    reply: str
    model_used: str


class LLMWrapper(ABC):
    """Base class for LLM interactions"""
    MAX_TOKENS = 8192

    def __init__(self,
                 provider: str = "google_generative_ai",
                 model_name: str = DEFAULT_MODEL,
                 temperature: float = 0.7,
                 agent_name: str = "",
                 api_key: Optional[str] = None):
        self.provider = provider
        self.model_name = model_name
        self.temperature = temperature
        self.total_token_count = 0
        self.input_token_count = 0
        self.output_token_count = 0
        self.agent_name = agent_name
        self.api_key = api_key
        self.client = None
        print(f"Initializing {agent_name or 'LLM'} with temperature: {temperature}")
        self._setup_provider()

    def _setup_provider(self):
        if self.provider == "google_generative_ai":
            self.client = genai.Client(api_key=self.api_key or get_api_key())
        else:
            raise ValueError(f"Unsupported LLM provider: {self.provider}")

    def generate_text(self,
                      contents: Any,
                      system_instruction: Optional[str] = None,
                      temperature: Optional[float] = None,
                      model_name: Optional[str] = None,
                      json_output: bool = False) -> str:
        """Generate a single completion. Errors from the provider propagate."""
        config = self._get_generation_config(temperature, system_instruction, json_output)
        response = self.client.models.generate_content(
            model=model_name or self.model_name,
            contents=contents,
            config=config,
        )
        self._track_usage(response)
        return response.text or ""

    def _track_usage(self, response) -> None:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return
        self.total_token_count += usage.total_token_count or 0
        self.input_token_count += usage.prompt_token_count or 0
        self.output_token_count += usage.candidates_token_count or 0
        print(f"Total tokens {self.agent_name}: {self.total_token_count} (Input: {self.input_token_count}, Output: {self.output_token_count})")

    def _get_generation_config(self,
                               temperature: Optional[float],
                               system_instruction: Optional[str] = None,
                               json_output: bool = False) -> types.GenerateContentConfig:
        actual_temp = temperature if temperature is not None else self.temperature
        config: Dict[str, Any] = {
            "temperature": actual_temp,
            "top_p": DEFAULT_TOP_P,
            "max_output_tokens": self.MAX_TOKENS,
        }
        if system_instruction:
            config["system_instruction"] = system_instruction
        if json_output:
            config["response_mime_type"] = "application/json"
        return types.GenerateContentConfig(**config)


class IdeaAssistant(LLMWrapper):
    """
    Chat assistant for Eureka pitch ideas.

    Each reply walks an ordered chain of model ids; the first model that
    answers wins and the rest are never called.
    """
    agent_name = "IdeaAssistant"

    def __init__(self, models: Optional[Sequence[str]] = None, template: str = "eureka", **kwargs):
        self.prompts = get_prompts(template)
        self.models = list(models) if models else model_chain()
        kwargs.setdefault("temperature", self.prompts.TEMPERATURE)
        kwargs.setdefault("model_name", self.models[0])
        super().__init__(agent_name=self.agent_name, **kwargs)

    @staticmethod
    def to_contents(messages: Sequence[ChatMessage]) -> List[types.Content]:
        """Convert chat turns to Gemini contents. System turns are handled separately."""
        return [
            types.Content(role=_ROLE_MAP[m.role], parts=[types.Part(text=m.content)])
            for m in messages
            if m.role != "system"
        ]

    def _system_instruction(self, messages: Sequence[ChatMessage]) -> str:
        extra = [m.content.strip() for m in messages if m.role == "system" and m.content.strip()]
        return "\n\n".join([self.prompts.SYSTEM_PROMPT, *extra])

    def chat(self, messages: Sequence[ChatMessage], json_output: bool = False) -> AssistantReply:
        """
        Send the conversation to each model in turn.

        Raises:
            ValueError: if the conversation has no user/assistant turns
            LLMUnavailableError: if every model failed
        """
        contents = self.to_contents(messages)
        if not contents:
            raise ValueError("Conversation is empty")
        system_instruction = self._system_instruction(messages)

        last_error: Optional[Exception] = None
        for model_name in self.models:
            try:
                reply = self.generate_text(
                    contents,
                    system_instruction=system_instruction,
                    model_name=model_name,
                    json_output=json_output,
                )
                return AssistantReply(reply=reply, model_used=model_name)
            except Exception as e:
                logger.error(f"Model {model_name} failed: {e}")
                last_error = e

        raise LLMUnavailableError(str(last_error)) from last_error

    def structure_idea(self, title: str, messages: Sequence[ChatMessage],
                       notes: Optional[List[str]] = None) -> IdeaRecord:
        """
        Ask the model for a JSON idea record about `title`.
        Falls back to a title-only record when the reply is not usable JSON.
        """
        conversation = [*messages, ChatMessage(role="user", content=self.prompts.structure_prompt(title))]
        result = self.chat(conversation, json_output=True)

        data = parse_json_reply(result.reply)
        idea = None
        if isinstance(data, dict):
            data.setdefault("title", title)
            try:
                idea = IdeaRecord.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Structured idea did not validate: {e}")
        if idea is None:
            idea = IdeaRecord(title=title)
        if notes:
            idea = idea.model_copy(update={"notes": list(notes)})
        return idea


def parse_json_reply(text: str) -> Optional[Any]:
    """Parse a model reply that should be JSON, tolerating ```json fences."""
    if not text:
        return None
    match = _JSON_FENCE_RE.search(text)
    candidate = match.group(1) if match else text
    try:
        return json.loads(candidate.strip())
    except json.JSONDecodeError:
        pass
    # Last resort: outermost object in the reply
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        return json.loads(candidate[start:end + 1])
    except json.JSONDecodeError:
        return None
