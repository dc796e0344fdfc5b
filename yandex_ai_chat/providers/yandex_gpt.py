"""YandexGPT API client for text completion."""

from typing import Optional, Union
import httpx

from .base import BaseProvider
from ..models.enums import Instruction
from ..utils.config import TextGenerationConfig
from ..utils.deadline import Deadline
from ..utils.errors import ProtocolError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


SYSTEM_INSTRUCTIONS = {
    Instruction.CODE: (
        "You are an expert software engineer. Generate clean, well-structured, production-ready code. "
        "Include only the code and brief inline comments. No extra explanation unless asked."
    ),
    Instruction.REFACTOR: (
        "You are an expert code reviewer. Optimize the provided code for performance, readability, "
        "and best practices. Return only the improved code."
    ),
    Instruction.EXPLANATION: (
        "You are a senior developer mentor. Explain the provided code in clear, simple language. "
        "Describe what each part does and why."
    ),
    Instruction.SECURITY: (
        "You are a cybersecurity expert. Analyze the code for security vulnerabilities, "
        "injection risks, and bad practices. List each issue with severity and recommended fix."
    ),
    Instruction.DOCUMENTATION: (
        "You are a technical writer. Add clear, helpful comments and documentation to the code. "
        "Use the language's standard documentation style (XML docs for C#, JSDoc for JS, etc.)."
    ),
    Instruction.PLANNING: (
        "You are a software architect and project planner. Create a structured development plan "
        "for the described feature or project. Include: goal summary, breakdown of tasks with priorities, "
        "suggested architecture and file structure, and milestones. Use numbered lists and clear headings."
    ),
    Instruction.BUGFIX: (
        "You are an expert debugger. Analyze the provided code or error description, identify all bugs, "
        "warnings, and potential issues. For each issue state: location, root cause, severity, and the "
        "corrected code snippet. Also explain how to prevent similar issues in the future."
    ),
    Instruction.SUGGEST: (
        "You are a senior software architect. Given the problem description, recommend the best tools, "
        "libraries, design patterns, and implementation methods. Explain why each is appropriate, "
        "provide short usage examples, and generate a reusable helper method or utility tailored to the task."
    ),
    Instruction.GENERAL: "You are a helpful AI assistant specialized in software development.",
}


def resolve_instruction(instruction: Union[Instruction, str, None]) -> Instruction:
    """Map a raw instruction value to the enum, defaulting to GENERAL."""
    if isinstance(instruction, Instruction):
        return instruction
    try:
        return Instruction((instruction or "").strip().lower())
    except ValueError:
        return Instruction.GENERAL


def get_system_message(instruction: Union[Instruction, str, None]) -> str:
    """System message for an instruction; unknown values get the general one."""
    return SYSTEM_INSTRUCTIONS.get(
        resolve_instruction(instruction),
        SYSTEM_INSTRUCTIONS[Instruction.GENERAL],
    )


class YandexGPTClient(BaseProvider):
    """Client for the YandexGPT completion API."""

    provider_name = "yandexgpt"

    def __init__(
        self,
        api_key: str,
        folder_id: str,
        timeout: float = 120.0,
        settings: Optional[TextGenerationConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize YandexGPT client.

        Args:
            api_key: Yandex Cloud API key
            folder_id: Cloud folder id embedded in the model URI
            timeout: Request timeout in seconds
            settings: Endpoint and decoding parameters
            transport: Optional httpx transport
        """
        self.settings = settings or TextGenerationConfig()
        super().__init__(
            api_key=api_key,
            base_url=self.settings.endpoint,
            timeout=timeout,
            transport=transport,
        )
        self.folder_id = folder_id

    def _get_default_headers(self) -> dict:
        return {
            "Authorization": f"Api-Key {self.api_key}",
            "Content-Type": "application/json",
        }

    @property
    def model_uri(self) -> str:
        return f"gpt://{self.folder_id}/{self.settings.model}/latest"

    def build_payload(self, prompt: str, instruction: Union[Instruction, str, None]) -> dict:
        """Request body for one non-streaming completion."""
        return {
            "modelUri": self.model_uri,
            "completionOptions": {
                "stream": False,
                "temperature": self.settings.temperature,
                "maxTokens": str(self.settings.max_tokens),
            },
            "messages": [
                {"role": "system", "text": get_system_message(instruction)},
                {"role": "user", "text": prompt},
            ],
        }

    async def complete(
        self,
        prompt: str,
        instruction: Union[Instruction, str, None] = Instruction.GENERAL,
        deadline: Optional[Deadline] = None,
    ) -> str:
        """
        Send a prompt to YandexGPT and return the generated text.

        Exactly one request is issued; there is no retry.

        Args:
            prompt: User prompt
            instruction: Which system instruction to use
            deadline: Optional caller deadline

        Returns:
            Generated text

        Raises:
            ValidationError: Prompt is empty
            RemoteServiceError: Non-success status or transport failure
            ProtocolError: Response lacks result.alternatives[0].message.text
            TimeoutError: Request or deadline timed out
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt cannot be empty.")

        resolved = resolve_instruction(instruction)
        payload = self.build_payload(prompt, resolved)

        logger.info(
            "Sending completion request",
            extra={
                "instruction": resolved.value,
                "model_uri": self.model_uri,
                "prompt_length": len(prompt),
            }
        )

        response = await self._request(
            "POST",
            self.settings.endpoint,
            deadline=deadline,
            json=payload,
        )
        self._handle_response_errors(response)

        data = self._parse_json(response)

        try:
            text = data["result"]["alternatives"][0]["message"]["text"]
        except (KeyError, IndexError, TypeError):
            text = None

        if not isinstance(text, str):
            logger.error(
                "Unexpected completion response format",
                extra={"response": response.text[:500]}
            )
            raise ProtocolError(self.provider_name, f"Unexpected API response format: {response.text}")

        logger.info(
            "Completion received",
            extra={
                "instruction": resolved.value,
                "output_length": len(text),
            }
        )

        return text
