"""LLM wrapper utilities.

GovBot talks to any OpenAI-compatible chat endpoint (Groq by default) through
langchain's ChatOpenAI. Model output is used for conversation and advisory
narrative only; vote decisions come from the deterministic engine.
"""

from typing import Any, Dict, List, Optional, Type, Union

from langchain_core.messages import BaseMessage
from langchain_core.prompts.chat import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ValidationError

from govbot.config import config
from govbot.lib.logger import configure_logger

logger = configure_logger(__name__)


def get_default_model() -> str:
    """Get the default model name from configuration."""
    return config.chat_llm.default_model or "qwen-qwq-32b"


def get_default_temperature() -> float:
    """Get the default temperature from configuration."""
    try:
        return float(config.chat_llm.default_temperature)
    except (ValueError, TypeError, AttributeError):
        logger.warning("Invalid chat LLM temperature configuration, using default")
        return 0.6


def get_default_base_url() -> str:
    """Get the default OpenAI-compatible API base URL from configuration."""
    return config.chat_llm.api_base or ""


def get_default_api_key() -> str:
    """Get the default API key from configuration."""
    return config.chat_llm.api_key


def create_chat_openai(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    callbacks: Optional[List[Any]] = None,
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    **kwargs,
) -> ChatOpenAI:
    """Create a ChatOpenAI instance with centralized default configuration.

    Args:
        model: Model name. If None, uses get_default_model()
        temperature: Temperature. If None, uses get_default_temperature()
        callbacks: Optional callback handlers
        base_url: API base URL. If None, uses get_default_base_url()
        api_key: API key. If None, uses get_default_api_key()
        **kwargs: Additional arguments to pass to ChatOpenAI

    Returns:
        Configured ChatOpenAI instance
    """
    config_dict = {
        "model": model or get_default_model(),
        "temperature": temperature
        if temperature is not None
        else get_default_temperature(),
        "callbacks": callbacks or [],
        "timeout": kwargs.pop("timeout", 120),
        "max_retries": kwargs.pop("max_retries", 3),
        **kwargs,
    }

    default_base_url = base_url or get_default_base_url()
    if default_base_url:
        config_dict["base_url"] = default_base_url

    default_api_key = api_key or get_default_api_key()
    if default_api_key:
        config_dict["api_key"] = default_api_key

    logger.debug(
        f"Creating ChatOpenAI with model={config_dict['model']} "
        f"base_url={config_dict.get('base_url', 'default')}"
    )
    return ChatOpenAI(**config_dict)


async def invoke_llm(
    messages: Union[List[BaseMessage], ChatPromptTemplate],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    callbacks: Optional[List[Any]] = None,
    **kwargs,
) -> str:
    """Invoke the chat model and return the reply text.

    Args:
        messages: Messages to send to the LLM (BaseMessage list or ChatPromptTemplate)
        model: Model name (defaults to configured default)
        temperature: Temperature (defaults to configured default)
        callbacks: Optional callback handlers
        **kwargs: Additional arguments

    Returns:
        The text content of the model response
    """
    llm = create_chat_openai(
        model=model,
        temperature=temperature,
        callbacks=callbacks,
        **kwargs,
    )

    if isinstance(messages, ChatPromptTemplate):
        formatted_messages = messages.format_messages()
        logger.debug(f"Formatted messages for LLM invocation: {len(formatted_messages)}")
        response = await llm.ainvoke(formatted_messages)
    else:
        logger.debug(f"Messages for LLM invocation: {len(messages)}")
        response = await llm.ainvoke(messages)

    return response.content if isinstance(response.content, str) else str(
        response.content
    )


async def invoke_structured(
    messages: Union[List[BaseMessage], ChatPromptTemplate],
    output_schema: Type[BaseModel],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    callbacks: Optional[List[Any]] = None,
    method: str = "function_calling",
    **kwargs,
) -> BaseModel:
    """Invoke the chat model and parse its reply into `output_schema`.

    Raises:
        ValueError: If the reply cannot be parsed into the schema
    """
    llm = create_chat_openai(
        model=model,
        temperature=temperature,
        callbacks=callbacks,
        **kwargs,
    )
    structured_llm = llm.with_structured_output(
        output_schema, method=method, include_raw=True
    )

    if isinstance(messages, ChatPromptTemplate):
        messages = messages.format_messages()

    result = await structured_llm.ainvoke(messages)

    if result.get("parsing_error"):
        raw_content = str(result["raw"].content).strip()
        logger.warning(f"Retrying parse of malformed output: {raw_content[:100]}...")
        try:
            return output_schema.model_validate_json(raw_content)
        except ValidationError as e:
            raise ValueError(f"Failed to parse structured output: {str(e)}") from e

    return result["parsed"]


def get_model_config() -> Dict[str, Any]:
    """Get the current model configuration (without secrets)."""
    return {
        "default_model": get_default_model(),
        "default_temperature": get_default_temperature(),
        "default_base_url": get_default_base_url(),
    }
