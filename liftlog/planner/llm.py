from openai import OpenAI, OpenAIError
from flask import current_app
import logging

from liftlog.errors import ExternalServiceFailure

# Configure logger
logger = logging.getLogger(__name__)


def _client_for(provider, config):
    """Returns (client, model) for the configured provider. No automatic retries."""
    timeout = config["LLM_TIMEOUT_SECONDS"]

    # --- LOCAL LLM (Llama.cpp via OpenAI API) ---
    if provider == "local":
        client = OpenAI(
            base_url=config["LOCAL_LLM_URL"],
            api_key="sk-no-key-required",
            timeout=timeout,
            max_retries=0,
        )
        return client, config["LOCAL_LLM_MODEL"]

    # --- OPENAI ---
    if provider == "openai":
        if not config["OPENAI_API_KEY"]:
            logger.error("OpenAI API Key missing.")
            raise ExternalServiceFailure()
        client = OpenAI(api_key=config["OPENAI_API_KEY"], timeout=timeout, max_retries=0)
        return client, config["OPENAI_MODEL"]

    logger.error(f"Unknown LLM provider: {provider}")
    raise ExternalServiceFailure()


def generate_json_response(messages, provider=None):
    """
    Send a role-tagged message list and return the reply text, requesting a JSON object.

    Args:
        messages (list): Message dictionaries with 'role' and 'content'.
        provider (str): Optional provider override ('openai' or 'local').

    Returns:
        str: The raw reply content (may be empty; the caller validates it).

    Raises:
        ExternalServiceFailure: The provider is misconfigured, or the call errors or times out.
    """
    config = current_app.config
    if not provider:
        provider = config["LLM_PROVIDER"]

    client, model = _client_for(provider, config)
    prompt_chars = sum(len(m["content"]) for m in messages)
    logger.info(f"Sending plan request to {provider} ({model}), {prompt_chars} chars...")

    try:
        completion = client.chat.completions.create(
            model=model,
            messages=messages,
            response_format={"type": "json_object"},
        )
    except OpenAIError as e:
        logger.error(f"{provider} API Error: {e}")
        raise ExternalServiceFailure() from e

    if not completion.choices:
        return ""
    return completion.choices[0].message.content or ""
