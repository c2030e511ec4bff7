import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_TEXT_MODEL = "gpt-5-mini-2025-08-07"
DEFAULT_TEXT_TEMPERATURE = 0.9
DEFAULT_IMAGE_MODEL = "google/imagen-4-fast"


@dataclass(frozen=True)
class GatewayConfig:
    """
    Credentials and model choices for the generation services.

    Built once at process start and handed to the gateway constructor;
    nothing in the package reads the environment on its own.
    """

    openai_api_key: Optional[str] = None
    replicate_api_token: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    text_temperature: float = DEFAULT_TEXT_TEMPERATURE
    image_model: str = DEFAULT_IMAGE_MODEL
    proxy_url: Optional[str] = None
    proxy_token: Optional[str] = None
    request_timeout: float = 120.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewayConfig":
        env = os.environ if environ is None else environ
        temperature = env.get("BRANDKIT_TEXT_TEMPERATURE")
        try:
            text_temperature = float(temperature) if temperature else DEFAULT_TEXT_TEMPERATURE
        except ValueError:
            raise RuntimeError(
                f"BRANDKIT_TEXT_TEMPERATURE must be a number, got '{temperature}'."
            ) from None
        return cls(
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            replicate_api_token=env.get("REPLICATE_API_TOKEN") or None,
            text_model=env.get("BRANDKIT_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
            text_temperature=text_temperature,
            image_model=env.get("BRANDKIT_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
            proxy_url=env.get("BRANDKIT_PROXY_URL") or None,
            proxy_token=env.get("BRANDKIT_PROXY_TOKEN") or None,
        )
