import json
from typing import Any, Optional, Protocol, Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import GatewayConfig
from .errors import GenerationError, SchemaMismatchError
from .images import PLACEHOLDER_IMAGE, decode_data_uri, to_image_data_uri


ModelT = TypeVar("ModelT", bound=BaseModel)


class GenerationGateway(Protocol):
    """The three generation capabilities the workflow depends on."""

    def generate_text(self, prompt: str) -> str:
        ...

    def generate_structured(self, prompt: str, schema: Type[ModelT]) -> ModelT:
        ...

    def generate_image(self, prompt: str, aspect_ratio: str = "1:1") -> str:
        ...


def parse_structured(text: str, schema: Type[ModelT]) -> ModelT:
    """
    Validate a model response against a pydantic schema.

    Markdown code fences around the JSON object are tolerated.
    """
    payload = text.strip()
    if payload.startswith("```"):
        payload = payload.strip("`")
        if payload.lower().startswith("json"):
            payload = payload[4:]
        payload = payload.strip()

    try:
        return schema.model_validate_json(payload)
    except PydanticValidationError as exc:
        raise SchemaMismatchError(
            f"Structured response did not match {schema.__name__}: {exc}"
        ) from exc


class BaseGateway:
    """
    Shared gateway behaviour.

    Subclasses provide `_complete` (prompt -> raw text) and `_fetch_image`
    (prompt -> raw image bytes). Text and JSON failures propagate as
    GenerationError; image failures degrade to a placeholder image.
    """

    def generate_text(self, prompt: str) -> str:
        print(f"🤖 Generating text ({len(prompt)} chars of prompt)...")
        text = self._complete(prompt).strip()
        if not text:
            raise GenerationError("The text generator returned an empty response.")
        return text

    def generate_structured(self, prompt: str, schema: Type[ModelT]) -> ModelT:
        schema_json = json.dumps(schema.model_json_schema(), indent=2)
        full_prompt = (
            f"{prompt}\n\n"
            "Return ONLY a valid JSON object matching this JSON schema and no "
            "surrounding commentary:\n"
            f"{schema_json}\n"
        )
        print(f"🤖 Generating structured {schema.__name__}...")
        return parse_structured(self._complete(full_prompt), schema)

    def generate_image(self, prompt: str, aspect_ratio: str = "1:1") -> str:
        print(f"🎨 Generating {aspect_ratio} image...")
        try:
            image_bytes = self._fetch_image(prompt, aspect_ratio)
            return to_image_data_uri(image_bytes)
        except Exception as e:
            print(f"⚠️  Image generation failed ({e}). Using placeholder image.")
            return PLACEHOLDER_IMAGE

    def _complete(self, prompt: str) -> str:
        raise NotImplementedError

    def _fetch_image(self, prompt: str, aspect_ratio: str) -> bytes:
        raise NotImplementedError


class ModelGateway(BaseGateway):
    """
    Talks to the providers directly: a LangChain chat model for text and
    JSON, Replicate for images.
    """

    def __init__(self, llm: Any, image_client: Any, image_model: str) -> None:
        self.llm = llm
        self.image_client = image_client
        self.image_model = image_model

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "ModelGateway":
        if not config.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set. A valid API key is required for text generation."
            )
        if not config.replicate_api_token:
            raise RuntimeError(
                "REPLICATE_API_TOKEN is not set. A valid API token is required for image generation."
            )

        from langchain_openai import ChatOpenAI
        import replicate

        llm = ChatOpenAI(
            model=config.text_model,
            temperature=config.text_temperature,
            api_key=config.openai_api_key,
        )
        image_client = replicate.Client(api_token=config.replicate_api_token)
        return cls(llm=llm, image_client=image_client, image_model=config.image_model)

    def _complete(self, prompt: str) -> str:
        try:
            raw = self.llm.invoke(prompt)
        except Exception as exc:
            raise GenerationError(f"Failed to generate text content: {exc}") from exc
        if not hasattr(raw, "content"):
            return str(raw)
        content = raw.content
        if isinstance(content, list):
            # Some chat models return content blocks instead of a string.
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        return content or ""

    def _fetch_image(self, prompt: str, aspect_ratio: str) -> bytes:
        output = self.image_client.run(
            self.image_model,
            input={"prompt": prompt, "aspect_ratio": aspect_ratio},
        )
        if isinstance(output, (list, tuple)):
            if not output:
                raise ValueError("Image model returned no output.")
            output = output[0]
        return output.read()


class ProxyGateway(BaseGateway):
    """
    Client for a generation proxy exposing `/api/generate-text` and
    `/api/generate-image`, both taking `{"prompt": ...}` with a bearer token.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 120.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            }
        )

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "ProxyGateway":
        if not config.proxy_url or not config.proxy_token:
            raise RuntimeError(
                "BRANDKIT_PROXY_URL and BRANDKIT_PROXY_TOKEN must both be set to use the proxy gateway."
            )
        return cls(config.proxy_url, config.proxy_token, timeout=config.request_timeout)

    def _post(self, endpoint: str, prompt: str) -> dict:
        url = f"{self.base_url}/api/{endpoint}"
        try:
            response = self.session.post(url, json={"prompt": prompt}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GenerationError(f"Request to {endpoint} failed: {exc}") from exc

        if not response.ok:
            raise GenerationError(
                f"{endpoint} returned HTTP {response.status_code}: {response.text}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GenerationError(f"{endpoint} returned a non-JSON body.") from exc

    def _complete(self, prompt: str) -> str:
        data = self._post("generate-text", prompt)
        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise GenerationError("generate-text response has no text field.")
        return text

    def _fetch_image(self, prompt: str, aspect_ratio: str) -> bytes:
        data = self._post("generate-image", prompt)
        image = data.get("image") if isinstance(data, dict) else None
        mime, raw = decode_data_uri(image)
        if not mime.startswith("image/"):
            raise ValueError(f"generate-image returned {mime}, not an image.")
        return raw
