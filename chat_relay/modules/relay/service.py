import logging
from typing import Any

import httpx

from chat_relay.config.settings import settings
from chat_relay.modules.relay.exceptions import (
    UPSTREAM_ERROR_FALLBACK,
    InternalRelayError,
    MalformedUpstreamResponseError,
    RelayError,
    UpstreamError,
)
from chat_relay.modules.relay.schemas import ChatReply

logger = logging.getLogger(__name__)

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
MODEL = "gpt-3.5-turbo"
REQUEST_TIMEOUT = 60.0

GENERATION_PARAMS: dict[str, Any] = {
    "max_tokens": 1000,
    "temperature": 0.7,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}


class RelayService:
    """Forwards a chat message list to the OpenAI chat completion endpoint.

    Every call opens its own client and makes exactly one request; failures
    are raised as ``RelayError`` subclasses for the app to translate.
    """

    def __init__(
        self, api_key: str, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._api_key = api_key
        self._transport = transport

    # ── Payload translation ─────────────────────────────────────

    @staticmethod
    def build_payload(messages: list[Any]) -> dict[str, Any]:
        return {"model": MODEL, "messages": messages, **GENERATION_PARAMS}

    @staticmethod
    def extract_reply(data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise MalformedUpstreamResponseError()
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise MalformedUpstreamResponseError()
        return content

    @staticmethod
    def extract_error(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return UPSTREAM_ERROR_FALLBACK
        if isinstance(body, dict) and body.get("error"):
            return body["error"]
        return UPSTREAM_ERROR_FALLBACK

    # ── HTTP layer ──────────────────────────────────────────────

    async def _complete(self, messages: list[Any]) -> ChatReply:
        async with httpx.AsyncClient(
            transport=self._transport, timeout=REQUEST_TIMEOUT
        ) as client:
            response = await client.post(
                OPENAI_CHAT_COMPLETIONS_URL,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=self.build_payload(messages),
            )

        if not response.is_success:
            logger.warning("Upstream returned status %d", response.status_code)
            raise UpstreamError(response.status_code, self.extract_error(response))

        try:
            reply = self.extract_reply(response.json())
        except MalformedUpstreamResponseError:
            logger.warning("Upstream response has no choices[0].message.content")
            raise
        return ChatReply(reply=reply)

    async def relay(self, messages: list[Any]) -> ChatReply:
        logger.info("Relaying %d messages to %s", len(messages), MODEL)
        try:
            return await self._complete(messages)
        except RelayError:
            raise
        except Exception as exc:
            logger.exception("Error in /api/chat")
            raise InternalRelayError(str(exc)) from exc


relay_service = RelayService(settings.openai_api_key)
