import logging

import httpx

from app.exceptions.custom import ElevenLabsError, RateLimitError
from app.schemas.elevenlabs import ConversationListResponse, ConversationResponse

logger = logging.getLogger(__name__)

CONVERSATIONS_URL = "https://api.elevenlabs.io/v1/convai/conversations"


class ElevenLabsService:
    def __init__(self, client: httpx.AsyncClient, api_key: str):
        self._client = client
        self._headers = {"xi-api-key": api_key}

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise RateLimitError("ElevenLabs")
        if resp.status_code >= 400:
            raise ElevenLabsError(resp.text, status_code=resp.status_code)

    async def get_conversation(
        self, conversation_id: str
    ) -> ConversationResponse:
        url = f"{CONVERSATIONS_URL}/{conversation_id}"
        logger.info("Fetching conversation %s", conversation_id)
        resp = await self._client.get(url, headers=self._headers)
        self._raise_for_status(resp)

        return ConversationResponse(**resp.json())

    async def list_conversations(
        self, agent_id: str | None = None
    ) -> ConversationListResponse:
        params: dict = {}
        if agent_id:
            params["agent_id"] = agent_id

        resp = await self._client.get(
            CONVERSATIONS_URL, params=params, headers=self._headers
        )
        self._raise_for_status(resp)

        return ConversationListResponse(**resp.json())
