"""Knowledge base client for a hosted QnA Maker endpoint."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from ..config import QnASettings
from ..errors import KnowledgeLookupError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class QnAResult:
    """One candidate answer. Score is normalized to 0..1."""

    answer: str
    score: float
    questions: list[str] | None = None


class IKnowledgeBase(Protocol):
    """Question answering over a curated knowledge base."""

    async def get_answers(self, question: str, top: int = 1) -> list[QnAResult]:
        """Return candidate answers, best first."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


class QnAMakerClient:
    """Calls `{host}/knowledgebases/{kb_id}/generateAnswer`."""

    def __init__(
        self,
        settings: QnASettings,
        client: httpx.AsyncClient | None = None,
    ):
        if not settings.configured:
            raise ValueError("QnA knowledge base id, endpoint key and host are required")

        self._settings = settings
        self._url = (
            f"{settings.host.rstrip('/')}/knowledgebases/"
            f"{settings.knowledge_base_id}/generateAnswer"
        )
        self._client = client or httpx.AsyncClient(timeout=settings.timeout)
        self._owns_client = client is None

    async def get_answers(self, question: str, top: int = 1) -> list[QnAResult]:
        """Query the knowledge base."""
        try:
            response = await self._client.post(
                self._url,
                json={"question": question, "top": top},
                headers={
                    "Authorization": f"EndpointKey {self._settings.endpoint_key}"
                },
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise KnowledgeLookupError(f"Knowledge base request failed: {e}") from e

        answers = payload.get("answers") if isinstance(payload, dict) else None
        if not isinstance(answers, list):
            raise KnowledgeLookupError("Knowledge base response has no answers list")

        results = [
            QnAResult(
                answer=item.get("answer", ""),
                # QnA Maker reports scores on a 0..100 scale
                score=float(item.get("score", 0)) / 100.0,
                questions=item.get("questions"),
            )
            for item in answers
        ]
        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug("Knowledge base returned %s answers", len(results))
        return results

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def best_answer(results: list[QnAResult], threshold: float) -> QnAResult | None:
    """Best answer scoring at least `threshold`, if any."""
    for result in results:
        if result.score >= threshold and result.answer:
            return result
    return None
