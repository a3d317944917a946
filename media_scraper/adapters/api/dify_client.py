"""
Client Dify pour la reconnaissance de chemins par IA.

Envoie un chemin brut a un workflow Dify en mode streaming, reassemble la
reponse (evenements SSE "message") et en extrait un objet JSON decrivant le
media reconnu. Le resultat n'est qu'un indice : il n'est jamais applique
automatiquement.
"""

import json
from typing import Any, Optional

import httpx
from loguru import logger

from media_scraper.core.entities import PathRecognition
from media_scraper.core.ports.recognizer import IPathRecognizer


def extract_streaming_answer(lines: list[str]) -> Optional[str]:
    """
    Concatene les fragments "answer" des evenements SSE de type message.

    Les lignes non "data:" et les JSON invalides sont ignores.
    """
    parts: list[str] = []
    for line in lines:
        line = line.strip()
        if not line.startswith("data:"):
            continue
        try:
            data = json.loads(line[5:].strip())
        except ValueError:
            continue
        if isinstance(data, dict) and data.get("event") == "message" and data.get("answer"):
            parts.append(data["answer"])
    answer = "".join(parts).strip()
    return answer or None


def parse_json_answer(answer: str) -> Optional[dict[str, Any]]:
    """Parse la reponse ; a defaut, le texte entre la premiere { et la derniere }."""
    try:
        parsed = json.loads(answer)
    except ValueError:
        left, right = answer.find("{"), answer.rfind("}")
        if left == -1 or right <= left:
            return None
        try:
            parsed = json.loads(answer[left : right + 1])
        except ValueError:
            return None
    return parsed if isinstance(parsed, dict) else None


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None and value != "" else None
    except (TypeError, ValueError):
        return None


def normalize_recognition(data: dict[str, Any], path: str) -> PathRecognition:
    """
    Normalise la reponse du workflow.

    Accepte les variantes de cles (media_type/mediaType/type,
    imdb_id/imdbId/imdb, tmdb_id/tmdbId...). Tout type autre que "movie"
    est considere comme une serie.
    """
    media_type = "movie" if _first(data, "media_type", "mediaType", "type") == "movie" else "tv"
    imdb_raw = _first(data, "imdb_id", "imdbId", "imdbID", "imdb")
    imdb_id = imdb_raw.strip() if isinstance(imdb_raw, str) and imdb_raw.strip() else None
    tmdb_name = _first(data, "tmdb_name", "tmdbName", "name")
    title = _first(data, "title", "tmdb_name", "tmdbName", "name") or ""
    try:
        confidence = float(data.get("confidence") or 0.0)
    except (TypeError, ValueError):
        confidence = 0.0

    return PathRecognition(
        path=data.get("path") or path,
        title=str(title),
        media_type=media_type,
        year=_as_int(data.get("year")),
        season=_as_int(data.get("season")),
        episode=_as_int(data.get("episode")),
        imdb_id=imdb_id,
        tmdb_id=_as_int(_first(data, "tmdb_id", "tmdbId", "tmdbID")),
        tmdb_name=tmdb_name,
        confidence=confidence,
        reason=str(data.get("reason") or ""),
    )


class DifyPathRecognizer(IPathRecognizer):
    """
    Implementation de IPathRecognizer sur l'API chat-messages de Dify.

    Desactive (recognize retourne None) si aucune cle API n'est configuree.
    """

    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        user: str = "media-scraper-web",
        timeout: float = 60.0,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._user = user
        self._timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def recognize(self, path: str) -> Optional[PathRecognition]:
        """
        Reconnait un chemin via le workflow.

        Les erreurs reseau ou de format sont journalisees et donnent None.
        """
        if not self.enabled:
            return None

        payload = {
            "inputs": {},
            "query": path,
            "response_mode": "streaming",
            "conversation_id": "",
            "user": self._user,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                async with client.stream("POST", self._url, json=payload, headers=headers) as response:
                    if response.status_code >= 400:
                        body = await response.aread()
                        logger.error(
                            f"Erreur API Dify {response.status_code}: {body.decode(errors='replace')[:200]}"
                        )
                        return None
                    lines = [line async for line in response.aiter_lines()]
        except httpx.HTTPError as e:
            logger.error(f"Appel Dify impossible pour {path}: {e}")
            return None

        answer = extract_streaming_answer(lines)
        if answer is None:
            logger.warning(f"Reponse Dify vide pour {path}")
            return None

        logger.debug(f"Reponse Dify: {answer}")
        data = parse_json_answer(answer)
        if data is None:
            logger.error(f"Reponse Dify non JSON: {answer[:200]}")
            return None

        return normalize_recognition(data, path)
