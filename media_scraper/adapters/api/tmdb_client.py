"""
Client TMDB pour la recherche et la recuperation de metadonnees.

Implemente ICatalogClient pour TMDB (The Movie Database) v3 : recherche de
series, de films et mixte, details des series, films et saisons, resolution
d'un ID IMDb et telechargement des images.

Aucun cache n'est utilise : un rafraichissement doit toujours relire les
donnees a jour du catalogue.

Usage:
    client = TMDBClient(api_key="your_key", language="zh-CN")
    results = await client.search_shows("Breaking Bad", year=2008)
    details = await client.get_show_details(results[0].id)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from media_scraper.adapters.api.retry import RateLimitError, request_with_retry
from media_scraper.core.ports.api_clients import (
    CatalogCandidate,
    CatalogError,
    EpisodeDetails,
    ICatalogClient,
    MovieDetails,
    SeasonDetails,
    ShowDetails,
)


def _candidate_from_item(item: dict[str, Any], media_type: Optional[str]) -> CatalogCandidate:
    """Normalise un resultat de recherche TMDB (serie ou film)."""
    name = item.get("name") or item.get("title") or ""
    original = item.get("original_name") or item.get("original_title")
    return CatalogCandidate(
        id=int(item["id"]),
        name=name or original or "",
        original_name=original if original != name else None,
        date=item.get("first_air_date") or item.get("release_date") or None,
        poster_path=item.get("poster_path"),
        overview=item.get("overview") or None,
        vote_average=float(item.get("vote_average") or 0.0),
        media_type=media_type,
    )


def _names(items: Optional[list[dict[str, Any]]]) -> tuple[str, ...]:
    return tuple(i["name"] for i in items or [] if i.get("name"))


class TMDBClient(ICatalogClient):
    """
    Client API TMDB.

    Implemente ICatalogClient avec:
    - Recherche de series (filtre first_air_date_year) et de films (filtre year)
    - Recherche mixte limitee aux resultats "tv" et "movie"
    - Details serie, film et saison dans la langue configuree
    - Retry automatique sur rate limiting (429)

    Toutes les erreurs HTTP ou reseau sont converties en CatalogError.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base pour les images
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"

    def __init__(self, api_key: Optional[str], language: str = "zh-CN", timeout: float = 30.0) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 ou Read Access Token v4
            language: Langue des metadonnees (ex: "zh-CN")
            timeout: Timeout des requetes en secondes
        """
        self._api_key = api_key
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._image_client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Leve CatalogError si aucune cle n'est configuree.

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            if not self._api_key:
                raise CatalogError("TMDB API key not configured")
            headers = {"Accept": "application/json"}
            params = {}
            if len(self._api_key) > 40:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def _get(self, path: str, **params: Any) -> dict[str, Any]:
        """GET sur l'API avec la langue configuree ; erreurs -> CatalogError."""
        query = {"language": self._language}
        query.update({k: v for k, v in params.items() if v is not None})
        logger.debug(f"TMDB GET {path} {query}")
        try:
            response = await request_with_retry(self._get_client(), "GET", path, params=query)
        except RateLimitError:
            raise
        except httpx.HTTPStatusError as e:
            raise CatalogError(f"TMDB {path}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise CatalogError(f"TMDB {path}: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"TMDB {path}: reponse invalide") from e

    async def search_shows(
        self, query: str, year: Optional[int] = None
    ) -> list[CatalogCandidate]:
        data = await self._get("/search/tv", query=query, first_air_date_year=year)
        return [_candidate_from_item(item, "tv") for item in data.get("results", [])]

    async def search_movies(
        self, query: str, year: Optional[int] = None
    ) -> list[CatalogCandidate]:
        data = await self._get("/search/movie", query=query, year=year)
        return [_candidate_from_item(item, "movie") for item in data.get("results", [])]

    async def search_multi(self, query: str) -> list[CatalogCandidate]:
        """Recherche mixte ; les personnes et autres types sont ignores."""
        data = await self._get("/search/multi", query=query, include_adult="false")
        return [
            _candidate_from_item(item, item["media_type"])
            for item in data.get("results", [])
            if item.get("media_type") in ("tv", "movie")
        ]

    async def get_show_details(self, show_id: int) -> ShowDetails:
        data = await self._get(f"/tv/{show_id}", append_to_response="external_ids")
        return ShowDetails(
            id=int(data["id"]),
            name=data.get("name") or data.get("original_name") or "",
            original_name=data.get("original_name"),
            overview=data.get("overview") or "",
            first_air_date=data.get("first_air_date") or None,
            status=data.get("status"),
            vote_average=float(data.get("vote_average") or 0.0),
            genres=_names(data.get("genres")),
            studios=_names(data.get("networks")),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            imdb_id=(data.get("external_ids") or {}).get("imdb_id"),
        )

    async def get_movie_details(self, movie_id: int) -> MovieDetails:
        data = await self._get(f"/movie/{movie_id}")
        return MovieDetails(
            id=int(data["id"]),
            title=data.get("title") or data.get("original_title") or "",
            original_title=data.get("original_title"),
            overview=data.get("overview") or "",
            tagline=data.get("tagline") or "",
            release_date=data.get("release_date") or None,
            runtime=data.get("runtime") or None,
            vote_average=float(data.get("vote_average") or 0.0),
            genres=_names(data.get("genres")),
            studios=_names(data.get("production_companies")),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            imdb_id=data.get("imdb_id"),
        )

    async def get_season_details(self, show_id: int, season: int) -> SeasonDetails:
        data = await self._get(f"/tv/{show_id}/season/{season}")
        episodes = [
            EpisodeDetails(
                episode_number=int(ep["episode_number"]),
                name=ep.get("name") or "",
                overview=ep.get("overview") or "",
                air_date=ep.get("air_date") or None,
                vote_average=float(ep.get("vote_average") or 0.0),
                runtime=ep.get("runtime") or None,
                still_path=ep.get("still_path"),
            )
            for ep in data.get("episodes") or []
        ]
        return SeasonDetails(
            season_number=int(data.get("season_number", season)),
            name=data.get("name") or "",
            overview=data.get("overview") or "",
            air_date=data.get("air_date") or None,
            poster_path=data.get("poster_path"),
            episodes=episodes,
        )

    async def resolve_by_external_id(
        self, external_id: str, media_type: Optional[str] = None
    ) -> Optional[CatalogCandidate]:
        """
        Resout un ID IMDb via l'endpoint /find/{external_id}.

        Les resultats du type demande sont prioritaires ; a defaut, le
        premier resultat serie puis film est retourne.
        """
        data = await self._get(f"/find/{external_id}", external_source="imdb_id")
        groups = {
            "tv": data.get("tv_results") or [],
            "movie": data.get("movie_results") or [],
        }
        order = ["tv", "movie"]
        if media_type == "movie":
            order.reverse()
        for kind in order:
            if groups[kind]:
                return _candidate_from_item(groups[kind][0], kind)
        return None

    def image_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        """Construit l'URL d'une image TMDB (w500 pour les affiches, w1280 pour les fonds)."""
        if not path:
            return None
        return f"{self.TMDB_IMAGE_BASE_URL}{size}{path}"

    async def download_image(self, url: str) -> bytes:
        """
        Telecharge une image depuis le CDN.

        Utilise un client distinct, sans la cle API.

        Raises:
            CatalogError: Si le telechargement echoue
        """
        if self._image_client is None or self._image_client.is_closed:
            self._image_client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        try:
            response = await request_with_retry(self._image_client, "GET", url)
        except RateLimitError:
            raise
        except httpx.HTTPError as e:
            raise CatalogError(f"Echec du telechargement de {url}: {e}") from e
        return response.content

    async def close(self) -> None:
        """Ferme les clients HTTP."""
        for client in (self._client, self._image_client):
            if client is not None and not client.is_closed:
                await client.aclose()
        self._client = None
        self._image_client = None
