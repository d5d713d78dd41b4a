"""Recipe catalog backed by the recipe service HTTP API."""

import logging

import httpx
from pydantic import ValidationError

from family_meal_planner.config import get_settings
from family_meal_planner.models import RecipeSummary
from family_meal_planner.recipes.base import RecipeCatalog

logger = logging.getLogger(__name__)


class HttpRecipeCatalog(RecipeCatalog):
    """Looks recipes up with ``GET {base_url}/recipes/{id}``.

    Expected response body: ``{"id", "title", "prepTime", "servings"}``.
    Transport errors are logged and treated as not-found so callers can show
    a placeholder instead of failing.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.recipe_service_url or "").rstrip("/")
        self._timeout = timeout if timeout is not None else settings.recipe_service_timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(base_url=self._base_url, timeout=self._timeout)
        return self._client

    def get(self, recipe_id: str) -> RecipeSummary | None:
        try:
            resp = self._get_client().get(f"/recipes/{recipe_id}")
        except httpx.HTTPError as e:
            logger.warning("Recipe lookup failed for %s: %s", recipe_id, e)
            return None
        if resp.status_code == 404:
            return None
        if resp.status_code >= 400:
            logger.warning(
                "Recipe lookup failed for %s: %s %s",
                recipe_id,
                resp.status_code,
                resp.text[:200],
            )
            return None
        try:
            data = resp.json()
            return RecipeSummary(
                id=str(data.get("id", recipe_id)),
                title=data["title"],
                prep_time_minutes=data.get("prepTime"),
                servings=data.get("servings"),
            )
        except (ValueError, KeyError, ValidationError) as e:
            logger.warning("Invalid recipe payload for %s: %s", recipe_id, e)
            return None

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
