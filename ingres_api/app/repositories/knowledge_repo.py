import logging
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from ingres_api.app.exceptions import KnowledgeLookupError
from ingres_api.app.schemas.chat import KnowledgeRow

logger = logging.getLogger(__name__)

SELECT_COLUMNS = ("block", "state", "year", "metric", "value")
SEARCH_COLUMNS = ("block", "state", "metric")
MAX_ROWS = 5

# characters PostgREST treats as syntax inside a logic-tree filter
_RESERVED = set(',.:()"\\ ')


def _quote(value: str) -> str:
    if not any(ch in _RESERVED for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_or_filter(text: str, columns=SEARCH_COLUMNS) -> str:
    """PostgREST `or` filter: case-insensitive substring match on any column."""
    pattern = _quote(f"*{text}*")
    return "(" + ",".join(f"{col}.ilike.{pattern}" for col in columns) + ")"


class KnowledgeRepo:
    """
    Substring search over the knowledge table exposed by Supabase's REST API.
    Any failure is raised as KnowledgeLookupError.
    """

    def __init__(self, http: httpx.Client, base_url: Optional[str], api_key: Optional[str], table: str,
                 limit: int = MAX_ROWS):
        self.http = http
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.table = table
        self.limit = limit

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def search(self, text: str) -> List[KnowledgeRow]:
        if not self.base_url or not self.api_key:
            raise KnowledgeLookupError("Supabase is not configured")

        params = {
            "select": ",".join(SELECT_COLUMNS),
            "or": build_or_filter(text),
            "limit": str(self.limit),
        }
        try:
            response = self.http.get(f"{self.base_url}/rest/v1/{self.table}", params=params,
                                     headers=self._headers())
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise KnowledgeLookupError(
                f"Supabase returned {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise KnowledgeLookupError(f"Supabase request failed: {exc}") from exc
        except ValueError as exc:
            raise KnowledgeLookupError(f"Supabase returned invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise KnowledgeLookupError(f"Unexpected Supabase payload: {type(data).__name__}")

        try:
            rows = [KnowledgeRow.model_validate(item) for item in data[:self.limit]]
        except ValidationError as exc:
            raise KnowledgeLookupError(f"Malformed knowledge row: {exc}") from exc

        logger.info("Knowledge lookup matched %d row(s)", len(rows))
        return rows

    def close(self):
        self.http.close()
