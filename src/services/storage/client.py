import logging
from typing import Any, Dict, List, Optional

from supabase import AsyncClient, acreate_client

from src.core.config import ApiSettings
from src.core.errors import UpstreamError
from src.core.types import PlanId

logger = logging.getLogger(__name__)


def _error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else str(exc)


class SupabaseConnector:
    """Lazily builds the async Supabase client shared by the stores."""

    def __init__(self, url: str, key: str) -> None:
        self.url = url
        self.key = key
        self._client: Optional[AsyncClient] = None

    async def get(self) -> AsyncClient:
        if self._client is None:
            self._client = await acreate_client(self.url, self.key)
        return self._client

    async def aclose(self) -> None:
        if self._client is None:
            return
        await self._client.postgrest.aclose()
        self._client = None


class ImageStore:
    """Object storage for plan images, one public bucket."""

    def __init__(self, connector: SupabaseConnector, bucket: str) -> None:
        self.connector = connector
        self.bucket = bucket

    async def upload(self, filename: str, data: bytes, content_type: Optional[str]) -> str:
        """Store ``data`` under ``filename`` and return its public URL."""

        client = await self.connector.get()
        bucket = client.storage.from_(self.bucket)
        options = {"content-type": content_type} if content_type else {}
        try:
            await bucket.upload(filename, data, file_options=options)
            public_url = await bucket.get_public_url(filename)
        except Exception as exc:
            logger.error(f"Image upload failed for {filename}: {exc}")
            raise UpstreamError(_error_message(exc), source="storage") from exc
        logger.info(f"Uploaded image {filename} to bucket {self.bucket}")
        return public_url


class PlanStore:
    """Row store for tour plans."""

    def __init__(self, connector: SupabaseConnector, table: str) -> None:
        self.connector = connector
        self.table = table

    async def insert(self, row: Dict[str, Any]) -> None:
        client = await self.connector.get()
        try:
            await client.table(self.table).insert(row).execute()
        except Exception as exc:
            raise UpstreamError(_error_message(exc), source="database") from exc

    async def select_all(self) -> List[Dict[str, Any]]:
        client = await self.connector.get()
        try:
            res = await client.table(self.table).select("*").execute()
        except Exception as exc:
            raise UpstreamError(_error_message(exc), source="database") from exc
        return res.data or []

    async def delete_by_id(self, plan_id: PlanId) -> None:
        client = await self.connector.get()
        try:
            await client.table(self.table).delete().eq("id", plan_id).execute()
        except Exception as exc:
            raise UpstreamError(_error_message(exc), source="database") from exc


def create_supabase_connector(settings: ApiSettings) -> SupabaseConnector:
    return SupabaseConnector(settings.ensure("supabase_url"), settings.ensure("supabase_key"))
