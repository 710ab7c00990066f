"""Tests for the Supabase storage adapters."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from src.core.config import ApiSettings
from src.core.errors import UpstreamError
from src.services.storage import client as storage_module
from src.services.storage import ImageStore, PlanStore, SupabaseConnector, create_supabase_connector


class FakeBucket:
    def __init__(self, name: str, error: Optional[Exception] = None, url_error: Optional[Exception] = None) -> None:
        self.name = name
        self.error = error
        self.url_error = url_error
        self.uploads: List[Dict[str, Any]] = []

    async def upload(self, path: str, file: bytes, file_options: Optional[Dict[str, str]] = None) -> Any:
        if self.error is not None:
            raise self.error
        self.uploads.append({"path": path, "file": file, "file_options": file_options})
        return SimpleNamespace(path=path)

    async def get_public_url(self, path: str) -> str:
        if self.url_error is not None:
            raise self.url_error
        return f"https://example.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeQuery:
    def __init__(self, table: "FakeTable") -> None:
        self.table = table
        self.ops: List[Any] = []

    def insert(self, row: Dict[str, Any]) -> "FakeQuery":
        self.ops.append(("insert", row))
        return self

    def select(self, columns: str) -> "FakeQuery":
        self.ops.append(("select", columns))
        return self

    def delete(self) -> "FakeQuery":
        self.ops.append(("delete",))
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.ops.append(("eq", column, value))
        return self

    async def execute(self) -> Any:
        self.table.executed.append(self.ops)
        if self.table.error is not None:
            raise self.table.error
        return SimpleNamespace(data=self.table.rows)


class FakeTable:
    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None) -> None:
        self.rows = rows
        self.error = error
        self.executed: List[List[Any]] = []


class FakeSupabase:
    def __init__(self, *, bucket_error: Optional[Exception] = None, table: Optional[FakeTable] = None) -> None:
        self.buckets: Dict[str, FakeBucket] = {}
        self.bucket_error = bucket_error
        self.tables: Dict[str, FakeTable] = {}
        self.default_table = table or FakeTable(rows=[])
        self.storage = SimpleNamespace(from_=self._bucket)

    def _bucket(self, name: str) -> FakeBucket:
        return self.buckets.setdefault(name, FakeBucket(name, self.bucket_error))

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, self.default_table))


class StubConnector:
    def __init__(self, client: FakeSupabase) -> None:
        self.client = client

    async def get(self) -> FakeSupabase:
        return self.client


class ProviderError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@pytest.mark.asyncio
async def test_image_upload_returns_public_url():
    fake = FakeSupabase()
    store = ImageStore(StubConnector(fake), "tour-images")

    url = await store.upload("1700000000000_beach.png", b"png-bytes", "image/png")

    assert url.endswith("/tour-images/1700000000000_beach.png")
    upload = fake.buckets["tour-images"].uploads[0]
    assert upload["file"] == b"png-bytes"
    assert upload["file_options"] == {"content-type": "image/png"}


@pytest.mark.asyncio
async def test_image_upload_failure_is_upstream_error():
    fake = FakeSupabase(bucket_error=ProviderError("The resource already exists"))
    store = ImageStore(StubConnector(fake), "tour-images")

    with pytest.raises(UpstreamError, match="The resource already exists"):
        await store.upload("a.png", b"data", "image/png")


@pytest.mark.asyncio
async def test_public_url_failure_is_upstream_error():
    fake = FakeSupabase()
    fake.buckets["tour-images"] = FakeBucket("tour-images", url_error=ProviderError("Bucket not found"))
    store = ImageStore(StubConnector(fake), "tour-images")

    with pytest.raises(UpstreamError, match="Bucket not found") as excinfo:
        await store.upload("a.png", b"data", "image/png")

    assert excinfo.value.source == "storage"


@pytest.mark.asyncio
async def test_plan_insert_targets_configured_table():
    fake = FakeSupabase()
    store = PlanStore(StubConnector(fake), "tour_plan")

    await store.insert({"destination": "Jeju"})

    assert fake.tables["tour_plan"].executed == [[("insert", {"destination": "Jeju"})]]


@pytest.mark.asyncio
async def test_select_all_returns_rows():
    rows = [{"id": 1, "destination": "Jeju"}, {"id": 2, "destination": "Seoul"}]
    fake = FakeSupabase(table=FakeTable(rows=rows))

    result = await PlanStore(StubConnector(fake), "tour_plan").select_all()

    assert result == rows
    assert fake.tables["tour_plan"].executed == [[("select", "*")]]


@pytest.mark.asyncio
async def test_select_all_handles_missing_data():
    fake = FakeSupabase(table=FakeTable(rows=None))

    assert await PlanStore(StubConnector(fake), "tour_plan").select_all() == []


@pytest.mark.asyncio
async def test_delete_by_id_filters_on_id():
    fake = FakeSupabase()

    await PlanStore(StubConnector(fake), "tour_plan").delete_by_id(7)

    assert fake.tables["tour_plan"].executed == [[("delete",), ("eq", "id", 7)]]


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["insert", "select_all", "delete_by_id"])
async def test_row_store_errors_are_upstream_errors(operation: str):
    fake = FakeSupabase(table=FakeTable(error=ProviderError('null value in column "purpose"')))
    store = PlanStore(StubConnector(fake), "tour_plan")
    args = {"insert": ({"destination": "Jeju"},), "select_all": (), "delete_by_id": (1,)}[operation]

    with pytest.raises(UpstreamError, match="purpose") as excinfo:
        await getattr(store, operation)(*args)

    assert excinfo.value.source == "database"


@pytest.mark.asyncio
async def test_connector_creates_client_once(monkeypatch):
    created: List[Any] = []

    async def fake_acreate_client(url: str, key: str) -> Any:
        client = SimpleNamespace(url=url, key=key)
        created.append(client)
        return client

    monkeypatch.setattr(storage_module, "acreate_client", fake_acreate_client)
    connector = SupabaseConnector("https://example.supabase.co", "anon-key")

    first = await connector.get()
    second = await connector.get()

    assert first is second
    assert len(created) == 1
    assert first.url == "https://example.supabase.co"


@pytest.mark.asyncio
async def test_connector_close_without_client_is_noop():
    await SupabaseConnector("https://example.supabase.co", "anon-key").aclose()


def test_connector_factory_requires_credentials():
    with pytest.raises(RuntimeError, match="supabase_url"):
        create_supabase_connector(ApiSettings())

    connector = create_supabase_connector(ApiSettings(supabase_url="https://x.supabase.co", supabase_key="k"))
    assert connector.url == "https://x.supabase.co"
