"""Seed Loader - JSON sources, reset semantics, and the CLI entry point."""

import json

import httpx
import pytest
from pydantic import ValidationError
from sqlalchemy import select
from typer.testing import CliRunner

import cafe_api.db.seed as seed_module
from cafe_api.config import Settings
from cafe_api.core.errors import CafeValidationError
from cafe_api.db.seed import cli, load_cafe_records, reset_and_seed
from cafe_api.models.cafe import Cafe

RECORDS = [
    {
        "title": "Blue Bottle", "address": "1 Main St",
        "picture": "https://example.com/blue.jpg",
        "hours": {"Mon": ["09:00-17:00"]}, "criteria": ["Wifi", "Coffee"],
    },
    {"title": "Red Door", "address": "2 Main St", "rating": 4},
]


async def _titles(db) -> list[str]:
    result = await db.execute(select(Cafe.title).order_by(Cafe.title))
    return list(result.scalars().all())


def test_load_from_file(tmp_path):
    path = tmp_path / "cafes.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    assert load_cafe_records(str(path)) == RECORDS


def test_load_from_url(monkeypatch):
    calls = []

    def _fake_get(url, **kwargs):
        calls.append(url)
        return httpx.Response(
            200, json=RECORDS, request=httpx.Request("GET", url),
        )

    monkeypatch.setattr(httpx, "get", _fake_get)
    assert load_cafe_records("https://example.com/cafes.json") == RECORDS
    assert calls == ["https://example.com/cafes.json"]


def test_load_from_url_raises_on_http_error(monkeypatch):
    def _fake_get(url, **kwargs):
        return httpx.Response(404, request=httpx.Request("GET", url))

    monkeypatch.setattr(httpx, "get", _fake_get)
    with pytest.raises(httpx.HTTPStatusError):
        load_cafe_records("https://example.com/missing.json")


def test_load_rejects_non_array(tmp_path):
    path = tmp_path / "cafes.json"
    path.write_text(json.dumps({"cafes": RECORDS}), encoding="utf-8")
    with pytest.raises(ValueError, match="JSON array"):
        load_cafe_records(str(path))


async def test_reset_replaces_existing_cafes(test_db):
    test_db.add(Cafe(title="Old Cafe", address="0 Main St"))
    await test_db.commit()

    count = await reset_and_seed(test_db, RECORDS)

    assert count == 2
    assert await _titles(test_db) == ["Blue Bottle", "Red Door"]


async def test_reset_keeps_structured_fields(test_db):
    await reset_and_seed(test_db, RECORDS)
    result = await test_db.execute(select(Cafe).where(Cafe.title == "Blue Bottle"))
    cafe = result.scalar_one()
    assert cafe.hours == {"Mon": ["09:00-17:00"]}
    assert cafe.criteria == ["Wifi", "Coffee"]


async def test_blank_record_aborts_before_delete(test_db):
    test_db.add(Cafe(title="Old Cafe", address="0 Main St"))
    await test_db.commit()

    with pytest.raises(CafeValidationError):
        await reset_and_seed(test_db, [*RECORDS, {"title": "No Address"}])
    assert await _titles(test_db) == ["Old Cafe"]


async def test_malformed_record_aborts(test_db):
    with pytest.raises(ValidationError):
        await reset_and_seed(test_db, [{"title": "T", "address": "A", "criteria": "Wifi"}])
    assert await _titles(test_db) == []


def test_cli_seeds_from_file(tmp_path, monkeypatch):
    path = tmp_path / "cafes.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    seeded = {}

    async def _fake_seed(settings, records):
        seeded["records"] = records
        return len(records)

    monkeypatch.setattr(seed_module, "_seed", _fake_seed)
    monkeypatch.setattr(seed_module, "setup_logging", lambda *args: None)

    result = CliRunner().invoke(cli, [str(path)])

    assert result.exit_code == 0, result.output
    assert seeded["records"] == RECORDS


def test_cli_requires_source(monkeypatch):
    monkeypatch.setattr(
        seed_module, "get_settings", lambda: Settings(seed_source=None),
    )
    result = CliRunner().invoke(cli, [])
    assert result.exit_code != 0


async def test_duplicate_pair_aborts_before_delete(test_db):
    test_db.add(Cafe(title="Old Cafe", address="0 Main St"))
    await test_db.commit()

    duplicate = {"title": "Red Door", "address": "2 Main St"}
    with pytest.raises(CafeValidationError) as exc_info:
        await reset_and_seed(test_db, [*RECORDS, duplicate])
    assert exc_info.value.errors == {"title": ["has already been taken"]}
    assert await _titles(test_db) == ["Old Cafe"]


def test_cli_falls_back_to_configured_source(tmp_path, monkeypatch):
    path = tmp_path / "cafes.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    seeded = {}

    async def _fake_seed(settings, records):
        seeded["records"] = records
        return len(records)

    monkeypatch.setattr(seed_module, "_seed", _fake_seed)
    monkeypatch.setattr(seed_module, "setup_logging", lambda *args: None)
    monkeypatch.setattr(
        seed_module, "get_settings", lambda: Settings(seed_source=str(path)),
    )

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0, result.output
    assert seeded["records"] == RECORDS
