import asyncio
import json
import logging
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from shopcart import cli
from shopcart import seeds as app_seeds
from shopcart.db.session import init_models
from shopcart.models.catalog import Product
from shopcart.schemas.catalog import ProductSeed


@pytest.mark.parametrize("raw", ["", "../products.json", "dir/products.json", "products.txt", ".hidden.json"])
def test_json_filename_is_validated(raw: str) -> None:
    with pytest.raises(SystemExit):
        cli._normalize_json_filename(raw)


def test_load_products_file_rejects_negative_price(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"id": "p1", "name": "P", "price": "-1.00", "stock_quantity": 1}]))
    with pytest.raises(ValidationError):
        app_seeds.load_products_file(path)


def test_load_products_file_rejects_stock_above_column_range(tmp_path: Path) -> None:
    path = tmp_path / "big.json"
    path.write_text(json.dumps([{"id": "p1", "name": "P", "price": "1.00", "stock_quantity": 2_147_483_648}]))
    with pytest.raises(ValidationError):
        app_seeds.load_products_file(path)


def test_seed_products_logs_counts(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}", future=True)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    seeds = [ProductSeed(id="cup", name="Cup", price=Decimal("10.99"), stock_quantity=5)]

    async def run() -> tuple[int, int]:
        await init_models(engine)
        async with SessionLocal() as session:
            return await app_seeds.seed_products(session, seeds)

    with caplog.at_level(logging.INFO, logger="shopcart.seeds"):
        assert asyncio.run(run()) == (1, 0)
    asyncio.run(engine.dispose())

    record = next(r for r in caplog.records if r.getMessage() == "products_seeded")
    assert record.products_created == 1
    assert record.products_updated == 0


def test_seed_products_command_inserts_then_updates(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}", future=True)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    asyncio.run(init_models(engine))
    monkeypatch.setattr(cli, "SessionLocal", SessionLocal)
    monkeypatch.chdir(tmp_path)

    rows = [
        {"id": "cup", "name": "Cup", "price": "10.99", "stock_quantity": 5},
        {"id": "vase", "name": "Vase", "price": "30.00", "stock_quantity": 1, "active": False},
    ]
    (tmp_path / "products.json").write_text(json.dumps(rows))
    cli.main(["seed-products", "products.json"])
    assert "2 created, 0 updated" in capsys.readouterr().out

    rows[0]["stock_quantity"] = 9
    (tmp_path / "products.json").write_text(json.dumps(rows))
    cli.main(["seed-products", "products.json"])
    assert "0 created, 2 updated" in capsys.readouterr().out

    async def fetch() -> Product:
        async with SessionLocal() as session:
            return await session.get(Product, "cup")

    cup = asyncio.run(fetch())
    assert cup.stock_quantity == 9
    assert cup.price == Decimal("10.99")
    asyncio.run(engine.dispose())


def test_missing_seed_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        cli.main(["seed-products", "absent.json"])


def test_no_command_prints_help(capsys) -> None:
    cli.main([])
    assert "seed-products" in capsys.readouterr().out
