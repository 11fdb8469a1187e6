import argparse
import asyncio
import re
from pathlib import Path

from shopcart import seeds as app_seeds
from shopcart.db.session import SessionLocal, init_models

SAFE_JSON_FILENAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*\.json$")


def _normalize_json_filename(raw_path: str) -> str:
    raw = (raw_path or "").strip()
    if not raw:
        raise SystemExit("Path is required")
    if Path(raw).name != raw:
        raise SystemExit("Only JSON file names are allowed (no directories)")
    if not SAFE_JSON_FILENAME_RE.fullmatch(raw):
        raise SystemExit("Invalid JSON file name")
    return raw


def _resolve_json_path(raw_path: str) -> Path:
    raw = _normalize_json_filename(raw_path)
    resolved = (Path.cwd().resolve() / raw).resolve(strict=False)
    if not resolved.is_file():
        raise SystemExit(f"Input file not found: {resolved}")
    return resolved


async def _seed_products(path: Path) -> tuple[int, int]:
    products = app_seeds.load_products_file(path)
    async with SessionLocal() as session:
        return await app_seeds.seed_products(session, products)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shopcart maintenance utilities")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("init-db", help="Create database tables")
    seed = subparsers.add_parser("seed-products", help="Load products from a JSON file in the working directory")
    seed.add_argument("file", help="JSON file name, e.g. products.json")
    return parser


def _run_cli_command(args: argparse.Namespace) -> bool:
    if args.command == "init-db":
        asyncio.run(init_models())
        print("Tables created")
        return True

    if args.command == "seed-products":
        path = _resolve_json_path(args.file)
        created, updated = asyncio.run(_seed_products(path))
        print(f"Seeded products: {created} created, {updated} updated")
        return True

    return False


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not _run_cli_command(args):
        parser.print_help()


if __name__ == "__main__":
    main()
