"""JSON-file datastore shared with the rest of the platform."""
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from fastapi import Request

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "posts", "movies")

T = TypeVar("T")


class JsonStore:
    """Whole-file JSON document store.

    Every read loads the file, every write replaces it. Writes go through a
    lock so concurrent read-modify-write cycles in one process don't clobber
    each other.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _read_sync(self) -> dict[str, Any]:
        if not self.path.exists():
            seed = {name: [] for name in COLLECTIONS}
            self._write_sync(seed)
            logger.info("Created empty datastore at %s", self.path)
            return seed
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def _write_sync(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, default=str)
        tmp.replace(self.path)

    async def read(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._read_sync)

    async def write(self, data: dict[str, Any]) -> None:
        await asyncio.to_thread(self._write_sync, data)

    async def modify(self, fn: Callable[[dict[str, Any]], T]) -> T:
        """Run ``fn`` on the whole datastore under the write lock, then save.

        Exceptions raised by ``fn`` abort the write.
        """
        async with self._lock:
            data = await self.read()
            result = fn(data)
            await self.write(data)
        return result

    async def all(self, collection: str) -> list[dict[str, Any]]:
        data = await self.read()
        return data[collection]

    async def find_one(self, collection: str, **match: Any) -> dict[str, Any] | None:
        for doc in await self.all(collection):
            if all(doc.get(k) == v for k, v in match.items()):
                return doc
        return None

    async def insert(self, collection: str, doc: dict[str, Any], *, prepend: bool = False) -> dict[str, Any]:
        async with self._lock:
            data = await self.read()
            if prepend:
                data[collection].insert(0, doc)
            else:
                data[collection].append(doc)
            await self.write(data)
        return doc

    async def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
        async with self._lock:
            data = await self.read()
            for doc in data[collection]:
                if doc.get("id") == doc_id:
                    doc.update(changes)
                    await self.write(data)
                    return doc
        return None

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with self._lock:
            data = await self.read()
            remaining = [d for d in data[collection] if d.get("id") != doc_id]
            if len(remaining) == len(data[collection]):
                return False
            data[collection] = remaining
            await self.write(data)
        return True


def get_store(request: Request) -> JsonStore:
    """FastAPI dependency: the application's datastore."""
    return request.app.state.store
