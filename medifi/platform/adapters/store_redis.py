import json
import logging
from redis.asyncio import from_url as redis_from_url
from medifi.platform.ports.document_store import DocumentStorePort

log = logging.getLogger("store.redis")

class RedisDocumentStore(DocumentStorePort):
    """One Redis hash per collection: field = document key, value = JSON body."""

    def __init__(self, url: str | None, prefix: str = "medifi"):
        if not url:
            raise RuntimeError("REDIS_URL not configured")
        self.url = url
        self.prefix = prefix
        self.redis = None

    def _hash(self, collection: str) -> str:
        return f"{self.prefix}:{collection}"

    async def connect(self) -> None:
        if self.redis is None:
            self.redis = redis_from_url(self.url, encoding="utf-8", decode_responses=True)
        await self.redis.ping()
        log.info(f"Redis document store connected prefix={self.prefix}")

    async def get(self, collection: str, key: str) -> dict | None:
        data = await self.redis.hget(self._hash(collection), key)
        if data:
            return json.loads(data)
        return None

    async def put(self, collection: str, key: str, doc: dict) -> None:
        await self.redis.hset(self._hash(collection), key, json.dumps(doc))

    async def delete(self, collection: str, key: str) -> bool:
        return await self.redis.hdel(self._hash(collection), key) > 0

    async def scan(self, collection: str) -> list[dict]:
        values = await self.redis.hvals(self._hash(collection))
        return [json.loads(v) for v in values]

    async def close(self) -> None:
        if self.redis:
            await self.redis.aclose()
