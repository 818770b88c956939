import json

import redis.asyncio as redis
from smartclinic.core.config import settings

class RedisClient:
    """Registry of issued access tokens. A token missing here is treated as revoked."""

    def __init__(self, url: str = settings.REDIS_URL):
        self.redis = redis.from_url(url, encoding="utf-8", decode_responses=True)

    async def set_token(self, token: str, value: dict, expire: int):
        await self.redis.set(f"token:{token}", json.dumps(value), ex=expire)

    async def get_token(self, token: str) -> dict | None:
        raw = await self.redis.get(f"token:{token}")
        if raw is None:
            return None
        return json.loads(raw)

    async def delete_token(self, token: str) -> bool:
        return bool(await self.redis.delete(f"token:{token}"))

    async def close(self):
        await self.redis.aclose()

redis_client = RedisClient()
