"""
Armazenamento do token vigente no Redis.

O par inteiro é serializado em JSON e criptografado antes de ir para o
Redis; a chave expira junto com o refresh token quando o TikTok informa
`refresh_token_expires_in`.
"""

from typing import Optional, Protocol

import redis.asyncio as aioredis

from shared.core.logging import get_logger
from projects.tiktok_ads.schemas.oauth import TokenPair
from projects.tiktok_ads.security.token_encryption import decrypt_token, encrypt_token

logger = get_logger(__name__)


class TokenStore(Protocol):
    async def save(self, token: TokenPair) -> None: ...

    async def load(self) -> Optional[TokenPair]: ...


class RedisTokenStore:
    """TokenStore sobre redis.asyncio."""

    DEFAULT_KEY = "tiktok_ads:token"

    def __init__(self, redis_client: aioredis.Redis, encryption_key: str, key: str = DEFAULT_KEY):
        self._redis = redis_client
        self._encryption_key = encryption_key
        self.key = key

    @classmethod
    def from_url(cls, url: str, encryption_key: str, key: str = DEFAULT_KEY) -> "RedisTokenStore":
        return cls(aioredis.from_url(url, decode_responses=True), encryption_key, key)

    async def save(self, token: TokenPair) -> None:
        payload = encrypt_token(token.model_dump_json(), self._encryption_key)
        await self._redis.set(self.key, payload, ex=token.refresh_token_expires_in or None)
        logger.info("Token armazenado", key=self.key, expires_at=str(token.expires_at))

    async def load(self) -> Optional[TokenPair]:
        payload = await self._redis.get(self.key)
        if payload is None:
            return None
        return TokenPair.model_validate_json(decrypt_token(payload, self._encryption_key))

    async def close(self) -> None:
        await self._redis.aclose()
