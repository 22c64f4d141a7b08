"""
Session Store - Per-user bot data kept in Redis
"""
import json
from typing import Dict, Optional

import redis

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import UserData

logger = get_logger("session-store")


class SessionStore:
    """
    Loads and saves UserData (language preferences, translation history).

    Falls back to process memory when Redis is unreachable, so the bot keeps
    answering; that data is lost on restart.
    """

    KEY_PREFIX = "translator:user:"

    def __init__(self, client: Optional[redis.Redis] = None, ttl_seconds: int = Config.SESSION_TTL_SECONDS):
        self.ttl_seconds = ttl_seconds
        self._memory: Dict[str, str] = {}

        if client is None:
            try:
                client = redis.Redis(
                    host=Config.REDIS_HOST,
                    port=Config.REDIS_PORT,
                    decode_responses=True,
                )
                client.ping()
            except redis.RedisError as e:
                logger.warning("redis_connection_failed", error=str(e))
                client = None

        self.client = client
        logger.info("session_store_initialized", backend="redis" if client else "memory")

    def _key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}{user_id}"

    def load(self, user_id: str) -> UserData:
        """User data for user_id; empty UserData if nothing is stored"""
        key = self._key(user_id)
        raw = None
        if self.client is not None:
            try:
                raw = self.client.get(key)
            except redis.RedisError as e:
                logger.error("session_load_failed", user_id=user_id, error=str(e))
                raise
        else:
            raw = self._memory.get(key)

        if not raw:
            return UserData()
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return UserData.parse_obj(json.loads(raw))
        except ValueError as e:
            # Corrupt or outdated document; start over rather than fail every request
            logger.warning("session_data_discarded", user_id=user_id, error=str(e))
            return UserData()

    def save(self, user_id: str, data: UserData) -> None:
        key = self._key(user_id)
        payload = data.json()
        if self.client is not None:
            try:
                self.client.setex(key, self.ttl_seconds, payload)
            except redis.RedisError as e:
                logger.error("session_save_failed", user_id=user_id, error=str(e))
                raise
        else:
            self._memory[key] = payload


_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get or create the session store singleton"""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
