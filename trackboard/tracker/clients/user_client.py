# ============================================
# tracker/clients/user_client.py
# ============================================
import logging
from typing import Dict, Iterable

import requests
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


class UserServiceClient:
    """
    Client for the identity provider's profile API.

    Only used to decorate API output with display names and handles; a
    failing or unconfigured service yields an empty mapping, never an error.
    """

    CACHE_PREFIX = 'tracker:user:'

    @classmethod
    def _base_url(cls) -> str:
        return (getattr(settings, 'USER_SERVICE_URL', '') or '').rstrip('/')

    @classmethod
    def _cache_key(cls, user_id: str) -> str:
        return f"{cls.CACHE_PREFIX}{user_id}"

    @staticmethod
    def _to_profile(raw: Dict) -> Dict:
        if not isinstance(raw, dict):
            raise ValueError(f"malformed user entry: {raw!r}")
        return {
            'id': str(raw['id']),
            'display_name': raw.get('display_name') or raw.get('full_name') or '',
            'handle': raw.get('handle') or raw.get('username') or '',
        }

    @classmethod
    def get_users_by_ids(cls, user_ids: Iterable) -> Dict[str, Dict]:
        """
        Batch get user profiles by IDs
        Returns dict: {user_id: {id, display_name, handle}}
        """
        user_ids = {str(uid) for uid in user_ids if uid}
        base_url = cls._base_url()
        if not user_ids or not base_url:
            return {}

        cached = cache.get_many([cls._cache_key(uid) for uid in user_ids])
        users_dict = {profile['id']: profile for profile in cached.values()}
        ids_to_fetch = sorted(user_ids - set(users_dict))

        if ids_to_fetch:
            try:
                response = requests.post(
                    f"{base_url}/users/batch",
                    json={'ids': ids_to_fetch},
                    timeout=getattr(settings, 'USER_SERVICE_TIMEOUT', 5)
                )
                response.raise_for_status()
                payload = response.json()
                if not isinstance(payload, list):
                    raise ValueError(f"expected a list of users, got {type(payload).__name__}")
                fetched = [cls._to_profile(user) for user in payload]
            except (requests.RequestException, ValueError, KeyError) as e:
                logger.warning("[user-client] batch fetch failed for %s ids: %s", len(ids_to_fetch), e)
                return users_dict

            cache.set_many(
                {cls._cache_key(profile['id']): profile for profile in fetched},
                getattr(settings, 'USER_SERVICE_CACHE_TTL', 300)
            )
            users_dict.update({profile['id']: profile for profile in fetched})

        return users_dict
