"""
Storage key construction.

Keys are namespaced per application and, optionally, per user so several
accounts can share one device store without seeing each other's data.
"""

from datetime import date

from mutabaah.config import get_settings

FOLLOW_ALONG_SESSIONS = "follow_along_sessions"
DAILY_USAGE_PREFIX = "voice_sessions_"


def build_storage_key(
    name: str,
    user_id: str | None = None,
    namespace: str | None = None,
) -> str:
    """
    Build a key-value store key.

    Args:
        name: Logical name of the stored value
        user_id: Owner of the value (omit for device-wide values)
        namespace: Key prefix (default: settings.storage_namespace)

    Returns:
        ``<namespace>:<name>`` or ``<namespace>:<user_id>:<name>``

    Examples:
        >>> build_storage_key("follow_along_sessions", namespace="@quran_notes")
        '@quran_notes:follow_along_sessions'
        >>> build_storage_key("follow_along_sessions", "u1", "@quran_notes")
        '@quran_notes:u1:follow_along_sessions'
    """
    if not name:
        raise ValueError("Storage key name must not be empty")

    namespace = namespace or get_settings().storage_namespace
    if user_id:
        return f"{namespace}:{user_id}:{name}"
    return f"{namespace}:{name}"


def daily_usage_key(
    day: date,
    user_id: str | None = None,
    namespace: str | None = None,
) -> str:
    """Key of the follow-along usage counter for one calendar day."""
    return build_storage_key(f"{DAILY_USAGE_PREFIX}{day.isoformat()}", user_id, namespace)
