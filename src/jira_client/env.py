"""
Environment lookups for prefixed client settings (``JIRA_BASE_URL`` etc.).
"""
import os
from typing import Any, Iterable, Optional, Union


def resolve(arg: Any, env_keys: Union[str, Iterable[str]], default: Any = None) -> Any:
    """
    Resolve a setting in priority order:
    1. Direct argument (if not None)
    2. First environment variable that is set
    3. Default value
    """
    if arg is not None:
        return arg

    if isinstance(env_keys, str):
        env_keys = [env_keys]
    for key in env_keys:
        val = os.getenv(key)
        if val is not None:
            return val

    return default


def resolve_float(
    arg: Any,
    env_keys: Union[str, Iterable[str]],
    default: Optional[float] = None,
) -> Optional[float]:
    """Resolve a float; unparseable values fall back to ``default``."""
    val = resolve(arg, env_keys, default)
    if val is None:
        return None
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def resolve_bool(arg: Any, env_keys: Union[str, Iterable[str]], default: bool) -> bool:
    """Resolve a flag; ``true``/``1``/``yes``/``on`` (any case) are true."""
    val = resolve(arg, env_keys, default)
    if isinstance(val, str):
        return val.strip().lower() in ("true", "1", "yes", "on")
    return bool(val)
