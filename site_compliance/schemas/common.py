"""
Shared schema helpers
"""
import re
from typing import Any

_TZ_WITHOUT_MINUTES = re.compile(r'([+-]\d{2})$')


def fix_datetime_timezone(v: Any) -> Any:
    """
    Fix datetime timezone format from PostgreSQL
    PostgreSQL returns: '2025-10-01 09:17:39.587802+00'
    Pydantic expects: '2025-10-01 09:17:39.587802+00:00'
    """
    if v == '' or v is None:
        return None

    if isinstance(v, str) and _TZ_WITHOUT_MINUTES.search(v):
        v = v + ':00'

    return v
