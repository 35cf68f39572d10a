"""Base model and coercion helpers for service payloads.

Every response model inherits from :class:`CarparkBaseModel` which is
frozen and ignores unknown keys.  The public feeds send numbers as
strings and use ``""`` / ``"--"`` as "not available"; the helpers here
turn those into ``None`` so field defaults apply.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

# Sentinel strings the feeds use for "not available".
_SENTINELS = frozenset({"", "--", "NA", "N/A", "NaN", "nan"})


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in _SENTINELS:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


OptionalFloat = Annotated[float | None, BeforeValidator(safe_float)]
"""Float field that tolerates numeric strings and sentinels."""

OptionalInt = Annotated[int | None, BeforeValidator(safe_int)]
"""Int field that tolerates numeric strings and sentinels."""


class CarparkBaseModel(BaseModel):
    """Base for all pycarpark payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
