"""VIN decode client for the NHTSA vPIC service.

Best effort only: no retries, and failures come back as VinDecodeError for
the form to show next to the VIN field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from config import settings

logger = logging.getLogger(__name__)

VIN_MIN_LENGTH = 11
VIN_MAX_LENGTH = 17

INVALID_VIN_MESSAGE = "Enter a valid VIN (11–17 chars)"
DECODE_FAILED_MESSAGE = "VIN decode failed. Try again."


class VinDecodeError(Exception):
    pass


@dataclass(frozen=True)
class VinDecodeResult:
    vin: str
    year: str = ""
    make: str = ""
    model: str = ""


def normalize_vin(vin: Optional[str]) -> str:
    return (vin or "").strip().upper()


def is_valid_vin_length(vin: str) -> bool:
    return VIN_MIN_LENGTH <= len(vin) <= VIN_MAX_LENGTH


def _field(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    return value.strip() if isinstance(value, str) else ""


def parse_decode_response(vin: str, data: Any) -> VinDecodeResult:
    """Pick ModelYear/Make/Model out of Results[0]; anything missing becomes ""."""
    results = data.get("Results") if isinstance(data, dict) else None
    row = results[0] if isinstance(results, list) and results else None
    if not isinstance(row, dict):
        return VinDecodeResult(vin=vin)
    return VinDecodeResult(
        vin=vin,
        year=_field(row, "ModelYear"),
        make=_field(row, "Make"),
        model=_field(row, "Model"),
    )


class VinDecodeClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or settings.VIN_DECODE_BASE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.VIN_DECODE_TIMEOUT
        self._transport = transport

    async def decode(self, vin: str) -> VinDecodeResult:
        vin = normalize_vin(vin)
        if not is_valid_vin_length(vin):
            raise VinDecodeError(INVALID_VIN_MESSAGE)

        url = f"{self._base_url}/decodevinvalues/{quote(vin, safe='')}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(url, params={"format": "json"})
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("VIN decode failed for %s: %s", vin, exc)
            raise VinDecodeError(DECODE_FAILED_MESSAGE) from exc

        return parse_decode_response(vin, data)
