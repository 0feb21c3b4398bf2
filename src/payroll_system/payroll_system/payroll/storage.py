from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from ..core.constants import SLIP_KEY_PREFIX
from ..core.exceptions import ValidationError
from .model import PayPeriod

_SLIP_KEY_RE = re.compile(rf"^{SLIP_KEY_PREFIX}/(?P<employee_id>[^/]+)_(?P<period>\d{{4}}-\d{{2}})\.[A-Za-z0-9]+$")


def slip_key(employee_id: str, period: PayPeriod, *, extension: str = "txt") -> str:
    """Object key of a rendered salary slip, one per (employee, period)."""
    return f"{SLIP_KEY_PREFIX}/{employee_id}_{period.label}.{extension}"


def parse_slip_key(key: str) -> tuple[str, PayPeriod]:
    """Inverse of ``slip_key``: (employee_id, period) the slip belongs to."""
    m = _SLIP_KEY_RE.match(key or "")
    if not m:
        raise ValidationError(f"Invalid slip key: {key!r}")
    return m.group("employee_id"), PayPeriod.parse(m.group("period"))


class SlipStorage(Protocol):
    def upload(self, key: str, content: bytes) -> str:
        """Store the document and return a retrieval URL."""

        raise NotImplementedError


class LocalSlipStorage(SlipStorage):
    """Filesystem-backed storage for development and single-host setups."""

    def __init__(self, root: str | Path, *, base_url: str = "/slips"):
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    def upload(self, key: str, content: bytes) -> str:
        target = (self._root / key).resolve()
        if self._root.resolve() not in target.parents:
            raise ValidationError(f"Invalid slip key: {key!r}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        return f"{self._base_url}/{key}"
