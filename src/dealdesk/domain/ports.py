# src/dealdesk/domain/ports.py
from __future__ import annotations

from typing import Any, Protocol

from dealdesk.domain.assumptions import GlobalAssumptions, VoucherZipEntry


# ----------------------------
# Global assumptions storage
# ----------------------------

class AssumptionsRepository(Protocol):
    def get(self) -> GlobalAssumptions:
        ...

    def update(self, patch: dict[str, Any]) -> GlobalAssumptions:
        ...

    def reset(self) -> GlobalAssumptions:
        ...

    def upsert_voucher_zip(self, entry: VoucherZipEntry) -> GlobalAssumptions:
        ...

    def remove_voucher_zip(self, zipcode: str) -> GlobalAssumptions:
        ...
