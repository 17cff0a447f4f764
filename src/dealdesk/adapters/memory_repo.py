from datetime import datetime, timezone
from typing import Any

from dealdesk.adapters.config import AppConfig
from dealdesk.domain.assumptions import GlobalAssumptions, VoucherZipEntry, default_assumptions
from dealdesk.domain.ports import AssumptionsRepository


class InMemoryAssumptionsRepository(AssumptionsRepository):
    """
    Single-snapshot store for GlobalAssumptions.

    Every read hands back a deep copy, so the only way to change the stored
    snapshot is through update / reset / the voucher ZIP helpers.
    """

    def __init__(self, cfg: AppConfig | None = None) -> None:
        self._cfg = cfg
        self._current: GlobalAssumptions | None = None

    def _load(self) -> GlobalAssumptions:
        if self._current is None:
            self._current = default_assumptions(self._cfg)
        return self._current

    def _store(self, snapshot: GlobalAssumptions) -> GlobalAssumptions:
        stamped = snapshot.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        # re-validate the merged record; model_copy(update=...) skips validation
        self._current = GlobalAssumptions.model_validate(stamped.model_dump())
        return self._current.model_copy(deep=True)

    def get(self) -> GlobalAssumptions:
        return self._load().model_copy(deep=True)

    def update(self, patch: dict[str, Any]) -> GlobalAssumptions:
        merged = self._load().model_dump()
        merged.update({k: v for k, v in patch.items() if k != "updated_at"})
        return self._store(GlobalAssumptions.model_validate(merged))

    def reset(self) -> GlobalAssumptions:
        return self._store(default_assumptions(self._cfg))

    def upsert_voucher_zip(self, entry: VoucherZipEntry) -> GlobalAssumptions:
        current = self._load()
        rows = [e for e in current.voucher_zip_data if e.zipcode != entry.zipcode]
        rows.append(entry)
        return self._store(current.model_copy(update={"voucher_zip_data": rows}))

    def remove_voucher_zip(self, zipcode: str) -> GlobalAssumptions:
        current = self._load()
        rows = [e for e in current.voucher_zip_data if e.zipcode != zipcode]
        return self._store(current.model_copy(update={"voucher_zip_data": rows}))
