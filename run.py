import asyncio
import sys

from marketplace.allocation import InsufficientSellersError
from marketplace.config import settings
from marketplace.jobs import RebalanceReport, rebalance_catalog
from marketplace.logging_config import setup_logging
from marketplace.store import RestStore, SnapshotStore, StoreError


async def main() -> RebalanceReport:
    if settings.STORE_SNAPSHOT_PATH:
        store = SnapshotStore.from_file(settings.STORE_SNAPSHOT_PATH)
        report = await rebalance_catalog(store)
        store.dump(settings.STORE_SNAPSHOT_PATH)
        return report
    async with RestStore.connect() as store:
        return await rebalance_catalog(store)


def run() -> None:
    setup_logging(settings.LOG_DIR, settings.LOG_LEVEL)
    try:
        report = asyncio.run(main())
    except InsufficientSellersError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(12) from exc
    except StoreError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(2) from exc
    print(report.summary())
    if not report.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    run()
