from .rebalance import RebalanceReport, rebalance_catalog

__all__ = ["RebalanceReport", "rebalance_catalog"]
