"""Domain layer for ledgerkeep application."""

# Services import the database layer, which itself imports domain.entities,
# so they are resolved lazily to keep the import graph acyclic.
_SERVICES = {
    "BalanceLedger": "ledgerkeep.domain.ledger",
    "TransactionService": "ledgerkeep.domain.transaction",
    "CategoryService": "ledgerkeep.domain.category",
    "AccountService": "ledgerkeep.domain.account",
    "AnalyticsService": "ledgerkeep.domain.analytics",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
