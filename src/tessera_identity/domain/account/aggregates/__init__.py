from tessera_identity.domain.account.aggregates.account import Account

__all__ = ["Account"]
