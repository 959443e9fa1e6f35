from tessera_identity.application.queries.account_queries import (
    GetAccountQuery,
    ListAccountsQuery,
)

__all__ = ["GetAccountQuery", "ListAccountsQuery"]
