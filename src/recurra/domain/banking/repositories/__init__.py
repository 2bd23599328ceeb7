from recurra.domain.banking.repositories.bank_account_repository import (
    BankAccountRepository,
)
from recurra.domain.banking.repositories.transaction_repository import (
    TransactionRepository,
)

__all__ = ["BankAccountRepository", "TransactionRepository"]
