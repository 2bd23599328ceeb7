from recurra.domain.banking.value_objects.bank_account import BankAccount
from recurra.domain.banking.value_objects.transaction_record import TransactionRecord

__all__ = ["BankAccount", "TransactionRecord"]
