"""Recurring transaction commands - lifecycle and metadata mutations."""

from recurra.application.commands.recurring.accept_recurring_candidate_command import (
    AcceptRecurringCandidateCommand,
)
from recurra.application.commands.recurring.change_recurring_status_command import (
    ChangeRecurringStatusCommand,
)
from recurra.application.commands.recurring.create_recurring_transaction_command import (  # NOQA: E501
    CreateRecurringTransactionCommand,
)
from recurra.application.commands.recurring.delete_recurring_transaction_command import (  # NOQA: E501
    DeleteRecurringTransactionCommand,
)
from recurra.application.commands.recurring.recurring_metadata_commands import (
    AddRecurringTagsCommand,
    AssignRecurringTransactionCommand,
    ReplaceRecurringTagsCommand,
    UpdateRecurringCategoryCommand,
    UpdateRecurringMerchantCommand,
    UpdateRecurringNotesCommand,
)
from recurra.application.commands.recurring.update_recurring_transaction_command import (  # NOQA: E501
    UpdateRecurringTransactionCommand,
)

__all__ = [
    # Lifecycle
    "AcceptRecurringCandidateCommand",
    "ChangeRecurringStatusCommand",
    "CreateRecurringTransactionCommand",
    "DeleteRecurringTransactionCommand",
    "UpdateRecurringTransactionCommand",
    # Metadata
    "AddRecurringTagsCommand",
    "AssignRecurringTransactionCommand",
    "ReplaceRecurringTagsCommand",
    "UpdateRecurringCategoryCommand",
    "UpdateRecurringMerchantCommand",
    "UpdateRecurringNotesCommand",
]
