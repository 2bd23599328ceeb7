"""Unit tests for DeleteRecurringTransactionCommand."""

from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from recurra.application.commands.recurring import DeleteRecurringTransactionCommand
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.value_objects import ProjectionDelta


@pytest.fixture
def command(
    mock_recurring_repo,
    mock_bank_account_repo,
    mock_transaction_repo,
    unit_of_work,
):
    return DeleteRecurringTransactionCommand(
        recurring_transaction_repository=mock_recurring_repo,
        bank_account_repository=mock_bank_account_repo,
        transaction_repository=mock_transaction_repo,
        unit_of_work=unit_of_work,
    )


class TestDeleteRecurringTransactionCommand:
    @pytest.mark.asyncio
    async def test_outflow_contribution_is_reversed(
        self,
        command,
        make_recurring,
        mock_recurring_repo,
        mock_bank_account_repo,
        unit_of_work,
    ):
        recurring = make_recurring("-1800")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(recurring.id)

        mock_bank_account_repo.adjust_projections.assert_awaited_once_with(
            recurring.bank_account_id,
            ProjectionDelta(outflows=Decimal("-1800")),
        )
        mock_recurring_repo.delete.assert_awaited_once_with(recurring.id)
        assert unit_of_work.commits == 1

    @pytest.mark.asyncio
    async def test_inflow_contribution_is_reversed(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("3200")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(recurring.id)

        mock_bank_account_repo.adjust_projections.assert_awaited_once_with(
            recurring.bank_account_id,
            ProjectionDelta(inflows=Decimal("-3200")),
        )

    @pytest.mark.asyncio
    async def test_non_affecting_series_leaves_counters(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("-15", affect_available_balance=False)
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(recurring.id)

        mock_bank_account_repo.adjust_projections.assert_not_awaited()
        mock_recurring_repo.delete.assert_awaited_once_with(recurring.id)

    @pytest.mark.asyncio
    async def test_cancelled_series_can_be_deleted(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("-50")
        recurring.cancel()
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(recurring.id)

        mock_bank_account_repo.adjust_projections.assert_awaited_once()
        mock_recurring_repo.delete.assert_awaited_once_with(recurring.id)

    @pytest.mark.asyncio
    async def test_linked_transactions_are_released(
        self, command, make_recurring, mock_recurring_repo, mock_transaction_repo
    ):
        recurring = make_recurring()
        mock_recurring_repo.find_by_id.return_value = recurring
        mock_transaction_repo.unlink_recurring_transaction.return_value = 4

        await command.execute(recurring.id)

        mock_transaction_repo.unlink_recurring_transaction.assert_awaited_once_with(
            recurring.id,
        )

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(
        self, command, mock_recurring_repo, mock_bank_account_repo, unit_of_work
    ):
        with pytest.raises(RecurringTransactionNotFoundError):
            await command.execute(uuid4())

        mock_recurring_repo.delete.assert_not_awaited()
        mock_bank_account_repo.adjust_projections.assert_not_awaited()
        assert unit_of_work.rollbacks == 1

    @pytest.mark.asyncio
    async def test_failing_delete_rolls_back(
        self, command, make_recurring, mock_recurring_repo, unit_of_work
    ):
        recurring = make_recurring()
        mock_recurring_repo.find_by_id.return_value = recurring
        mock_recurring_repo.delete.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError):
            await command.execute(recurring.id)

        assert unit_of_work.commits == 0
        assert unit_of_work.rollbacks == 1

    def test_from_factory(self):
        factory = MagicMock()

        command = DeleteRecurringTransactionCommand.from_factory(factory)

        assert isinstance(command, DeleteRecurringTransactionCommand)
        factory.recurring_transaction_repository.assert_called_once()
        factory.bank_account_repository.assert_called_once()
        factory.transaction_repository.assert_called_once()
        factory.unit_of_work.assert_called_once()
