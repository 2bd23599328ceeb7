"""Unit tests for UpdateRecurringTransactionCommand."""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from recurra.application.commands.recurring import UpdateRecurringTransactionCommand
from recurra.application.dtos.recurring import RecurringTransactionUpdateInput
from recurra.domain.banking.value_objects import BankAccount
from recurra.domain.recurring.exceptions import (
    BankAccountAccessDeniedError,
    RecurringTransactionCancelledError,
    RecurringTransactionNotFoundError,
)
from recurra.domain.recurring.value_objects import (
    ProjectionDelta,
    RecurringStatus,
    TransactionFrequency,
)
from recurra.domain.shared.time import today_utc


@pytest.fixture
def command(
    mock_recurring_repo,
    mock_bank_account_repo,
    unit_of_work,
    tier_limits,
    user_context,
):
    return UpdateRecurringTransactionCommand(
        recurring_transaction_repository=mock_recurring_repo,
        bank_account_repository=mock_bank_account_repo,
        unit_of_work=unit_of_work,
        tier_limits=tier_limits,
        user_context=user_context,
    )


def _adjustments(mock_bank_account_repo) -> list:
    return [
        (call.args[0], call.args[1])
        for call in mock_bank_account_repo.adjust_projections.await_args_list
    ]


class TestAmountReconciliation:
    """Sign transitions on the same bank account."""

    @pytest.mark.asyncio
    async def test_larger_outflow(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("-1500")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(amount=Decimal("-1800")),
        )

        assert _adjustments(mock_bank_account_repo) == [
            (recurring.bank_account_id, ProjectionDelta(outflows=Decimal("300"))),
        ]

    @pytest.mark.asyncio
    async def test_outflow_to_inflow(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("-1200")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(amount=Decimal("300")),
        )

        ((_, delta),) = _adjustments(mock_bank_account_repo)
        assert delta.outflows == Decimal("-1200")
        assert delta.inflows == Decimal("300")

    @pytest.mark.asyncio
    async def test_inflow_to_outflow(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("500")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(amount=Decimal("-75")),
        )

        assert _adjustments(mock_bank_account_repo) == [
            (
                recurring.bank_account_id,
                ProjectionDelta(inflows=Decimal("-500"), outflows=Decimal("75")),
            ),
        ]

    @pytest.mark.asyncio
    async def test_amount_change_on_non_affecting_series(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("-20", affect_available_balance=False)
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(amount=Decimal("-40")),
        )

        mock_bank_account_repo.adjust_projections.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabling_projection_withdraws_contribution(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring("-60")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(affect_available_balance=False),
        )

        assert _adjustments(mock_bank_account_repo) == [
            (recurring.bank_account_id, ProjectionDelta(outflows=Decimal("-60"))),
        ]


class TestAccountChanges:
    @pytest.mark.asyncio
    async def test_move_to_owned_account_moves_contribution(
        self,
        command,
        make_recurring,
        bank_account,
        mock_recurring_repo,
        mock_bank_account_repo,
    ):
        savings = BankAccount(id=uuid4(), user_id=bank_account.user_id, name="Savings")
        accounts = {bank_account.id: bank_account, savings.id: savings}
        mock_bank_account_repo.find_by_id.side_effect = accounts.get
        recurring = make_recurring("-100")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(bank_account_id=savings.id),
        )

        assert recurring.bank_account_id == savings.id
        assert _adjustments(mock_bank_account_repo) == [
            (bank_account.id, ProjectionDelta(outflows=Decimal("-100"))),
            (savings.id, ProjectionDelta(outflows=Decimal("100"))),
        ]

    @pytest.mark.asyncio
    async def test_move_to_foreign_account_is_forbidden(
        self,
        command,
        make_recurring,
        mock_recurring_repo,
        mock_bank_account_repo,
        unit_of_work,
    ):
        recurring = make_recurring("-100")
        original_account = recurring.bank_account_id
        mock_recurring_repo.find_by_id.return_value = recurring

        with pytest.raises(BankAccountAccessDeniedError):
            await command.execute(
                recurring.id,
                RecurringTransactionUpdateInput(
                    bank_account_id=uuid4(),
                    amount=Decimal("-999"),
                ),
            )

        assert recurring.bank_account_id == original_account
        assert recurring.amount == Decimal("-100")
        mock_recurring_repo.save.assert_not_awaited()
        mock_bank_account_repo.adjust_projections.assert_not_awaited()
        assert unit_of_work.rollbacks == 1

    @pytest.mark.asyncio
    async def test_foreign_target_account_is_forbidden(
        self, command, make_recurring, mock_recurring_repo
    ):
        recurring = make_recurring()
        mock_recurring_repo.find_by_id.return_value = recurring

        with pytest.raises(BankAccountAccessDeniedError):
            await command.execute(
                recurring.id,
                RecurringTransactionUpdateInput(target_account_id=uuid4()),
            )


class TestScheduleChanges:
    @pytest.mark.asyncio
    async def test_frequency_change_recomputes_next_date(
        self, command, make_recurring, mock_recurring_repo
    ):
        recurring = make_recurring()
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(
                frequency=TransactionFrequency.WEEKLY,
                start_date=date(2024, 1, 1),
            ),
        )

        today = today_utc()
        assert recurring.frequency is TransactionFrequency.WEEKLY
        assert today <= recurring.next_scheduled_date < today + timedelta(days=7)
        assert (recurring.next_scheduled_date - date(2024, 1, 1)).days % 7 == 0

    @pytest.mark.asyncio
    async def test_week_of_month_only_keeps_next_date(
        self, command, make_recurring, mock_recurring_repo
    ):
        recurring = make_recurring()
        before = recurring.next_scheduled_date
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(week_of_month=-1),
        )

        assert recurring.anchors.week_of_month == -1
        assert recurring.anchors.day_of_month == 1
        assert recurring.next_scheduled_date == before

    @pytest.mark.asyncio
    async def test_start_and_end_date_move_together(
        self, command, make_recurring, mock_recurring_repo
    ):
        recurring = make_recurring(end_date=date(2024, 6, 30))
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(
                start_date=date(2025, 1, 1),
                end_date=date(2025, 12, 31),
            ),
        )

        assert recurring.start_date == date(2025, 1, 1)
        assert recurring.end_date == date(2025, 12, 31)


class TestMergeAndGuards:
    @pytest.mark.asyncio
    async def test_only_provided_fields_change(
        self, command, make_recurring, mock_recurring_repo, user_context
    ):
        recurring = make_recurring(notes="Landlord: J. Doe", category_slug="housing")
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(title="Flat rent", notes=None),
        )

        assert recurring.title == "Flat rent"
        assert recurring.notes is None
        assert recurring.category_slug == "housing"
        assert recurring.amount == Decimal("-1500.00")
        assert recurring.last_modified_by == user_context.user_id
        mock_recurring_repo.save.assert_awaited_once_with(recurring)

    @pytest.mark.asyncio
    async def test_status_can_be_changed_through_update(
        self, command, make_recurring, mock_recurring_repo
    ):
        recurring = make_recurring()
        mock_recurring_repo.find_by_id.return_value = recurring

        await command.execute(
            recurring.id,
            RecurringTransactionUpdateInput(status=RecurringStatus.PAUSED),
        )

        assert recurring.status is RecurringStatus.PAUSED

    @pytest.mark.asyncio
    async def test_cancelled_series_cannot_be_updated(
        self, command, make_recurring, mock_recurring_repo, mock_bank_account_repo
    ):
        recurring = make_recurring()
        recurring.cancel()
        mock_recurring_repo.find_by_id.return_value = recurring

        with pytest.raises(RecurringTransactionCancelledError):
            await command.execute(
                recurring.id,
                RecurringTransactionUpdateInput(amount=Decimal("-1")),
            )

        mock_recurring_repo.save.assert_not_awaited()
        mock_bank_account_repo.adjust_projections.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, command):
        with pytest.raises(RecurringTransactionNotFoundError):
            await command.execute(
                uuid4(),
                RecurringTransactionUpdateInput(title="x"),
            )

    def test_required_fields_cannot_be_cleared(self):
        with pytest.raises(ValidationError):
            RecurringTransactionUpdateInput(amount=None)

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            RecurringTransactionUpdateInput(interval=0)
