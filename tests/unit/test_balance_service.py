"""Unit tests for balance calculations"""

from decimal import Decimal
from uuid import uuid4

import pytest

from shareledger.models.expense import Expense, ExpenseSplit
from shareledger.services.balance_service import BalanceService
from shareledger.services.settlement_service import SettlementService


@pytest.fixture
def user1_id():
    """First member ID"""
    return uuid4()


@pytest.fixture
def user2_id():
    """Second member ID"""
    return uuid4()


@pytest.fixture
def user3_id():
    """Third member ID"""
    return uuid4()


def make_expense(group_id, payer, owed, total=None, currency="USD"):
    """Expense paid by `payer` with splits from a {member: amount} mapping"""
    owed = {member: Decimal(amount) for member, amount in owed.items()}
    if total is None:
        total = sum(owed.values(), Decimal("0"))
    return Expense(
        group_id=group_id,
        description="Shared cost",
        total_amount=total,
        currency=currency,
        paid_by_member_id=payer,
        involved_member_ids=list({payer, *owed}),
        splits=[ExpenseSplit(member_id=m, amount=a) for m, a in owed.items()],
    )


class TestExpenseContribution:
    """Test the per-expense balance term"""

    def test_payer_credited_with_total(self, group_id, user1_id, user2_id):
        """Payer outside the split is owed the full total"""
        expense = make_expense(group_id, user1_id, {user2_id: "50.00"})

        assert BalanceService.expense_contribution(expense, user1_id) == Decimal("50.00")
        assert BalanceService.expense_contribution(expense, user2_id) == Decimal("-50.00")

    def test_payer_with_own_share(self, group_id, user1_id, user2_id):
        """Payer holding a share is credited the total and debited that share"""
        expense = make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"})

        assert BalanceService.expense_contribution(expense, user1_id) == Decimal("50.00")
        assert BalanceService.expense_contribution(expense, user2_id) == Decimal("-50.00")

    def test_partial_reimbursement_reduces_credit(
        self, group_id, user1_id, user2_id, user3_id
    ):
        """Settled shares are subtracted from the payer's credit"""
        expense = make_expense(
            group_id, user1_id, {user1_id: "30.00", user2_id: "30.00", user3_id: "30.00"}
        )
        SettlementService.mark_settled(expense, user2_id)

        # credit 90 - 30 settled, debit own 30
        assert BalanceService.expense_contribution(expense, user1_id) == Decimal("30.00")
        assert BalanceService.expense_contribution(expense, user2_id) == Decimal("0")
        assert BalanceService.expense_contribution(expense, user3_id) == Decimal("-30.00")

    def test_settled_expense_contributes_nothing(self, group_id, user1_id, user2_id):
        """Fully settled expenses drop out of every balance"""
        expense = make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"})
        SettlementService.mark_all_settled(expense)

        assert BalanceService.expense_contribution(expense, user1_id) == Decimal("0")
        assert BalanceService.expense_contribution(expense, user2_id) == Decimal("0")

    def test_uninvolved_member_contributes_nothing(self, group_id, user1_id, user2_id):
        """Members with no role in the expense are unaffected"""
        expense = make_expense(group_id, user1_id, {user2_id: "50.00"})

        assert BalanceService.expense_contribution(expense, uuid4()) == Decimal("0")


class TestNetBalance:
    """Test net balances across expenses"""

    def test_net_balance_multiple_expenses(self, group_id, user1_id, user2_id):
        """Credits and debits net out across expenses"""
        expenses = [
            make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"}),
            make_expense(group_id, user2_id, {user1_id: "30.00", user2_id: "30.00"}),
        ]

        assert BalanceService.net_balance(expenses, user1_id) == Decimal("20.00")
        assert BalanceService.net_balance(expenses, user2_id) == Decimal("-20.00")

    def test_net_balance_group_filter(self, user1_id, user2_id):
        """Expenses of other groups are ignored when a group is given"""
        group_a, group_b = uuid4(), uuid4()
        expenses = [
            make_expense(group_a, user1_id, {user2_id: "40.00"}),
            make_expense(group_b, user1_id, {user2_id: "10.00"}),
        ]

        assert BalanceService.net_balance(expenses, user1_id, group_id=group_a) == Decimal("40.00")
        assert BalanceService.net_balance(expenses, user1_id) == Decimal("50.00")

    def test_net_balance_currency_filter(self, group_id, user1_id, user2_id):
        """Amounts in other currencies are never summed together"""
        expenses = [
            make_expense(group_id, user1_id, {user2_id: "40.00"}, currency="USD"),
            make_expense(group_id, user1_id, {user2_id: "1000"}, currency="JPY"),
        ]

        assert BalanceService.net_balance(expenses, user1_id, currency="usd") == Decimal("40.00")
        assert BalanceService.net_balance(expenses, user1_id, currency="JPY") == Decimal("1000")

    def test_currency_filter_is_normalized(self, group_id, user1_id, user2_id):
        """Padded or lower-case codes select the same expenses as stored codes"""
        expenses = [make_expense(group_id, user1_id, {user2_id: "40.00"}, currency="EUR")]

        assert BalanceService.net_balance(expenses, user1_id, currency=" eur ") == Decimal("40.00")

        summary = BalanceService.group_summary(expenses, group_id, " eur ")
        assert summary.currency == "EUR"
        assert summary.total_outstanding == Decimal("40.00")

    def test_net_balance_no_expenses(self, user1_id):
        """Test net balance with no expenses"""
        assert BalanceService.net_balance([], user1_id) == Decimal("0")


class TestGroupBalances:
    """Test per-group aggregation"""

    def test_group_balances_sum_to_zero(self, group_id, user1_id, user2_id, user3_id):
        """Net balances of a group always cancel out"""
        expenses = [
            make_expense(
                group_id, user1_id,
                {user1_id: "30.00", user2_id: "30.00", user3_id: "30.00"},
            ),
            make_expense(group_id, user2_id, {user1_id: "12.50", user3_id: "12.50"}),
        ]
        SettlementService.mark_settled(expenses[0], user3_id)

        balances = BalanceService.group_balances(expenses, group_id)

        assert set(balances) == {user1_id, user2_id, user3_id}
        assert sum(balances.values(), Decimal("0")) == Decimal("0")
        assert list(balances) == sorted(balances, key=str)

    def test_group_summary(self, group_id, user1_id, user2_id):
        """Summary carries status per member and the outstanding total"""
        expenses = [make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"})]

        summary = BalanceService.group_summary(expenses, group_id, "usd")

        by_member = {b.member_id: b for b in summary.balances}
        assert summary.currency == "USD"
        assert by_member[user1_id].type == "owed"
        assert by_member[user2_id].type == "owes"
        assert summary.total_outstanding == Decimal("50.00")

    def test_group_summary_after_reimbursement(self, group_id, user1_id, user2_id):
        """Once the other share is reimbursed everyone is settled"""
        expenses = [make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"})]
        SettlementService.mark_settled(expenses[0], user2_id)

        summary = BalanceService.group_summary(expenses, group_id, "USD")

        assert {b.type for b in summary.balances} == {"settled"}
        assert summary.total_outstanding == Decimal("0")


class TestPairwiseBalance:
    """Test pairwise balance calculation"""

    def test_pairwise_balance_simple(self, group_id, user1_id, user2_id):
        """Member2 owes member1 their share"""
        expenses = [make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"})]

        assert BalanceService.pairwise_balance(expenses, user1_id, user2_id) == Decimal("50.00")

    def test_pairwise_balance_symmetry(self, group_id, user1_id, user2_id):
        """Test that pairwise balance is symmetric"""
        expenses = [
            make_expense(group_id, user1_id, {user1_id: "50.00", user2_id: "50.00"}),
            make_expense(group_id, user2_id, {user1_id: "30.00", user2_id: "30.00"}),
        ]

        forward = BalanceService.pairwise_balance(expenses, user1_id, user2_id)
        backward = BalanceService.pairwise_balance(expenses, user2_id, user1_id)

        assert forward == Decimal("20.00")
        assert forward == -backward

    def test_pairwise_ignores_third_party_payers(self, group_id, user1_id, user2_id, user3_id):
        """Expenses paid by someone else do not count between the pair"""
        expenses = [make_expense(group_id, user3_id, {user1_id: "10.00", user2_id: "10.00"})]

        assert BalanceService.pairwise_balance(expenses, user1_id, user2_id) == Decimal("0")

    def test_pairwise_ignores_settled_shares(self, group_id, user1_id, user2_id, user3_id):
        """Reimbursed shares no longer count"""
        expense = make_expense(group_id, user1_id, {user2_id: "10.00", user3_id: "10.00"})
        SettlementService.mark_settled(expense, user2_id)

        assert BalanceService.pairwise_balance([expense], user1_id, user2_id) == Decimal("0")
        assert BalanceService.pairwise_balance([expense], user1_id, user3_id) == Decimal("10.00")


class TestBalanceStatus:
    """Test balance classification"""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("5.00"), "owed"),
            (Decimal("-5.00"), "owes"),
            (Decimal("0"), "settled"),
            (Decimal("0.00005"), "settled"),
            (Decimal("-0.0001"), "settled"),
            (Decimal("0.0002"), "owed"),
        ],
    )
    def test_balance_status(self, amount, expected):
        """Values within epsilon of zero are settled"""
        assert BalanceService.balance_status(amount) == expected

    def test_member_balance(self, group_id, user1_id, user2_id):
        """Member balance wraps net balance with status and currency"""
        expenses = [make_expense(group_id, user2_id, {user1_id: "12.34"})]

        balance = BalanceService.member_balance(expenses, user1_id, "USD")

        assert balance.amount == Decimal("-12.34")
        assert balance.type == "owes"
        assert balance.currency == "USD"
