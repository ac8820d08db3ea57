"""
Unit tests for the settlement calculator and the spend aggregator.

These are pure functions over snapshots; no database is needed.
"""

import pytest
from decimal import Decimal

from apps.analytics.analytics import total_spend
from apps.bills.domain import BillStatus
from apps.bills.services import raw_item_share, share_of, settle, unassigned_items

from .conftest import make_bill, make_item


EPSILON = Decimal('1e-20')


# =============================================================================
# share_of
# =============================================================================

class TestShareOf:
    """Tests for share_of."""

    def test_shared_item_with_tax(self):
        """100 shared by two people plus 10 tax: 55 each."""
        bill = make_bill([make_item('a', 100, assigned={'p1', 'p2'})], tax=10, participant_ids=['p1', 'p2'])

        assert share_of('p1', bill) == Decimal('55')
        assert share_of('p2', bill) == Decimal('55')

    def test_unassigned_item_is_owed_by_no_one(self):
        """Only P1's item counts; the unassigned item stays in the subtotal."""
        bill = make_bill(
            [make_item('a', 100, assigned={'p1'}), make_item('b', 50)],
            tax=15,
            participant_ids=['p1'],
        )

        assert bill.subtotal == Decimal('150')
        assert share_of('p1', bill) == Decimal('110')
        assert share_of('p1', bill) < bill.total == Decimal('165')

    def test_tax_and_service_charge_are_proportional(self):
        bill = make_bill(
            [make_item('a', 30, assigned={'p1'}), make_item('b', 10, quantity=3, assigned={'p2'})],
            tax=6,
            service_charge=3,
        )

        assert share_of('p1', bill) == Decimal('34.5')
        assert share_of('p2', bill) == Decimal('34.5')

    def test_quantity_multiplies_price(self):
        bill = make_bill([make_item('a', '2.50', quantity=4, assigned={'p1'})])

        assert share_of('p1', bill) == Decimal('10.00')

    def test_person_on_no_item_owes_nothing(self):
        bill = make_bill([make_item('a', 100, assigned={'p1'})], tax=10, participant_ids=['p1', 'p2'])

        assert share_of('p2', bill) == 0
        assert share_of('nobody', bill) == 0

    def test_zero_subtotal_allocates_no_tax(self):
        """Free items: the tax cannot be split, nobody owes anything."""
        bill = make_bill([make_item('a', 0, assigned={'p1'})], tax=5, service_charge=2)

        assert share_of('p1', bill) == 0

    def test_empty_bill(self):
        assert share_of('p1', make_bill([], tax=5)) == 0

    def test_dangling_ids_count_toward_divisor(self):
        """An assigned id that is not a participant still dilutes the split."""
        bill = make_bill([make_item('a', 90, assigned={'p1', 'p2', 'ghost'})], participant_ids=['p1', 'p2'])

        assert share_of('p1', bill) == Decimal('30')
        assert settle(bill).unattributed == Decimal('30')

    def test_invariant_under_item_order(self):
        items = [
            make_item('a', 17, assigned={'p1', 'p2'}),
            make_item('b', 23, quantity=3, assigned={'p1'}),
            make_item('c', 11, assigned={'p2', 'p3'}),
        ]
        forward = make_bill(items, tax='7.35', service_charge='4.10')
        backward = make_bill(list(reversed(items)), tax='7.35', service_charge='4.10')

        for person_id in ('p1', 'p2', 'p3'):
            assert share_of(person_id, forward) == share_of(person_id, backward)

    def test_invariant_under_participant_order(self):
        items = [make_item('a', 40, assigned={'p1', 'p2'}), make_item('b', 20, assigned={'p2'})]
        first = make_bill(items, tax=6, participant_ids=['p1', 'p2'])
        second = make_bill(items, tax=6, participant_ids=['p2', 'p1'])

        assert share_of('p1', first) == share_of('p1', second)
        assert share_of('p2', first) == share_of('p2', second)

    def test_raw_item_share(self):
        items = [make_item('a', 100, assigned={'p1', 'p2'}), make_item('b', 7, assigned={'p1'})]

        assert raw_item_share('p1', items) == Decimal('57')
        assert raw_item_share('p3', items) == 0


# =============================================================================
# settle
# =============================================================================

class TestSettle:
    """Tests for the per-participant breakdown."""

    def test_fully_assigned_shares_sum_to_total(self):
        """Every item assigned to all participants: nothing is left over."""
        participants = ['p1', 'p2', 'p3']
        bill = make_bill(
            [
                make_item('a', '19.99', assigned=participants),
                make_item('b', '7.45', quantity=3, assigned=participants),
            ],
            tax='4.17',
            service_charge='2.50',
            participant_ids=participants,
        )

        settlement = settle(bill)

        assert abs(sum(settlement.shares.values()) - bill.total) < EPSILON
        assert abs(settlement.unattributed) < EPSILON

    def test_unassigned_items_leave_remainder(self):
        bill = make_bill(
            [make_item('a', 100, assigned={'p1'}), make_item('b', 50)],
            tax=15,
            participant_ids=['p1', 'p2'],
        )

        settlement = settle(bill)

        assert settlement.shares == {'p1': Decimal('110'), 'p2': Decimal('0')}
        assert settlement.total == Decimal('165')
        assert settlement.unattributed == Decimal('55')
        assert sum(settlement.shares.values()) < settlement.total

    def test_shares_follow_participant_order(self):
        bill = make_bill([make_item('a', 10, assigned={'p1'})], participant_ids=['p2', 'p1', 'p2'])

        assert list(settle(bill).shares) == ['p2', 'p1']

    def test_explicit_participants(self):
        bill = make_bill([make_item('a', 10, assigned={'p1'})], participant_ids=['p1'])

        assert settle(bill, participant_ids=['p9']).shares == {'p9': Decimal('0')}

    def test_unassigned_items(self):
        bill = make_bill([make_item('a', 1, assigned={'p1'}), make_item('b', 2)])

        assert [item.id for item in unassigned_items(bill)] == ['b']


# =============================================================================
# total_spend
# =============================================================================

class TestTotalSpend:
    """Tests for the spend aggregator."""

    @pytest.fixture
    def bills(self):
        return [
            make_bill([make_item('a', 100, assigned={'p1', 'p2'})], tax=10, bill_id='one'),
            make_bill([make_item('a', 100, assigned={'p1'}), make_item('b', 50)], tax=15, bill_id='two'),
            make_bill([make_item('a', 12, assigned={'p2'})], bill_id='three'),
        ]

    def test_sums_settled_bills(self, bills):
        assert total_spend('p1', bills) == Decimal('165')
        assert total_spend('p2', bills) == Decimal('67')

    def test_order_independent(self, bills):
        assert total_spend('p1', bills) == total_spend('p1', list(reversed(bills)))
        assert total_spend('p1', bills) == total_spend('p1', bills[:1]) + total_spend('p1', bills[1:])

    def test_empty_and_absent(self, bills):
        assert total_spend('p1', []) == 0
        assert total_spend('stranger', bills) == 0

    def test_drafts_are_excluded(self, bills):
        draft = make_bill([make_item('a', 500, assigned={'p1'})], status=BillStatus.DRAFT, bill_id='draft')

        assert total_spend('p1', bills + [draft]) == Decimal('165')
