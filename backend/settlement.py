# backend/settlement.py
"""
Settlement engine: who pays whom so that everyone has paid the same share.

All amounts are integer minor units (cents). Nothing here logs, raises or
keeps state between calls.
"""

from typing import NamedTuple


class Participant(NamedTuple):
    id: int
    paid: int


class Payment(NamedTuple):
    """`from_id` transfers `amount` to `to_id`."""
    from_id: int
    to_id: int
    amount: int


def truncating_divmod(total, n):
    # Quotient rounds toward zero, remainder keeps the sign of total.
    quotient = abs(total) // n
    if total < 0:
        quotient = -quotient
    return quotient, total - quotient * n


def fair_shares(participants):
    """
    Share owed by each participant, in input order.

    The remainder cents go to the first participants in input order, one
    each, so the shares always add up to the total.
    """
    n = len(participants)
    if n == 0:
        return []

    total = sum(p.paid for p in participants)
    base_quota, remainder = truncating_divmod(total, n)

    shares = [base_quota] * n
    step = 1 if remainder > 0 else -1
    for i in range(abs(remainder)):
        shares[i] += step
    return shares


def balances(participants):
    """Signed balance per participant: positive is owed money, negative owes."""
    shares = fair_shares(participants)
    return [
        {'id': p.id, 'amount': p.paid - share}
        for p, share in zip(participants, shares)
    ]


def settle(participants):
    """
    Minimal list of payments that zeroes every balance.

    Greedy matching of the largest creditor against the most indebted
    debtor; every step discharges at least one of them.
    """
    # 1. Calculate Net Balances
    net = balances(participants)

    # 2. Separate Debtors and Creditors (settled participants drop out)
    debtors = [dict(b) for b in net if b['amount'] < 0]
    creditors = [dict(b) for b in net if b['amount'] > 0]

    # list.sort is stable, ties keep input order
    debtors.sort(key=lambda x: x['amount'])
    creditors.sort(key=lambda x: x['amount'], reverse=True)

    # 3. Match them up
    payments = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        transfer = min(-debtor['amount'], creditor['amount'])
        if transfer > 0:
            payments.append(Payment(debtor['id'], creditor['id'], transfer))
            debtor['amount'] += transfer
            creditor['amount'] -= transfer

        if debtor['amount'] == 0: i += 1
        if creditor['amount'] == 0: j += 1

    return payments
