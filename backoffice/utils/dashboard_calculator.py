from datetime import datetime
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from flask import current_app
from sqlalchemy.orm import selectinload

from backoffice.models import Client, ClientAssignment, Transaction
from backoffice.models.enums import (
    INCOME_TRANSACTION_TYPES,
    OUTGOING_TRANSACTION_TYPES,
    TransactionCategory,
)


def _percent(part, whole):
    """``round(100 * part / whole)`` with half-up rounding, 0 for an empty whole."""
    if not whole:
        return 0
    return (200 * part + whole) // (2 * whole)


def _usd(value):
    return Decimal(str(value)) if value is not None else Decimal('0')


class DashboardCalculator:
    """Read-only summaries over the whole dataset, recomputed on every call."""

    @staticmethod
    def _all_clients():
        return Client.query.options(
            selectinload(Client.assignments).selectinload(ClientAssignment.team_member)
        ).all()

    @staticmethod
    def overall_progress(clients):
        """Completed images and jewelry articles as a percentage of the requested ones."""
        requested = 0
        completed = 0
        for client in clients:
            requested += (client.total_images_to_make or 0) + (client.total_jewelry_articles or 0)
            completed += (client.images_made or 0) + (client.jewelry_articles_made or 0)
        return _percent(completed, requested)

    @staticmethod
    def client_progress(client):
        return DashboardCalculator.overall_progress([client])

    @staticmethod
    def revenue_for_month(clients, year, month):
        """USD received in a calendar month.

        Client payments count in the month the client was created, since the
        paid amount carries no date of its own; ledger income counts by its date.
        """
        start = datetime(year, month, 1)
        end = start + relativedelta(months=1)

        total = sum(
            (_usd(c.amount_paid_usd) for c in clients if start <= c.created_at < end),
            Decimal('0'),
        )
        income_rows = Transaction.query.filter(
            Transaction.type.in_(INCOME_TRANSACTION_TYPES),
            Transaction.date >= start,
            Transaction.date < end,
        ).all()
        total += sum((_usd(t.amount_usd) for t in income_rows), Decimal('0'))
        return total

    @staticmethod
    def dashboard_metrics(active_statuses=None, now=None):
        now = now or datetime.utcnow()
        if active_statuses is None:
            active_statuses = current_app.config['ACTIVE_PROJECT_STATUSES']

        clients = DashboardCalculator._all_clients()
        active_clients = [c for c in clients if c.project_status in active_statuses]

        # All-time total despite the name; kept for the existing KPI card
        monthly_revenue = sum((_usd(c.amount_paid_usd) for c in clients), Decimal('0'))
        current_month_revenue = DashboardCalculator.revenue_for_month(clients, now.year, now.month)

        assigned_clients = len([c for c in clients if c.assignments])

        return {
            'totalClients': len(clients),
            'activeProjects': len(active_clients),
            'monthlyRevenue': float(monthly_revenue),
            'currentMonthRevenue': float(current_month_revenue),
            'teamUtilization': _percent(assigned_clients, len(clients)),
            'overallProgress': DashboardCalculator.overall_progress(active_clients),
        }

    @staticmethod
    def recent_transactions(window_days=7, limit=8, now=None):
        """Ledger rows merged with one payment entry per paying client.

        Client payments are not stored as transactions, so they are derived
        here from ``amount_paid_usd`` and dated by the client's creation.
        """
        now = now or datetime.utcnow()
        cutoff = now - relativedelta(days=window_days)

        entries = []
        for t in Transaction.query.all():
            is_income = t.type in INCOME_TRANSACTION_TYPES or t.category == TransactionCategory.REVENUE.value
            entries.append({
                'id': t.id,
                'type': 'incoming' if is_income else 'outgoing',
                'name': t.description or 'Transaction',
                'amount': float(_usd(t.amount_usd)),
                'teamMember': t.team_member.name if t.team_member else None,
                'clientId': t.client_id,
                'date': t.date,
                'category': t.category,
                'isManual': True,
            })

        for client in DashboardCalculator._all_clients():
            paid = _usd(client.amount_paid_usd)
            if paid <= 0:
                continue
            member = client.primary_team_member
            entries.append({
                'id': f"client-{client.id}",
                'type': 'incoming',
                'name': f"Payment from {client.name}",
                'amount': float(paid),
                'teamMember': member.name if member else None,
                'clientId': client.id,
                'date': client.created_at,
                'category': TransactionCategory.REVENUE.value,
                'isManual': False,
            })

        recent = [e for e in entries if e['date'] and e['date'] > cutoff]
        recent.sort(key=lambda e: e['date'], reverse=True)
        recent = recent[:limit]
        for entry in recent:
            entry['date'] = entry['date'].isoformat()
        return recent

    @staticmethod
    def finance_summary():
        """Income, outgoings and profit in USD across clients and the ledger."""
        clients = Client.query.all()
        transactions = Transaction.query.all()

        client_income = sum((_usd(c.amount_paid_usd) for c in clients), Decimal('0'))
        contract_value = sum((_usd(c.total_project_fee_usd) for c in clients), Decimal('0'))

        transaction_income = Decimal('0')
        total_outgoing = Decimal('0')
        team_payments = Decimal('0')
        total_expenses = Decimal('0')
        for t in transactions:
            amount = _usd(t.amount_usd)
            if t.type in INCOME_TRANSACTION_TYPES:
                transaction_income += amount
            if t.type in OUTGOING_TRANSACTION_TYPES or t.category == TransactionCategory.EXPENSES.value:
                total_outgoing += amount
            if t.category == TransactionCategory.SALARY.value:
                team_payments += amount
            if t.category == TransactionCategory.EXPENSES.value:
                total_expenses += amount

        total_incoming = client_income + transaction_income
        net_profit = total_incoming - total_outgoing
        profit_margin = round(float(net_profit / total_incoming * 100), 1) if total_incoming > 0 else 0.0

        return {
            'clientIncome': float(client_income),
            'transactionIncome': float(transaction_income),
            'totalIncoming': float(total_incoming),
            'totalContractValue': float(contract_value),
            'pendingRevenue': float(contract_value - client_income),
            'totalOutgoing': float(total_outgoing),
            'teamPayments': float(team_payments),
            'totalExpenses': float(total_expenses),
            'netProfit': float(net_profit),
            'profitMargin': profit_margin,
        }
