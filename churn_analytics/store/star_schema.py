"""Star schema store with primary and foreign key checks."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from churn_analytics.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    NullKeyError,
    ReferentialIntegrityError,
)
from churn_analytics.models import (
    AccountDimension,
    ActivityDimension,
    ChurnStatusDimension,
    CustomerDimension,
    CustomerRecord,
    TransactionFact,
)

logger = logging.getLogger(__name__)

# Table names as materialised by the Postgres sink
TABLE_NAMES = {
    "transactions": "Transactions",
    "customers": "Customers",
    "activities": "Activities",
    "churn_status": "Churn Status",
    "accounts": "Account",
}


@dataclass
class StarSchemaStore:
    """In-memory star schema: one fact table and four dimensions keyed by client id."""

    # Fact table
    transactions: dict[str, TransactionFact] = field(default_factory=dict)

    # Dimensions
    customers: dict[str, CustomerDimension] = field(default_factory=dict)
    activities: dict[str, ActivityDimension] = field(default_factory=dict)
    churn_status: dict[str, ChurnStatusDimension] = field(default_factory=dict)
    accounts: dict[str, AccountDimension] = field(default_factory=dict)

    def add_fact(self, fact: TransactionFact) -> None:
        """Add a fact row to the store."""
        if not fact.client_id or not fact.client_id.strip():
            raise NullKeyError("Fact row has a null client id")
        if fact.client_id in self.transactions:
            raise DuplicateKeyError([fact.client_id])
        self.transactions[fact.client_id] = fact

    def add_customer(self, dim: CustomerDimension) -> None:
        """Add a customer demographics row."""
        self._add_dimension(self.customers, dim)

    def add_activity(self, dim: ActivityDimension) -> None:
        """Add an activity counts row."""
        self._add_dimension(self.activities, dim)

    def add_churn_status(self, dim: ChurnStatusDimension) -> None:
        """Add an attrition flag row."""
        self._add_dimension(self.churn_status, dim)

    def add_account(self, dim: AccountDimension) -> None:
        """Add an account attributes row."""
        self._add_dimension(self.accounts, dim)

    def _add_dimension(self, table: dict, dim) -> None:
        if dim.client_id not in self.transactions:
            raise ReferentialIntegrityError(f"Client {dim.client_id} not found")
        if dim.client_id in table:
            raise DuplicateKeyError([dim.client_id])
        table[dim.client_id] = dim

    # Query methods
    def get_record(self, client_id: str) -> CustomerRecord:
        """Join the five tables back into the flat record for a client."""
        fact = self.transactions.get(client_id)
        if fact is None:
            raise EntityNotFoundError(f"Client {client_id} not found")

        try:
            customer = self.customers[client_id]
            activity = self.activities[client_id]
            status = self.churn_status[client_id]
            account = self.accounts[client_id]
        except KeyError as e:
            raise EntityNotFoundError(f"Client {client_id} has no row in a dimension table") from e

        return CustomerRecord(
            client_id=client_id,
            attrition_flag=status.attrition_flag,
            age=customer.age,
            gender=customer.gender,
            dependent_count=customer.dependent_count,
            education_level=customer.education_level,
            marital_status=customer.marital_status,
            income_category=account.income_category,
            card_category=account.card_category,
            months_on_book=account.months_on_book,
            relationship_count=activity.relationship_count,
            months_inactive=activity.months_inactive,
            contacts_count=activity.contacts_count,
            credit_limit=fact.credit_limit,
            revolving_balance=fact.revolving_balance,
            avg_open_to_buy=fact.avg_open_to_buy,
            amount_change_q4_q1=fact.amount_change_q4_q1,
            total_trans_amount=fact.total_trans_amount,
            total_trans_count=fact.total_trans_count,
            count_change_q4_q1=fact.count_change_q4_q1,
            utilization_ratio=fact.utilization_ratio,
        )

    def records(self) -> Iterator[CustomerRecord]:
        """Iterate over every joined record in load order."""
        for client_id in self.transactions:
            yield self.get_record(client_id)

    def __len__(self) -> int:
        return len(self.transactions)

    def summary(self) -> dict[str, int]:
        """Return row counts of all tables."""
        return {
            "transactions": len(self.transactions),
            "customers": len(self.customers),
            "activities": len(self.activities),
            "churn_status": len(self.churn_status),
            "accounts": len(self.accounts),
        }


def split_record(
    record: CustomerRecord,
) -> tuple[TransactionFact, CustomerDimension, ActivityDimension, ChurnStatusDimension, AccountDimension]:
    """Partition a flat record into its fact and dimension rows."""
    fact = TransactionFact(
        client_id=record.client_id,
        credit_limit=record.credit_limit,
        revolving_balance=record.revolving_balance,
        avg_open_to_buy=record.avg_open_to_buy,
        amount_change_q4_q1=record.amount_change_q4_q1,
        total_trans_amount=record.total_trans_amount,
        total_trans_count=record.total_trans_count,
        count_change_q4_q1=record.count_change_q4_q1,
        utilization_ratio=record.utilization_ratio,
    )
    customer = CustomerDimension(
        client_id=record.client_id,
        age=record.age,
        gender=record.gender,
        dependent_count=record.dependent_count,
        education_level=record.education_level,
        marital_status=record.marital_status,
    )
    activity = ActivityDimension(
        client_id=record.client_id,
        relationship_count=record.relationship_count,
        months_inactive=record.months_inactive,
        contacts_count=record.contacts_count,
    )
    status = ChurnStatusDimension(
        client_id=record.client_id,
        attrition_flag=record.attrition_flag,
    )
    account = AccountDimension(
        client_id=record.client_id,
        income_category=record.income_category,
        card_category=record.card_category,
        months_on_book=record.months_on_book,
    )
    return fact, customer, activity, status, account


def find_duplicate_keys(records: Iterable[CustomerRecord]) -> list[str]:
    """Return the sorted client ids that appear more than once."""
    counts = Counter(record.client_id for record in records)
    return sorted(client_id for client_id, n in counts.items() if n > 1)


def load_star_schema(records: Iterable[CustomerRecord]) -> StarSchemaStore:
    """Validate the keys of ``records`` and load them into a new store.

    Key checks run over the whole input before anything is inserted, so a
    rejected extract never produces a partially loaded store.

    Raises
    ------
    NullKeyError
        If any record has an empty client id.
    DuplicateKeyError
        If any client id appears more than once.
    """
    records = list(records)

    for position, record in enumerate(records):
        if not record.client_id or not record.client_id.strip():
            raise NullKeyError(f"Null client id in record #{position}")

    duplicates = find_duplicate_keys(records)
    if duplicates:
        logger.error("Rejecting extract: %d duplicated client id(s)", len(duplicates))
        raise DuplicateKeyError(duplicates)

    store = StarSchemaStore()
    for record in records:
        fact, customer, activity, status, account = split_record(record)
        store.add_fact(fact)
        store.add_customer(customer)
        store.add_activity(activity)
        store.add_churn_status(status)
        store.add_account(account)

    logger.info("Loaded star schema: %s", store.summary())
    return store
