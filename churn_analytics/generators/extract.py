"""Synthetic customer extract generator."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Iterator

from churn_analytics.generators.base import BaseGenerator
from churn_analytics.models import (
    AttritionFlag,
    CardCategory,
    CustomerRecord,
    Gender,
    IncomeCategory,
)


class ExtractGenerator(BaseGenerator):
    """Generate plausible rows of the credit card customer extract.

    Attrited customers are skewed towards more inactive months, fewer
    transactions and lower revolving balances.
    """

    EDUCATION_LEVELS = [
        "Graduate", "High School", "Unknown", "Uneducated", "College", "Post-Graduate", "Doctorate",
    ]
    EDUCATION_WEIGHTS = [0.31, 0.20, 0.15, 0.15, 0.10, 0.05, 0.04]

    MARITAL_STATUSES = ["Married", "Single", "Unknown", "Divorced"]
    MARITAL_WEIGHTS = [0.46, 0.39, 0.08, 0.07]

    INCOME_CATEGORIES = list(IncomeCategory)
    INCOME_WEIGHTS = [0.35, 0.18, 0.14, 0.15, 0.07, 0.11]

    CARD_CATEGORIES = list(CardCategory)
    CARD_WEIGHTS = [0.932, 0.055, 0.011, 0.002]

    # Credit limit ranges by income bracket
    CREDIT_LIMIT_RANGES = {
        IncomeCategory.LESS_THAN_40K: (1438.3, 8000),
        IncomeCategory.FROM_40K_TO_60K: (1438.3, 12000),
        IncomeCategory.FROM_60K_TO_80K: (2000, 20000),
        IncomeCategory.FROM_80K_TO_120K: (3000, 34516),
        IncomeCategory.ABOVE_120K: (4000, 34516),
        IncomeCategory.UNKNOWN: (1438.3, 20000),
    }

    MAX_REVOLVING_BALANCE = 2517

    def __init__(
        self,
        seed: int | None = None,
        attrition_rate: float = 0.16,
    ) -> None:
        if not 0 <= attrition_rate <= 1:
            raise ValueError("attrition_rate must be between 0 and 1")
        super().__init__(seed)
        self.attrition_rate = attrition_rate

    def generate(self) -> CustomerRecord:
        """Generate a single customer record.

        Returns
        -------
        CustomerRecord
            Generated record with a unique 9-digit client id.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[CustomerRecord]:
        """Generate multiple customer records.

        Parameters
        ----------
        count : int
            Number of records to generate.

        Yields
        ------
        CustomerRecord
            Generated records.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> CustomerRecord:
        attrited = random.random() < self.attrition_rate

        income = random.choices(self.INCOME_CATEGORIES, weights=self.INCOME_WEIGHTS, k=1)[0]
        card = random.choices(self.CARD_CATEGORIES, weights=self.CARD_WEIGHTS, k=1)[0]

        low, high = self.CREDIT_LIMIT_RANGES[income]
        credit_limit = Decimal(str(round(random.uniform(low, high), 1)))

        if attrited:
            months_inactive = random.choices(range(7), weights=[1, 5, 20, 40, 25, 6, 3], k=1)[0]
            revolving = 0 if random.random() < 0.5 else random.randint(0, self.MAX_REVOLVING_BALANCE)
            trans_count = random.randint(10, 70)
        else:
            months_inactive = random.choices(range(7), weights=[2, 25, 35, 30, 4, 2, 2], k=1)[0]
            revolving = random.randint(0, self.MAX_REVOLVING_BALANCE)
            trans_count = random.randint(30, 130)

        revolving_balance = min(Decimal(revolving), credit_limit)
        trans_amount = Decimal(int(trans_count * random.uniform(30, 120)))

        return CustomerRecord(
            client_id=str(self.fake.unique.random_number(digits=9, fix_len=True)),
            attrition_flag=AttritionFlag.ATTRITED if attrited else AttritionFlag.EXISTING,
            age=min(73, max(26, int(random.gauss(46, 8)))),
            gender=random.choice(list(Gender)),
            dependent_count=random.randint(0, 5),
            education_level=random.choices(self.EDUCATION_LEVELS, weights=self.EDUCATION_WEIGHTS, k=1)[0],
            marital_status=random.choices(self.MARITAL_STATUSES, weights=self.MARITAL_WEIGHTS, k=1)[0],
            income_category=income,
            card_category=card,
            months_on_book=random.randint(13, 56),
            relationship_count=random.randint(1, 6),
            months_inactive=months_inactive,
            contacts_count=random.randint(0, 6),
            credit_limit=credit_limit,
            revolving_balance=revolving_balance,
            avg_open_to_buy=credit_limit - revolving_balance,
            amount_change_q4_q1=round(random.uniform(0.3, 1.6), 3),
            total_trans_amount=trans_amount,
            total_trans_count=trans_count,
            count_change_q4_q1=round(random.uniform(0.2, 1.4), 3),
            utilization_ratio=round(float(revolving_balance / credit_limit), 3),
        )
