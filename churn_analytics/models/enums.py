"""Enumeration types for the churn extract."""

from enum import Enum


class AttritionFlag(str, Enum):
    EXISTING = "Existing Customer"
    ATTRITED = "Attrited Customer"


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class IncomeCategory(str, Enum):
    """Annual income bracket, bottom tier first."""

    LESS_THAN_40K = "Less than $40K"
    FROM_40K_TO_60K = "$40K - $60K"
    FROM_60K_TO_80K = "$60K - $80K"
    FROM_80K_TO_120K = "$80K - $120K"
    ABOVE_120K = "$120K +"
    UNKNOWN = "Unknown"


class CardCategory(str, Enum):
    BLUE = "Blue"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class AgeBracket(str, Enum):
    AGE_26_36 = "26-36"
    AGE_37_47 = "37-47"
    AGE_48_58 = "48-58"
    AGE_59_PLUS = "59+"


class RiskLevel(str, Enum):
    HIGH = "High Risk"
    MEDIUM = "Medium Risk"
    LOW = "Low Risk"
