"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self

# One cent. The only threshold used to decide whether a manual split adds up.
MONEY_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")


@dataclass(frozen=True)
class SessionId:
    """Opaque identifier assigned by the store when a session is created."""

    value: str

    @classmethod
    def from_string(cls, value: str) -> Self:
        value = value.strip()
        if not value:
            raise ValueError("SessionId cannot be empty")
        return cls(value=value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class SlotId:
    """Identifier of a slot, unique within its session."""

    value: int

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=int(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


def split_evenly(total: Decimal, count: int) -> Decimal:
    """Share of ``total`` for each of ``count`` people, unrounded.

    Returns zero when there is nobody to split between.
    """
    if count > 0:
        return Decimal(total) / count
    return ZERO


def sums_match(amount_sum: Decimal, total: Decimal) -> bool:
    """True when ``amount_sum`` is within one cent of ``total``."""
    return abs(Decimal(amount_sum) - Decimal(total)) < MONEY_TOLERANCE


class Venue(Enum):
    """Courts a session can be held at."""

    GRANVILLE = "NBC Granville"
    YENNORA = "NBC Yennora"

    @property
    def label(self) -> str:
        return _VENUE_LABELS[self]


_VENUE_LABELS = {
    Venue.GRANVILLE: "NBC Granville",
    Venue.YENNORA: "Badminton Worx Yennora",
}

DEFAULT_VENUE = Venue.GRANVILLE


class Bank(Enum):
    """Banks offered for the organizer's payment details."""

    CBA = "CBA"
    WESTPAC = "Westpac"
    CUSTOM = "Custom"

    @property
    def label(self) -> str:
        return _BANK_LABELS[self]


_BANK_LABELS = {
    Bank.CBA: "Commonwealth Bank (CBA)",
    Bank.WESTPAC: "Westpac",
    Bank.CUSTOM: "Other (Custom)",
}


@dataclass(frozen=True)
class PaymentInfo:
    """Where participants send their share of the court fee."""

    account_name: str
    account_number: str
    bank: Bank
    custom_bank: str = ""

    @property
    def bank_name(self) -> str:
        if self.bank is Bank.CUSTOM:
            return self.custom_bank
        return self.bank.label
