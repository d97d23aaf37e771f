"""Record types shared by the test modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar

from excel_io.schema import column, excel_columns


class Category(Enum):
    CategoryA = 1
    CategoryB = 2
    CategoryC = 3


@dataclass
class CustomerRow:
    sheet_name: str = "Sheet1"
    last_contact: datetime = datetime(2000, 1, 1)
    customer_id: int = 0
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    is_active: bool = False
    balance: Decimal = Decimal("0")
    category: Category = Category.CategoryA


@dataclass
class BodyRow:
    sheet_name: str = "Sheet2"
    eye_colour: str = column("Eye Colour", default="")
    age: int = 0
    height: int = 0


@dataclass
class ScalarRow:
    sheet_name: ClassVar[str] = "Scalars"
    name: str = ""
    count: int = 0
    ratio: float = 0.0
    amount: Decimal = Decimal("0")
    flag: bool = False
    category: Category = Category.CategoryA
    stamp: datetime = datetime(2000, 1, 1)
    day: date = date(2000, 1, 1)
    note: str | None = None
    limit: int | None = None


@dataclass
class PropertiesRow:
    custom_properties: dict[str, str] = excel_columns()

    @property
    def sheet_name(self) -> str:
        return "Sheet1"


@dataclass
class ExplicitPropertiesRow:
    key1: str = column("Key1", default="")
    key2: str = column("Key2", default="")
    key3: str = column("Key3", default="")

    @property
    def sheet_name(self) -> str:
        return "Sheet1"


@dataclass
class PartialRow:
    sheet_name: ClassVar[str] = "Sheet1"
    key1: str = column("Key1", default="")
    extra: dict[str, str] = excel_columns()


@dataclass
class TaggedRow:
    sheet_name: ClassVar[str] = "Tagged"
    label: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class RequiredFieldRow:
    sheet_name: ClassVar[str] = "Required"
    name: str


class NotADataclass:
    sheet_name = "Plain"


@dataclass
class NamelessRow:
    value: int = 0


@dataclass
class ComputedRow:
    sheet_name: ClassVar[str] = "Computed"
    base: int = 0
    doubled: int = field(default=0, init=False)
