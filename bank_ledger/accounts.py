"""
Account Management Module

Account records, the value-style deposit/withdraw operations that keep
balances non-negative, and the manager used to open and look up accounts
in a ledger store.
"""

from decimal import Decimal
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, TYPE_CHECKING, runtime_checkable
import re

from .currency import AmountLike, ZERO, to_decimal, format_amount, amount_from_field
from .errors import InvalidArgumentError, InsufficientFundsError, AccountNotFoundError
from .logging_config import get_logger, log_action

if TYPE_CHECKING:
    from .storage import LedgerStore


FIELD_SEPARATOR = "|"
FORBIDDEN_TEXT_CHARS = (FIELD_SEPARATOR, "\n", "\r")
INTEGER_FIELD = re.compile(r"-?[0-9]+")

SIGNUP_BONUS = Decimal('100.00')

logger = get_logger("bank_ledger.accounts")


@runtime_checkable
class Displayable(Protocol):
    """Anything that can render a one-line human readable description"""
    
    def display(self) -> str:
        ...


def validate_text_field(value: str, field_name: str) -> str:
    """Reject text that would break the pipe-delimited line format"""
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{field_name} must be a string")
    for char in FORBIDDEN_TEXT_CHARS:
        if char in value:
            raise InvalidArgumentError(f"{field_name} cannot contain {char!r}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidArgumentError(f"{field_name} is not encodable text: {value!r}")
    return value


def id_from_field(raw: str, field_name: str = "id") -> int:
    """Parse a stored integer field: optional minus sign and ASCII digits only"""
    value = raw.strip()
    if not INTEGER_FIELD.fullmatch(value):
        raise ValueError(f"{field_name} is not a plain integer: {raw!r}")
    return int(value)


def validate_account_id(value: int, field_name: str = "id") -> int:
    """Account identifiers are plain ints"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{field_name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class AccountRecord:
    """
    Immutable account: identifier, owner name and a non-negative balance.
    Balance updates return a new record.
    """
    id: int
    owner: str
    balance: Decimal = ZERO
    
    def __post_init__(self):
        validate_account_id(self.id)
        validate_text_field(self.owner, "owner")
        
        balance = to_decimal(self.balance)
        if balance < ZERO:
            raise InvalidArgumentError(
                f"Balance cannot be negative for account {self.id}: {balance}"
            )
        object.__setattr__(self, 'balance', balance)
    
    def deposit(self, amount: AmountLike) -> 'AccountRecord':
        """
        Return a copy with amount added to the balance
        
        Raises:
            InvalidArgumentError: If amount is negative
        """
        amount = to_decimal(amount)
        if amount < ZERO:
            raise InvalidArgumentError("Deposit amount cannot be negative.")
        return replace(self, balance=self.balance + amount)
    
    def withdraw(self, amount: AmountLike) -> 'AccountRecord':
        """
        Return a copy with amount taken from the balance
        
        Raises:
            InvalidArgumentError: If amount is negative
            InsufficientFundsError: If amount exceeds the balance
        """
        amount = to_decimal(amount)
        if amount < ZERO:
            raise InvalidArgumentError("Withdrawal amount cannot be negative.")
        if amount > self.balance:
            raise InsufficientFundsError(
                f"Insufficient balance for withdrawal from account {self.id}: "
                f"balance={format_amount(self.balance)}, requested={format_amount(amount)}"
            )
        return replace(self, balance=self.balance - amount)
    
    def summary(self) -> str:
        return f"{self.id} ({self.owner})"
    
    def display(self, full: bool = True) -> str:
        text = f"Account Number: {self.id} | Name: {self.owner}"
        if full:
            text += f" | Balance: {format_amount(self.balance)}"
        return text
    
    def serialize(self) -> str:
        """Encode as an 'owner|id|balance' line (without newline)"""
        return FIELD_SEPARATOR.join([self.owner, str(self.id), format_amount(self.balance)])
    
    @classmethod
    def deserialize(cls, text: str) -> 'AccountRecord':
        """
        Decode an 'owner|id|balance' line
        
        Raises:
            ValueError: If the line does not have exactly three fields or a
                field does not parse (InvalidArgumentError is a ValueError)
        """
        fields = text.rstrip("\r\n").split(FIELD_SEPARATOR)
        if len(fields) != 3:
            raise ValueError(f"Expected 3 fields in account record, got {len(fields)}")
        
        owner, raw_id, raw_balance = fields
        return cls(
            id=id_from_field(raw_id),
            owner=owner,
            balance=amount_from_field(raw_balance, "balance")
        )


def deposit(record: AccountRecord, amount: AmountLike) -> AccountRecord:
    """Pure deposit: returns the updated record"""
    return record.deposit(amount)


def withdraw(record: AccountRecord, amount: AmountLike) -> AccountRecord:
    """Pure withdrawal: returns the updated record or raises"""
    return record.withdraw(amount)


def give_signup_bonus(record: AccountRecord, bonus: AmountLike = SIGNUP_BONUS) -> AccountRecord:
    """Return the record with the opening bonus credited"""
    return record.deposit(bonus)


def find_account_index(records: List[AccountRecord], account_id: int) -> int:
    """Index of the first record with account_id, or -1"""
    for index, record in enumerate(records):
        if record.id == account_id:
            return index
    return -1


class AccountManager:
    """
    Opens and looks up accounts in a ledger store
    """
    
    def __init__(self, store: 'LedgerStore'):
        self.store = store
    
    def open_account(
        self,
        owner: str,
        account_id: int,
        balance: AmountLike = ZERO
    ) -> AccountRecord:
        """
        Create an account and append it to the store
        
        Uniqueness of account_id is not checked; a duplicate is shadowed
        by the earlier record on lookup.
        
        Args:
            owner: Account holder name
            account_id: Account number
            balance: Opening balance (must be >= 0)
            
        Returns:
            The stored AccountRecord
        """
        account = AccountRecord(id=account_id, owner=owner, balance=balance)
        self.store.append_account(account)
        
        log_action(
            logger, "info", f"Account opened: {account.summary()}",
            action="open_account", resource=f"account:{account.id}",
            extra={"owner": account.owner, "balance": format_amount(account.balance)}
        )
        return account
    
    def list_accounts(self) -> List[AccountRecord]:
        """All accounts in file order"""
        return self.store.load_all()
    
    def get_account(self, account_id: int) -> Optional[AccountRecord]:
        """First account with account_id, or None"""
        records = self.store.load_all()
        index = find_account_index(records, account_id)
        if index == -1:
            return None
        return records[index]
    
    def save_accounts(self, records: List[AccountRecord]) -> None:
        """Overwrite the store with records, in order"""
        self.store.save_all(records)
    
    def deposit_to_account(self, record: AccountRecord, amount: AmountLike) -> AccountRecord:
        """
        Deposit into a detached record and return the updated copy
        
        Unlike AccountRecord.deposit, a zero amount is rejected here.
        Nothing is written to the store.
        
        Raises:
            InvalidArgumentError: If amount is not positive
        """
        if to_decimal(amount) <= ZERO:
            raise InvalidArgumentError("Deposit amount must be positive.")
        return record.deposit(amount)
    
    def withdraw_from_account(
        self,
        records: List[AccountRecord],
        account_id: int,
        amount: AmountLike
    ) -> AccountRecord:
        """
        Withdraw from an account inside an already loaded list
        
        The list entry is replaced in place; nothing is written to the store.
        
        Raises:
            AccountNotFoundError: If account_id is not in records
            InvalidArgumentError: If amount is negative
            InsufficientFundsError: If amount exceeds the balance
        """
        index = find_account_index(records, account_id)
        if index == -1:
            raise AccountNotFoundError(f"Account not found: {account_id}", account_id)
        
        records[index] = records[index].withdraw(amount)
        return records[index]
