"""
Transaction Processing Module

Handles transfers between two accounts held in a ledger store. A transfer
loads the whole account set, validates and applies both balance changes in
memory, appends one journal entry and then rewrites the account file.

Validation failures leave the store untouched. An I/O failure while
journaling or rewriting propagates and can leave the journal and the
account file out of step with each other.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .accounts import AccountRecord, find_account_index
from .currency import AmountLike, ZERO, to_decimal, format_amount
from .errors import (
    ErrorKind, LedgerError, InvalidArgumentError,
    InsufficientFundsError, AccountNotFoundError
)
from .journal import TransactionRecord, TRANSFER_NOTE
from .storage import LedgerStore
from .logging_config import get_logger, log_action


class TransferState(Enum):
    """States of a transfer"""
    PENDING = "pending"        # Requested, nothing checked yet
    VALIDATED = "validated"    # Amount, accounts and funds checked
    APPLIED = "applied"        # Balances changed in memory only
    LOGGED = "logged"          # Journal entry appended
    COMMITTED = "committed"    # Account file rewritten
    REJECTED = "rejected"      # Failed validation, no side effects


@dataclass(frozen=True)
class TransferReceipt:
    """Result of a committed transfer"""
    transaction: TransactionRecord
    from_account: AccountRecord
    to_account: AccountRecord
    state: TransferState = TransferState.COMMITTED


@dataclass(frozen=True)
class TransferOutcome:
    """
    Explicit success/failure result of attempt_transfer

    On failure `state` is REJECTED for validation errors, or the last state
    reached before an I/O failure.
    """
    state: TransferState
    receipt: Optional[TransferReceipt] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == TransferState.COMMITTED


class TransactionProcessor:
    """
    Runs transfers against a ledger store
    """

    def __init__(self, store: LedgerStore):
        self.store = store
        self.logger = get_logger("bank_ledger.transactions")
        self._last_state: Optional[TransferState] = None

    def _advance(self, state: TransferState, from_id: int, to_id: int) -> None:
        self._last_state = state
        self.logger.debug(f"Transfer {from_id} -> {to_id}: {state.value}")

    def _reject(self, error: LedgerError, from_id: int, to_id: int, amount) -> None:
        self._last_state = TransferState.REJECTED
        log_action(
            self.logger, "warning", f"Transfer rejected: {error.message}",
            action="transfer", resource=f"account:{from_id}",
            extra={
                "from_account": from_id,
                "to_account": to_id,
                "amount": str(amount),
                "error_kind": error.kind.value
            }
        )

    def transfer(
        self,
        from_id: int,
        to_id: int,
        amount: AmountLike,
        note: str = TRANSFER_NOTE
    ) -> TransferReceipt:
        """
        Move amount from one account to another and journal it

        Args:
            from_id: Source account id
            to_id: Destination account id
            amount: Positive amount, rounded to cents
            note: Journal note

        Returns:
            TransferReceipt with the journal entry and both updated accounts

        Raises:
            InvalidArgumentError: If amount is not positive
            AccountNotFoundError: If either account is absent
            InsufficientFundsError: If the source balance is below amount
            LedgerIOError: If the journal or account file cannot be written
        """
        self._advance(TransferState.PENDING, from_id, to_id)

        try:
            value = to_decimal(amount)
            if value <= ZERO:
                raise InvalidArgumentError("Transfer amount must be positive.")

            records = self.store.load_all()
            from_index = find_account_index(records, from_id)
            to_index = find_account_index(records, to_id)
            if from_index == -1 or to_index == -1:
                missing = from_id if from_index == -1 else to_id
                raise AccountNotFoundError(
                    f"Source or destination account not found: {missing}", missing
                )

            if records[from_index].balance < value:
                raise InsufficientFundsError(
                    f"Insufficient funds in source account {from_id}: "
                    f"balance={format_amount(records[from_index].balance)}, "
                    f"requested={format_amount(value)}"
                )

            transaction = TransactionRecord(from_id=from_id, to_id=to_id, amount=value, note=note)
        except (InvalidArgumentError, AccountNotFoundError, InsufficientFundsError) as e:
            self._reject(e, from_id, to_id, amount)
            raise
        self._advance(TransferState.VALIDATED, from_id, to_id)

        records[from_index] = records[from_index].withdraw(value)
        records[to_index] = records[to_index].deposit(value)
        self._advance(TransferState.APPLIED, from_id, to_id)

        self.store.append_transaction(transaction)
        self._advance(TransferState.LOGGED, from_id, to_id)

        self.store.save_all(records)
        self._advance(TransferState.COMMITTED, from_id, to_id)

        log_action(
            self.logger, "info", f"Transfer committed: {from_id} -> {to_id}",
            action="transfer", resource=f"account:{from_id}",
            extra={
                "from_account": from_id,
                "to_account": to_id,
                "amount": format_amount(value),
                "note": note,
                "from_balance": format_amount(records[from_index].balance),
                "to_balance": format_amount(records[to_index].balance)
            }
        )

        return TransferReceipt(
            transaction=transaction,
            from_account=records[from_index],
            to_account=records[to_index]
        )

    def attempt_transfer(
        self,
        from_id: int,
        to_id: int,
        amount: AmountLike,
        note: str = TRANSFER_NOTE
    ) -> TransferOutcome:
        """Same as transfer(), but ledger errors come back as a TransferOutcome"""
        try:
            receipt = self.transfer(from_id, to_id, amount, note)
        except LedgerError as e:
            return TransferOutcome(
                state=self._last_state or TransferState.REJECTED,
                error_kind=e.kind,
                message=e.message
            )
        return TransferOutcome(state=TransferState.COMMITTED, receipt=receipt)

    def get_transactions(self, account_id: Optional[int] = None) -> List[TransactionRecord]:
        """Journal entries, oldest first, optionally touching one account"""
        transactions = self.store.load_transactions()
        if account_id is None:
            return transactions
        return [
            t for t in transactions
            if t.from_id == account_id or t.to_id == account_id
        ]
