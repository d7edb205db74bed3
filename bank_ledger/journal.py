"""
Transaction journal records.

One line per committed transfer: 'from_id|to_id|amount|note'.
"""

from decimal import Decimal
from dataclasses import dataclass

from .accounts import FIELD_SEPARATOR, id_from_field, validate_account_id, validate_text_field
from .currency import ZERO, to_decimal, format_amount, amount_from_field
from .errors import InvalidArgumentError


TRANSFER_NOTE = "transfer"


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable journal entry for a committed transfer"""
    from_id: int
    to_id: int
    amount: Decimal
    note: str = TRANSFER_NOTE
    
    def __post_init__(self):
        validate_account_id(self.from_id, "from_id")
        validate_account_id(self.to_id, "to_id")
        validate_text_field(self.note, "note")
        
        amount = to_decimal(self.amount)
        if amount <= ZERO:
            raise InvalidArgumentError(f"Transaction amount must be positive, got {amount}")
        object.__setattr__(self, 'amount', amount)
    
    def serialize(self) -> str:
        return FIELD_SEPARATOR.join([
            str(self.from_id), str(self.to_id), format_amount(self.amount), self.note
        ])
    
    @classmethod
    def deserialize(cls, text: str) -> 'TransactionRecord':
        fields = text.rstrip("\r\n").split(FIELD_SEPARATOR)
        if len(fields) != 4:
            raise ValueError(f"Expected 4 fields in transaction record, got {len(fields)}")
        
        raw_from, raw_to, raw_amount, note = fields
        return cls(
            from_id=id_from_field(raw_from, "from_id"),
            to_id=id_from_field(raw_to, "to_id"),
            amount=amount_from_field(raw_amount),
            note=note
        )
