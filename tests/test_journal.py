"""
Test suite for transaction journal records
"""

import pytest
from decimal import Decimal

from bank_ledger.journal import TransactionRecord, TRANSFER_NOTE
from bank_ledger.errors import InvalidArgumentError


class TestTransactionRecord:
    """Test TransactionRecord validation and codec"""
    
    def test_defaults_to_transfer_note(self):
        record = TransactionRecord(from_id=1001, to_id=1002, amount=Decimal('200'))
        
        assert record.note == TRANSFER_NOTE == "transfer"
        assert record.amount == Decimal('200.00')
    
    def test_serialize(self):
        record = TransactionRecord(1001, 1002, Decimal('200.00'))
        assert record.serialize() == "1001|1002|200.00|transfer"
    
    def test_round_trip(self):
        record = TransactionRecord(3, 4, Decimal('0.07'), "rent for May")
        assert TransactionRecord.deserialize(record.serialize() + "\n") == record
    
    def test_empty_note_round_trip(self):
        record = TransactionRecord(3, 4, Decimal('1'), "")
        assert TransactionRecord.deserialize(record.serialize()) == record
    
    @pytest.mark.parametrize("amount", ["0", "-1", "0.004"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(InvalidArgumentError):
            TransactionRecord(1, 2, amount)
    
    def test_note_must_be_encodable(self):
        with pytest.raises(InvalidArgumentError):
            TransactionRecord(1, 2, Decimal('1'), "bad\udcff")
    
    def test_note_cannot_contain_separator(self):
        with pytest.raises(InvalidArgumentError):
            TransactionRecord(1, 2, Decimal('1'), "a|b")
    
    @pytest.mark.parametrize("line", [
        "1001|1002|200.00",
        "1001|1002|200.00|transfer|extra",
        "x|1002|200.00|transfer",
        "1001|1002|0.00|transfer",
        "1_001|1002|200.00|transfer",
        "1001|1002|2_00.00|transfer",
        "1001|1002|2e2|transfer",
        "1001|\u0661\u0660\u0660\u0662|200.00|transfer",
    ])
    def test_deserialize_rejects_malformed(self, line):
        with pytest.raises(ValueError):
            TransactionRecord.deserialize(line)
