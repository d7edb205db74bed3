"""
Tests for the demonstration run
"""

import tempfile
from decimal import Decimal
from pathlib import Path

from bank_ledger.config import LedgerConfig
from bank_ledger.demo import run_demo
from bank_ledger.storage import InMemoryLedgerStore


class TestRunDemo:
    """Test the fixed demonstration sequence"""
    
    def test_demo_against_files(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config = LedgerConfig(
                accounts_file=str(root / "accounts.txt"),
                transactions_file=str(root / "transactions.txt")
            )
            output = []
            
            final = run_demo(config, out=output.append)
            
            assert [(a.id, a.balance) for a in final] == [
                (1001, Decimal('1300.00')), (1002, Decimal('1000.00'))
            ]
            assert (root / "transactions.txt").read_text(encoding="utf-8") == (
                "1001|1002|200.00|transfer\n"
            )
            assert "Account Number: 1002 | Name: Bob | Balance: 1000.00" in output
            assert any("account_not_found" in line for line in output)
            assert any("invalid_argument" in line for line in output)
    
    def test_demo_reuses_existing_accounts(self):
        store = InMemoryLedgerStore()
        run_demo(store=store, out=lambda line: None)
        output = []
        
        final = run_demo(store=store, out=output.append)
        
        assert len(final) == 2
        assert final[0].balance == Decimal('1100.00')
        assert "[Demo] Account 1001 (Alice) already exists" in output
        assert len(store.load_transactions()) == 2
