#!/usr/bin/env python3
"""
Bank Ledger Entry Point

Runs the fixed demonstration against the configured account and journal
files (LEDGER_ACCOUNTS_FILE / LEDGER_TRANSACTIONS_FILE, default ./accounts.txt
and ./transactions.txt).
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from bank_ledger.config import get_config
from bank_ledger.demo import run_demo
from bank_ledger.logging_config import setup_logging


if __name__ == "__main__":
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format)

    print("🏦 Starting Bank Ledger demo...")
    print(f"📄 Accounts file: {config.accounts_file}")
    print(f"🧾 Journal file: {config.transactions_file}")
    print()

    try:
        run_demo(config)
    except Exception as e:
        print(f"❌ Unhandled error: {e}")
        sys.exit(1)
