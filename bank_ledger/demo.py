"""
Demonstration run of the ledger against the configured files.
"""

from typing import Callable, List, Optional

from .accounts import AccountManager, AccountRecord, Displayable
from .config import LedgerConfig, get_config
from .errors import LedgerError
from .storage import FileLedgerStore, LedgerStore
from .transactions import TransactionProcessor


SAMPLE_ACCOUNTS = [
    ("Alice", 1001, "1500.00"),
    ("Bob", 1002, "800.00"),
]


def run_demo(
    config: Optional[LedgerConfig] = None,
    out: Callable[[str], None] = print,
    store: Optional[LedgerStore] = None
) -> List[AccountRecord]:
    """
    Open the sample accounts, move money between them and show the result

    Returns:
        Accounts as loaded from the store at the end of the run
    """
    store = store or FileLedgerStore.from_config(config or get_config())
    manager = AccountManager(store)
    processor = TransactionProcessor(store)

    out("=== Bank Ledger (Demo) ===")

    out("[Demo] Opening sample accounts...")
    for owner, account_id, balance in SAMPLE_ACCOUNTS:
        existing = manager.get_account(account_id)
        if existing is None:
            manager.open_account(owner, account_id, balance)
        else:
            out(f"[Demo] Account {existing.summary()} already exists")

    out("[Demo] Accounts:")
    show_all(manager.list_accounts(), out)

    out("[Demo] Transfer 200.00 from Alice (1001) to Bob (1002)...")
    outcome = processor.attempt_transfer(1001, 1002, "200.00")
    if outcome.ok:
        out(f"[Demo] Transfer committed: {outcome.receipt.transaction.serialize()}")
    else:
        out(f"[Demo] Transfer failed ({outcome.error_kind.value}): {outcome.message}")

    out("[Demo] Transfer 50.00 from Alice (1001) to unknown account 9999...")
    outcome = processor.attempt_transfer(1001, 9999, "50.00")
    out(f"[Demo] {outcome.state.value} ({outcome.error_kind.value}): {outcome.message}")

    out("[Demo] Depositing -50.00 into Alice's account...")
    alice = manager.get_account(1001)
    try:
        alice.deposit("-50.00")
    except LedgerError as e:
        out(f"[Caught {e.kind.value}] {e.message}")

    out("[Demo] Final accounts loaded from file:")
    final = manager.list_accounts()
    show_all(final, out)

    out("=== Demo finished ===")
    return final


def show_all(items: List[Displayable], out: Callable[[str], None] = print) -> None:
    for item in items:
        out(item.display())
