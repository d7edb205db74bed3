"""
Storage Backend Module

Provides the abstract ledger store interface and implementations backed by
flat text files (persistence) and by in-memory line lists (testing). Both
go through the same pipe-delimited line codec; balances are written as
two-decimal strings.

The file store takes no locks: one writer process at a time.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, TypeVar, Union
from pathlib import Path
import os
import tempfile

from .accounts import AccountRecord
from .journal import TransactionRecord
from .config import LedgerConfig, get_config
from .errors import LedgerIOError
from .logging_config import get_logger, log_action


RecordT = TypeVar("RecordT")

logger = get_logger("bank_ledger.storage")


def parse_lines(
    lines: Sequence[Union[str, bytes]],
    parser: Callable[[str], RecordT],
    source: str,
    encoding: str = "utf-8"
) -> List[RecordT]:
    """
    Decode one record per line, skipping blank and malformed lines

    Raw byte lines are decoded one at a time, so a line that is not valid
    in the file encoding is treated like any other malformed line: logged
    and dropped, without blocking the rest.
    """
    records = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            text = line.decode(encoding) if isinstance(line, bytes) else line
            records.append(parser(text))
        except (ValueError, ArithmeticError) as e:
            if isinstance(line, bytes):
                shown = line.rstrip(b"\r\n").decode(encoding, errors="backslashreplace")
            else:
                shown = line.rstrip("\r\n")
            log_action(
                logger, "warning", f"Skipping malformed line {line_number} in {source}: {e}",
                action="skip_malformed_line", resource=source,
                extra={"line_number": line_number, "line": shown}
            )
    return records


class LedgerStore(ABC):
    """Abstract interface for ledger storage backends"""

    @abstractmethod
    def load_all(self) -> List[AccountRecord]:
        """Load every account record, in stored order"""
        pass

    @abstractmethod
    def save_all(self, records: List[AccountRecord]) -> None:
        """Overwrite the account set with records, in the given order"""
        pass

    @abstractmethod
    def append_account(self, record: AccountRecord) -> None:
        """Append one account record without rewriting the others"""
        pass

    @abstractmethod
    def append_transaction(self, record: TransactionRecord) -> None:
        """Append one entry to the transaction journal"""
        pass

    @abstractmethod
    def load_transactions(self) -> List[TransactionRecord]:
        """Load the transaction journal, oldest first"""
        pass


class InMemoryLedgerStore(LedgerStore):
    """In-memory ledger store for testing. Keeps serialized lines."""

    def __init__(
        self,
        accounts: Optional[List[AccountRecord]] = None,
        account_lines: Optional[List[str]] = None
    ):
        self._account_lines: List[str] = list(account_lines or [])
        self._journal_lines: List[str] = []
        for record in accounts or []:
            self._account_lines.append(record.serialize())

    def load_all(self) -> List[AccountRecord]:
        return parse_lines(self._account_lines, AccountRecord.deserialize, "memory:accounts")

    def save_all(self, records: List[AccountRecord]) -> None:
        self._account_lines = [record.serialize() for record in records]

    def append_account(self, record: AccountRecord) -> None:
        self._account_lines.append(record.serialize())

    def append_transaction(self, record: TransactionRecord) -> None:
        self._journal_lines.append(record.serialize())

    def load_transactions(self) -> List[TransactionRecord]:
        return parse_lines(self._journal_lines, TransactionRecord.deserialize, "memory:transactions")

    def accounts_text(self) -> str:
        """Account data exactly as the file store would write it"""
        return "".join(line + "\n" for line in self._account_lines)

    def journal_text(self) -> str:
        """Journal data exactly as the file store would write it"""
        return "".join(line + "\n" for line in self._journal_lines)


class FileLedgerStore(LedgerStore):
    """
    Flat-file ledger store

    Accounts live in one 'owner|id|balance' file that is rewritten on every
    save; transactions are appended to a separate journal file that is
    never rewritten.
    """

    def __init__(
        self,
        accounts_path: Union[str, Path],
        transactions_path: Union[str, Path],
        encoding: str = "utf-8",
        atomic_writes: bool = False
    ):
        self.accounts_path = Path(accounts_path)
        self.transactions_path = Path(transactions_path)
        self.encoding = encoding
        self.atomic_writes = atomic_writes

    @classmethod
    def from_config(cls, config: Optional[LedgerConfig] = None) -> 'FileLedgerStore':
        """Build a store from configuration (global config if None)"""
        config = config or get_config()
        return cls(
            accounts_path=config.accounts_file,
            transactions_path=config.transactions_file,
            encoding=config.encoding,
            atomic_writes=config.atomic_writes
        )

    def _read_lines(self, path: Path) -> List[bytes]:
        """Read the raw lines of path; a missing file reads as empty"""
        try:
            with open(path, "rb") as f:
                return f.readlines()
        except FileNotFoundError:
            logger.debug(f"{path} does not exist yet, treating as empty")
            return []
        except OSError as e:
            raise LedgerIOError(f"Unable to read {path}: {e}", str(path)) from e

    def _encode(self, content: str, path: Path) -> bytes:
        """Encode before any file is opened, so a failure never truncates"""
        try:
            return content.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise LedgerIOError(
                f"Cannot encode record for {path} as {self.encoding}: {e}", str(path)
            ) from e

    def _append_line(self, path: Path, line: str) -> None:
        data = self._encode(line + "\n", path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "ab") as f:
                f.write(data)
        except OSError as e:
            raise LedgerIOError(f"Unable to open {path} for writing: {e}", str(path)) from e

    def load_all(self) -> List[AccountRecord]:
        lines = self._read_lines(self.accounts_path)
        records = parse_lines(
            lines, AccountRecord.deserialize, str(self.accounts_path), self.encoding
        )
        logger.debug(f"Loaded {len(records)} accounts from {self.accounts_path}")
        return records

    def save_all(self, records: List[AccountRecord]) -> None:
        data = self._encode(
            "".join(record.serialize() + "\n" for record in records), self.accounts_path
        )
        try:
            self.accounts_path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic_writes:
                self._replace_file(self.accounts_path, data)
            else:
                with open(self.accounts_path, "wb") as f:
                    f.write(data)
        except OSError as e:
            raise LedgerIOError(
                f"Unable to open {self.accounts_path} for writing: {e}", str(self.accounts_path)
            ) from e
        logger.debug(f"Saved {len(records)} accounts to {self.accounts_path}")

    def _replace_file(self, path: Path, data: bytes) -> None:
        """Write data to a sibling temp file, then rename it over path"""
        fd, temp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def append_account(self, record: AccountRecord) -> None:
        self._append_line(self.accounts_path, record.serialize())

    def append_transaction(self, record: TransactionRecord) -> None:
        self._append_line(self.transactions_path, record.serialize())

    def load_transactions(self) -> List[TransactionRecord]:
        lines = self._read_lines(self.transactions_path)
        return parse_lines(
            lines, TransactionRecord.deserialize, str(self.transactions_path), self.encoding
        )
