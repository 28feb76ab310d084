"""Flat-file storage: one JSON array per entity, overwritten on every mutation."""
import json
import logging
import os
import stat
import tempfile
import threading
from typing import Any, Callable, Dict, List, Optional

from flask import Flask, current_app

from cashcarry.metrics import store_save_failures_total

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class JsonStore:
    """
    Ordered collection of records backed by a JSON file.

    load() never raises: a missing, unreadable or malformed file degrades to an
    empty collection with a warning. save() writes a temp file and renames it
    over the target; failures are logged and otherwise ignored.

    Callers that read-modify-write must hold ``lock`` for the whole sequence.
    """

    def __init__(self, path: str, name: Optional[str] = None):
        self.path = path
        self.name = name or os.path.basename(path)
        self.lock = threading.RLock()
        self.records: List[Record] = []

    def load(self) -> List[Record]:
        """Read the backing file into memory and return the records."""
        try:
            with open(self.path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.warning(f"[STORE] {self.name}: {self.path} not found, starting empty")
            data = []
        except (OSError, ValueError) as e:
            logger.warning(f"[STORE] Error loading {self.name}: {e}")
            data = []

        if not isinstance(data, list):
            logger.warning(f"[STORE] {self.name} does not hold a JSON array, starting empty")
            data = []

        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(f"[STORE] {self.name}: skipped {len(data) - len(records)} non-object entries")

        with self.lock:
            self.records = records
        logger.info(f"[STORE] Loaded {len(records)} records from {self.name}")
        return self.records

    def save(self, records: Optional[List[Record]] = None) -> bool:
        """
        Serialize the full collection and atomically replace the backing file.

        Returns:
            True if the file was replaced, False if the write failed.
        """
        with self.lock:
            if records is not None:
                self.records = records
            payload = json.dumps(self.records, indent=2, ensure_ascii=False)

            directory = os.path.dirname(os.path.abspath(self.path))
            tmp_path = None
            try:
                os.makedirs(directory, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    prefix=f".{os.path.basename(self.path)}.", suffix='.tmp', dir=directory
                )
                with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.chmod(tmp_path, _target_mode(self.path))
                os.replace(tmp_path, self.path)
                return True
            except OSError as e:
                logger.error(f"[STORE] Error saving {self.name}: {e}")
                store_save_failures_total.labels(self.name).inc()
                if tmp_path and os.path.exists(tmp_path):
                    try:
                        os.remove(tmp_path)
                    except OSError:
                        pass
                return False

    def all(self) -> List[Record]:
        return list(self.records)

    def find(self, predicate: Callable[[Record], bool]) -> Optional[Record]:
        for record in self.records:
            if predicate(record):
                return record
        return None

    def filter(self, predicate: Callable[[Record], bool]) -> List[Record]:
        return [r for r in self.records if predicate(r)]

    def get(self, record_id: Any) -> Optional[Record]:
        """Find a record by its ``id`` field (integer equality, booleans never match)."""
        if isinstance(record_id, bool):
            return None
        return self.find(lambda r: _same_id(r.get('id'), record_id))

    def max_id(self) -> int:
        ids = [r.get('id') for r in self.records]
        ids = [i for i in ids if isinstance(i, (int, float)) and not isinstance(i, bool)]
        return int(max(ids)) if ids else 0

    def next_id(self) -> int:
        """Max existing id + 1, or 1 when the collection is empty."""
        return self.max_id() + 1

    def append(self, record: Record) -> bool:
        """Append a record and persist the whole collection."""
        with self.lock:
            self.records.append(record)
            return self.save()

    def __len__(self) -> int:
        return len(self.records)


def _target_mode(path: str) -> int:
    """Permission bits for a rewritten file: keep the existing file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _same_id(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    if not isinstance(left, (int, float)) or not isinstance(right, (int, float)):
        return False
    return left == right


class Stores:
    """Composition root for the three entity collections."""

    def __init__(self, products: JsonStore, users: JsonStore, orders: JsonStore):
        self.products = products
        self.users = users
        self.orders = orders

    def load_all(self) -> None:
        self.products.load()
        self.users.load()
        self.orders.load()


def init_db(app: Flask) -> Stores:
    """Create the entity stores from config, load them, and attach them to the app."""
    stores = Stores(
        products=JsonStore(app.config['PRODUCTS_FILE'], 'products'),
        users=JsonStore(app.config['USERS_FILE'], 'users'),
        orders=JsonStore(app.config['ORDERS_FILE'], 'orders'),
    )
    stores.load_all()
    app.extensions['cashcarry.stores'] = stores
    return stores


def get_stores() -> Stores:
    """Get the stores of the current application."""
    return current_app.extensions['cashcarry.stores']
