import logging

from sqlalchemy.exc import SQLAlchemyError

from errors import PersistenceError, ValidationError
from models import MUTABLE_FIELDS, Transaction

logger = logging.getLogger(__name__)


def _missing_fields(values):
    missing = []
    for name in MUTABLE_FIELDS:
        value = values.get(name)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            missing.append(name)
    return missing


class TransactionStore:
    """Persistence for the ledger's single transactions table.

    Every method needs an active Flask application context. Records come
    back as plain dicts in the API's serialized shape.
    """

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def _fail(self, action, exc):
        self.session.rollback()
        logger.exception("transaction store failed to %s", action)
        raise PersistenceError(f"Failed to {action} transaction") from exc

    def list(self):
        try:
            rows = Transaction.query.order_by(
                Transaction.date.desc(), Transaction.id.desc()
            ).all()
        except SQLAlchemyError as exc:
            self._fail("fetch", exc)
        return [t.to_dict() for t in rows]

    def count(self):
        try:
            return Transaction.query.count()
        except SQLAlchemyError as exc:
            self._fail("count", exc)

    def get(self, id):
        try:
            txn = self.session.get(Transaction, id)
        except SQLAlchemyError as exc:
            self._fail("fetch", exc)
        return txn.to_dict() if txn else None

    def create(self, date, description, category, amount, type):
        values = dict(date=date, description=description, category=category, amount=amount, type=type)
        missing = _missing_fields(values)
        if missing:
            logger.info("rejected transaction, missing fields: %s", ", ".join(missing))
            raise ValidationError("Missing required fields")

        txn = Transaction(**values)
        try:
            self.session.add(txn)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail("add", exc)

        logger.info("created transaction id=%s type=%s amount=%s", txn.id, type, amount)
        return self.get(txn.id)

    def update(self, id, date, description, category, amount, type):
        values = dict(date=date, description=description, category=category, amount=amount, type=type)
        missing = _missing_fields(values)
        if missing:
            logger.info("rejected transaction, missing fields: %s", ", ".join(missing))
            raise ValidationError("Missing required fields")

        try:
            txn = self.session.get(Transaction, id)
            if txn is None:
                logger.info("update skipped, transaction id=%s does not exist", id)
                return None
            for key, value in values.items():
                setattr(txn, key, value)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail("update", exc)

        return self.get(id)

    def delete(self, id):
        try:
            deleted = Transaction.query.filter_by(id=id).delete()
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail("delete", exc)
        logger.info("deleted transaction id=%s (rows=%s)", id, deleted)

    def bulk_insert(self, rows):
        """Insert many rows in one commit; used for the first-start seed."""
        try:
            self.session.add_all([Transaction(**row) for row in rows])
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail("seed", exc)
        return len(rows)
