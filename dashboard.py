import logging

from client import LedgerClient
from config import Config
from errors import NetworkError
from views import DashboardState

logger = logging.getLogger(__name__)


class Dashboard:
    """Client-side controller: keeps ``state`` in sync with the API.

    Network failures are logged and reported as ``False``; the in-memory
    ledger is left as it was. There are no retries.

    The admin flag toggled by :meth:`unlock` only decides what the UI
    offers. The API itself accepts mutations from anyone, so it is not an
    access control mechanism.
    """

    def __init__(self, client, state=None, admin_password=None):
        self.client = client
        self.state = state or DashboardState()
        self.admin_password = admin_password

    def refresh(self):
        try:
            self.state.transactions = self.client.list_transactions()
        except NetworkError:
            logger.error("error fetching transactions", exc_info=True)
            return False
        return True

    def save(self, payload, transaction_id=None):
        try:
            if transaction_id is None:
                self.client.create_transaction(payload)
            else:
                self.client.update_transaction(transaction_id, payload)
        except NetworkError:
            logger.error("error saving transaction", exc_info=True)
            return False
        return self.refresh()

    def remove(self, transaction_id):
        try:
            self.client.delete_transaction(transaction_id)
        except NetworkError:
            logger.error("error deleting transaction id=%s", transaction_id, exc_info=True)
            return False
        self.state.transactions = [t for t in self.state.transactions if t["id"] != transaction_id]
        return True

    def set_filters(self, **changes):
        return self.state.set_filters(**changes)

    def set_page(self, page):
        self.state.set_page(page)

    def unlock(self, password):
        if not self.admin_password:
            return False
        self.state.is_admin = password == self.admin_password
        return self.state.is_admin

    def lock(self):
        self.state.is_admin = False


def build_dashboard(config_object=Config, session=None):
    client = LedgerClient(config_object.API_BASE_URL, session=session)
    return Dashboard(client, admin_password=config_object.ADMIN_PASSWORD)
