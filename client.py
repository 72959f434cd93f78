import requests

from errors import NetworkError


class LedgerClient:
    """Thin HTTP client for the ledger JSON API."""

    def __init__(self, base_url, session=None, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc
        return response

    def list_transactions(self):
        return self._request("GET", "/api/transactions").json()

    def create_transaction(self, payload):
        return self._request("POST", "/api/transactions", json=payload).json()

    def update_transaction(self, transaction_id, payload):
        return self._request("PUT", f"/api/transactions/{transaction_id}", json=payload).json()

    def delete_transaction(self, transaction_id):
        self._request("DELETE", f"/api/transactions/{transaction_id}")
