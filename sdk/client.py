# sdk/client.py
import requests
import httpx
from typing import Any, Dict, Optional

API_KEY_HEADER = "x-api-key"


class ProductApiError(Exception):
    """Raised for any non-2xx answer; carries the decoded error body."""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"HTTP {status_code}: {self.message}")

    @property
    def message(self) -> str:
        if isinstance(self.payload, dict):
            if "details" in self.payload:
                return "; ".join(self.payload["details"])
            return str(self.payload.get("message") or self.payload.get("error") or self.payload)
        return str(self.payload)


def _decode(r) -> Any:
    try:
        body = r.json()
    except ValueError:
        body = r.text
    if r.status_code >= 400:
        raise ProductApiError(r.status_code, body)
    return body


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key
        # anything with requests-style get/post/put/delete works, e.g. a TestClient
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def health(self) -> str:
        r = self.session.get(self._url("/"), timeout=self.timeout)
        if r.status_code >= 400:
            raise ProductApiError(r.status_code, r.text)
        return r.text

    # Queries
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None):
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return _decode(self.session.get(self._url("/api/products"), params=params, timeout=self.timeout))

    def search_products(self, name: str):
        return _decode(self.session.get(self._url("/api/products/search"), params={"name": name}, timeout=self.timeout))

    def products_by_category(self, category: str):
        r = self.session.get(self._url("/api/products/category"), params={"category": category}, timeout=self.timeout)
        return _decode(r)

    def statistics(self) -> Dict[str, int]:
        return _decode(self.session.get(self._url("/api/products/statistics"), timeout=self.timeout))

    def get_product(self, product_id: str):
        return _decode(self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout))

    # Mutations
    def create_product(self, name: str, price: float, category: str, in_stock: bool = True,
                       description: Optional[str] = None):
        payload: Dict[str, Any] = {"name": name, "price": price, "category": category, "inStock": in_stock}
        if description is not None:
            payload["description"] = description
        return _decode(self.session.post(self._url("/api/products"), json=payload, timeout=self.timeout))

    def update_product(self, product_id: str, fields: Dict[str, Any]):
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=fields, timeout=self.timeout)
        return _decode(r)

    def delete_product(self, product_id: str):
        return _decode(self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout))

    # Async create (example)
    async def create_product_async(self, payload: Dict[str, Any], transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport,
                                     headers=headers) as client:
            r = await client.post("/api/products", json=payload)
            return _decode(r)
