# sdk/productclient.py
from typing import Optional, Dict, Any

import requests
from rich import print


class ProductAPIError(Exception):
    """Raised for any response with status >= 400."""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.message = message


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # anything with a requests-like interface works, e.g. fastapi's TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    def _handle(self, r):
        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = {}
            raise ProductAPIError(
                r.status_code,
                body.get("error", "HTTPError"),
                body.get("message", r.text),
            )
        return r.json()

    # Reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        return self._handle(r)

    def search_products(self, name: str):
        r = self.session.get(self._url(f"/search/{name}"), timeout=self.timeout)
        return self._handle(r)

    def stats(self) -> Dict[str, int]:
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        return self._handle(r)

    # Writes (need api_key)
    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        r = self.session.post(self._url(), json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock,
        }, timeout=self.timeout)
        return self._handle(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool):
        r = self.session.put(self._url(f"/{product_id}"), json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock,
        }, timeout=self.timeout)
        return self._handle(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        return self._handle(r)


def _str_to_bool(value: str) -> bool:
    if value.lower() in ("1", "true", "yes", "y"):
        return True
    if value.lower() in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


if __name__ == "__main__":
    import argparse
    import os
    import sys

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"), help="Value for the x-api-key header")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Read commands
    # ---------------------------
    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Exact category filter")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("--name", required=True)

    subparsers.add_parser("stats", help="Product count per category")

    # ---------------------------
    # Write commands
    # ---------------------------
    for cmd in ("create", "update"):
        wp = subparsers.add_parser(cmd, help=f"{cmd.capitalize()} a product")
        if cmd == "update":
            wp.add_argument("--product-id", required=True)
        wp.add_argument("--name", required=True)
        wp.add_argument("--description", required=True)
        wp.add_argument("--price", type=float, required=True)
        wp.add_argument("--category", required=True)
        wp.add_argument("--in-stock", type=_str_to_bool, default=True)

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list":
            print(c.list_products(args.category, args.page, args.limit))
        elif args.command == "get":
            print(c.get_product(args.product_id))
        elif args.command == "search":
            print(c.search_products(args.name))
        elif args.command == "stats":
            print(c.stats())
        elif args.command == "create":
            print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
        elif args.command == "update":
            print(c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, args.in_stock))
        elif args.command == "delete":
            print(c.delete_product(args.product_id))
    except ProductAPIError as e:
        print(f"[red]{e}[/red]")
        sys.exit(1)
