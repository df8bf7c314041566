#!/usr/bin/env python
import os

from sdk.productclient import ProductClient, ProductAPIError


def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "my-secret-key"),
    )

    # -----------------------------
    # Seed data
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    print("\nElectronics, first page of one...")
    print(c.list_products(category="electronics", page=1, limit=1))

    # -----------------------------
    # Create / update
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "1.7L electric kettle", 35, "kitchen", True)
    print(kettle)

    print("\nMarking it out of stock...")
    print(c.update_product(kettle["id"], "Kettle", "1.7L electric kettle", 35, "kitchen", False))

    # -----------------------------
    # Search and stats
    # -----------------------------
    print("\nSearching for 'lap'...")
    print(c.search_products("lap"))

    print("\nStats...")
    print(c.stats())

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting the kettle...")
    print(c.delete_product(kettle["id"]))

    try:
        c.get_product(kettle["id"])
    except ProductAPIError as e:
        print(f"\nAs expected: {e}")


if __name__ == "__main__":
    main()
