import json
import sys

import requests

BASE_URL = "http://localhost:8000/api/v1"
USERNAME = "verify_shopper"
EMAIL = "verify_shopper@example.com"
PASSWORD = "SecurePassword123!"


def print_response(name, response):
    print(f"--- {name} ---")
    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    print("\n")


def run_verification():
    # 1. Register (400 on rerun is fine, the user already exists)
    print("1. Registering User...")
    resp = requests.post(f"{BASE_URL}/auth/register", json={
        "username": USERNAME,
        "email": EMAIL,
        "password": PASSWORD,
        "first_name": "Verify",
        "last_name": "Shopper",
    })
    print_response("Register", resp)

    # 2. Login
    print("2. Logging in...")
    resp = requests.post(f"{BASE_URL}/auth/token", data={
        "username": USERNAME,
        "password": PASSWORD,
    })
    print_response("Login", resp)
    if resp.status_code != 200:
        print("Login failed, aborting.")
        sys.exit(1)
    headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}

    # 3. Browse the catalog
    print("3. Searching Products...")
    resp = requests.get(f"{BASE_URL}/products/", params={"search": "smart", "sort": "price-asc"})
    print_response("Search Products", resp)

    # 4. Fill the cart
    print("4. Adding to Cart...")
    resp = requests.post(f"{BASE_URL}/cart/", headers=headers, json={"product_id": 19, "quantity": 2})
    print_response("Add to Cart", resp)

    # 5. Price the cart
    print("5. Checkout Summary...")
    resp = requests.post(f"{BASE_URL}/checkout/summary", headers=headers)
    print_response("Checkout Summary", resp)
    summary = resp.json()

    # 6. Place the order from the cart contents
    print("6. Creating Order...")
    cart = requests.get(f"{BASE_URL}/cart/", headers=headers).json()
    resp = requests.post(f"{BASE_URL}/orders/", headers=headers, json={
        "order": {"total": summary["total"], "status": "pending"},
        "items": [
            {"product_id": line["product_id"], "quantity": line["quantity"], "price": line["product"]["price"]}
            for line in cart
        ],
    })
    print_response("Create Order", resp)

    # 7. Order history
    print("7. Listing Orders...")
    resp = requests.get(f"{BASE_URL}/orders/", headers=headers)
    print_response("Orders", resp)


if __name__ == "__main__":
    run_verification()
