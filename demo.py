#!/usr/bin/env python
from storefront.client import StoreClient
from storefront.session import Storefront


def main():
    c = StoreClient(base_url="http://127.0.0.1:5000")
    store = Storefront(c)

    # -----------------------------
    # Load catalog
    # -----------------------------
    print("Loading products...")
    if not store.load_products():
        print(f"Could not load products: {store.error}")
        return
    for p in store.products:
        print(f"  {p['_id']}  {p['name']:<22} ${p['price']:.2f}")

    # -----------------------------
    # Fill the cart
    # -----------------------------
    print("\nAdding products to cart...")
    headphones, watch = store.products[0], store.products[1]
    store.add_to_cart(headphones)
    store.add_to_cart(headphones)
    store.add_to_cart(watch)
    store.update_quantity(watch["_id"], 3)
    for it in store.cart.items:
        print(f"  {it['product']['name']} x{it['quantity']}")
    print(f"Cart total: ${store.get_total():.2f}")

    # -----------------------------
    # Checkout
    # -----------------------------
    print("\nPlacing order...")
    store.customer_name = "Alice"
    store.customer_email = "alice@example.com"
    order = store.checkout()
    print(f"Order {order['orderId']} {order['status']}, total ${order['total']:.2f}")

    # -----------------------------
    # List orders
    # -----------------------------
    print("\nListing all orders...")
    for o in c.list_orders():
        print(f"  {o['orderId']}  {o['customer']['name']:<10} ${o['total']:.2f}")


if __name__ == "__main__":
    main()
