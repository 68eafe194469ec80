import asyncio

from storefront.client import StoreAPIError, StoreClient


async def place(client, name, product, qty):
    items = [{"productId": product["_id"], "name": product["name"], "price": product["price"], "quantity": qty}]
    try:
        order = await client.create_order_async(
            customer={"name": name, "email": f"{name.lower()}@example.com"},
            items=items,
            total=product["price"] * qty,
        )
        print(f"✅ {name} placed {order['orderId']} for {qty} x {product['name']}")
        return order
    except StoreAPIError as e:
        print(f"❌ {name} order failed: {e}")
        return None


async def main():
    c = StoreClient(base_url="http://127.0.0.1:5000")
    product = c.list_products()[0]

    print("\n⚡ Placing orders concurrently...")
    orders = await asyncio.gather(*[place(c, name, product, 1) for name in ("Alice", "Bob", "Carol", "Dave")])

    ids = [o["orderId"] for o in orders if o]
    print(f"\n🧾 {len(ids)} orders, {len(set(ids))} distinct order numbers")
    # stock is not decremented by orders
    print("📦 Product after orders:", c.get_product(product["_id"]))


if __name__ == "__main__":
    asyncio.run(main())
