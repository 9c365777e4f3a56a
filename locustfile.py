from locust import HttpUser, task, between
import random


class CustomerUser(HttpUser):
    """Walk-in customer: browses the menu and places orders without a token."""
    wait_time = between(0.1, 0.5)

    def on_start(self):
        r = self.client.get("/products")
        self.products = r.json() if r.status_code == 200 else []

    @task(3)
    def place_order(self):
        if not self.products:
            items = [{"name": "Latte", "qty": 1}]
            total = 45
        else:
            picks = random.sample(self.products, k=min(2, len(self.products)))
            items = [{"product_id": p["id"], "name": p["name"], "qty": random.randint(1, 3)} for p in picks]
            total = sum(p["price"] for p in picks)
        self.client.post("/orders", json={"items": items, "total": total})

    @task(1)
    def browse_menu(self):
        self.client.get("/categories")
        self.client.get("/products")


class CashierUser(HttpUser):
    """Admin screen polling the order queue and the sales dashboard."""
    wait_time = between(1, 2)

    def on_start(self):
        r = self.client.post("/login", json={"username": "Admin", "password": "1722"})
        token = r.json().get("token") if r.status_code == 200 else None
        self.headers = {"Authorization": f"Bearer {token}"} if token else {}

    @task(3)
    def list_orders(self):
        self.client.get("/orders", headers=self.headers)

    @task(1)
    def daily_sales(self):
        self.client.get("/daily-sales", headers=self.headers)
