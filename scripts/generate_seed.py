"""Generate mock jersey shop orders for a demo database."""

import csv
import random
from datetime import datetime, timedelta
from pathlib import Path

CUSTOMERS = [
    ("Budi Santoso", "081211110001", "Jl. Diponegoro 12", "Bandung", "Jawa Barat"),
    ("Siti Rahma", "081211110002", "Jl. Pemuda 8", "Semarang", "Jawa Tengah"),
    ("Andi Wijaya", "081211110003", "Jl. Basuki Rahmat 40", "Surabaya", "Jawa Timur"),
    ("Dewi Lestari", "081211110004", "Jl. Gajah Mada 3", "Medan", "Sumatera Utara"),
    ("Rizky Pratama", "081211110005", "Jl. Thamrin 21", "Jakarta", "DKI Jakarta"),
    ("Nur Aini", "081211110006", "Jl. Malioboro 77", "Yogyakarta", "DI Yogyakarta"),
]
COURIERS = [("JNE Express", "JNE"), ("J&T Express", "JNT"), ("SiCepat", "SCP"), ("", "")]
JERSEYS = [
    ("Timnas Indonesia Home 2024", 350000),
    ("Persib Bandung Home 2024", 275000),
    ("Persija Away 2024", 275000),
    ("Real Madrid Home 2024", 450000),
    ("Arsenal Away 2024", 425000),
    ("Barcelona Retro 1999", 300000),
]
SIZES = ["S", "M", "L", "XL", "XXL"]
PAYMENTS = ["COD", "Cash", "Transfer", "Shopee"]
STATUSES = ["pending", "in_process", "completed", "returned"]

rows = []
now = datetime(2024, 6, 30, 20, 0, 0)
random.seed(42)
for _ in range(100):
    name, phone, address, city, province = random.choice(CUSTOMERS)
    courier_name, courier_code = random.choice(COURIERS)
    jersey, price = random.choice(JERSEYS)
    quantity = random.choices([1, 2, 3], weights=[6, 3, 1])[0]
    order_date = now - timedelta(days=random.randint(0, 180), hours=random.randint(0, 12))
    rows.append(
        {
            "customer_name": name,
            "customer_phone": phone,
            "address": address,
            "city": city,
            "province": province,
            "courier_name": courier_name,
            "courier_code": courier_code,
            "jersey_name": jersey,
            "jersey_size": random.choice(SIZES),
            "price": price,
            "quantity": quantity,
            "payment_method": random.choice(PAYMENTS),
            "order_status": random.choices(STATUSES, weights=[2, 2, 6, 1])[0],
            "transaction_date": order_date.isoformat(timespec="seconds"),
        }
    )

path = Path("data/demo_orders.csv")
path.parent.mkdir(parents=True, exist_ok=True)
with path.open("w", newline="", encoding="utf-8") as file:
    writer = csv.DictWriter(file, fieldnames=list(rows[0].keys()))
    writer.writeheader()
    writer.writerows(rows)

print(f"Generated {len(rows)} rows -> {path}")
