"""
Seed data used by the fixture data source in place of a backend response.
"""
from __future__ import annotations

from app.dashboard.models import Customer, Shop

CUSTOMERS: tuple[Customer, ...] = (
    Customer(id=1, name="John Doe", email="john.doe@example.com", phone="1234567890"),
    Customer(id=2, name="Jane Smith", email="jane.smith@example.com", phone="2345678901"),
    Customer(id=3, name="Alice Brown", email="alice.brown@example.com", phone="3456789012"),
    Customer(id=4, name="Bob White", email="bob.white@example.com", phone="4567890123"),
    Customer(id=5, name="Charlie Black", email="charlie.black@example.com", phone="5678901234"),
    Customer(id=6, name="Daisy Green", email="daisy.green@example.com", phone="6789012345"),
    Customer(id=7, name="Ethan Blue", email="ethan.blue@example.com", phone="7890123456"),
    Customer(id=8, name="Fiona Red", email="fiona.red@example.com", phone="8901234567"),
)

SHOPS: tuple[Shop, ...] = (
    Shop(id=1, name="General Store", owner_name="John Doe", location="New York", shop_type="General", package_type="Basic"),
    Shop(id=2, name="Medical Supplies", owner_name="Jane Smith", location="California", shop_type="Medical", package_type="Standard"),
    Shop(id=3, name="Footwear Hub", owner_name="Alice Brown", location="Texas", shop_type="Footwear", package_type="Premium"),
    Shop(id=4, name="Electrical Bazaar", owner_name="Bob Johnson", location="Florida", shop_type="Electrical", package_type="Basic"),
    Shop(id=5, name="Fashion Paradise", owner_name="Sara Lee", location="Nevada", shop_type="Clothes", package_type="Standard"),
    Shop(id=6, name="Tech World", owner_name="Mike Davis", location="Washington", shop_type="Electronics", package_type="Premium"),
)
