# scripts/seed_counters.py
from counter_admin.config import settings
from counter_admin.db import engine, SessionLocal
from counter_admin import models
from counter_admin.repository import Metric, SqlMetricRepository

models.Base.metadata.create_all(bind=engine)

repo = SqlMetricRepository(SessionLocal)
samples = {
    f"{settings.counter_prefix}orders.created": 42.0,
    f"{settings.counter_prefix}orders.cancelled": 3.0,
    f"{settings.counter_prefix}logins": 17.0,
    "gauge.heap.used": 512.0,
}

for name, value in samples.items():
    repo.set(Metric(name, value))
    print(f"Seeded {name} = {value}")
