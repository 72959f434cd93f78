import logging
import random

logger = logging.getLogger(__name__)

HISTORICAL_ROWS = [
    ("2024-01-02", "Saldo Awal Desember", "Lain-lain", 5000000, "income"),
    ("2024-01-05", "Infaq Jumat Minggu 1", "Infaq Jumat", 1250000, "income"),
    ("2024-01-10", "Pembelian Karpet Baru", "Sarana Prasarana", 2500000, "expense"),
    ("2024-01-12", "Infaq Jumat Minggu 2", "Infaq Jumat", 1100000, "income"),
    ("2024-01-15", "Biaya Kebersihan Bulanan", "Operasional", 300000, "expense"),
    ("2024-01-19", "Infaq Jumat Minggu 3", "Infaq Jumat", 1350000, "income"),
    ("2024-01-20", "Perbaikan Sound System", "Pemeliharaan", 450000, "expense"),
    ("2024-01-25", "Konsumsi Pengajian Rutin", "Kegiatan", 600000, "expense"),
    ("2024-01-26", "Infaq Jumat Minggu 4", "Infaq Jumat", 1200000, "income"),
    ("2024-01-28", "Infaq Bulanan Januari", "Infaq Bulanan", 2000000, "income"),
    ("2024-02-02", "Infaq Jumat Feb W1", "Infaq Jumat", 1000000, "income"),
    ("2024-02-05", "Listrik Musholla", "Operasional", 250000, "expense"),
]

SYNTHETIC_ROW_COUNT = 40
MIN_SYNTHETIC_AMOUNT = 50000
MAX_SYNTHETIC_AMOUNT = 549999


def synthetic_rows(rng, count=SYNTHETIC_ROW_COUNT):
    """Generate filler rows; only the amounts depend on ``rng``."""
    rows = []
    for i in range(1, count + 1):
        day = (i % 28) + 1
        month = 1 if i <= 20 else 2
        t_type = "expense" if i % 3 == 0 else "income"
        if t_type == "income":
            description, category = f"Infaq Harian {i}", "Infaq Harian"
        else:
            description, category = f"Biaya Operasional {i}", "Operasional"
        rows.append({
            "date": f"2024-{month:02d}-{day:02d}",
            "description": description,
            "category": category,
            "amount": rng.randint(MIN_SYNTHETIC_AMOUNT, MAX_SYNTHETIC_AMOUNT),
            "type": t_type,
        })
    return rows


def seed_rows(rng):
    rows = [
        dict(date=d, description=desc, category=cat, amount=amount, type=t_type)
        for d, desc, cat, amount, t_type in HISTORICAL_ROWS
    ]
    return rows + synthetic_rows(rng)


def seed_if_empty(store, rng=None):
    """Bootstrap an empty ledger. Returns the number of inserted rows."""
    if store.count() != 0:
        return 0
    inserted = store.bulk_insert(seed_rows(rng or random.Random()))
    logger.info("seeded empty ledger with %d transactions", inserted)
    return inserted


def main(config_object=None):
    from app import create_app
    from config import Config

    # factory seeding off; the insert below reports the real count
    config_object = type("SeedScriptConfig", (config_object or Config,), {"SEED_ON_STARTUP": False})
    app = create_app(config_object)
    store = app.extensions["transaction_store"]
    with app.app_context():
        return seed_if_empty(store, random.Random(app.config["SEED_RANDOM_SEED"]))


if __name__ == "__main__":
    print(f"Inserted {main()} transactions")
