from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import CheckConstraint, func

db = SQLAlchemy()

TRANSACTION_TYPES = ("income", "expense")
MUTABLE_FIELDS = ("date", "description", "category", "amount", "type")

# Suggested values for the entry form and the donor filter; neither is enforced.
CATEGORIES = [
    "Infaq Jumat",
    "Infaq Harian",
    "Infaq Bulanan",
    "Donasi Khusus",
    "Pemeliharaan",
    "Kegiatan Hari Besar",
    "Lain-lain",
]

DONORS = [
    "Abjiatul Astiani, SE",
    "Ali Patau, SE",
    "Dandi Septian, S.Pd.",
    "Diana Rita, S. Pd",
    "Didi Rosady, S.Pd",
    "Disa Septiani Robiah, S.Pd.",
    "Dr. Marwan Toni, S.Hut, M.Pd",
    "Duwi Andriyani, S.Pd",
    "Eko Randy Yusuf, S.Pd.",
    "Eli Septiana, S.Pd.",
    "Elisia Rosalinda Manullang, S.Pd",
    "Frida Norjayanti, S. Pd",
    "Hariati, S.Pd.I",
    "Hayrul Syam, S.Pd.",
    "Isroiyah, S.Pd.I",
    "Jumratul Akbah, S.Pd.",
    "Kartini, SE",
    "Laila Sari, S.Pd.",
    "Lisa Carolina, S.Pd.",
    "Maria Floriyanti Nogo Weluk, S.Ag.",
    "Mariasa, S.Pd.I",
    "Marten, S.Pd",
    "Muhamad Fahmi Bisma, S.Pd.",
    "Muhammad Syahrul Sani, S.Pd.",
    "Muhlis, S.Pd.I., M.Pd.",
    "Noor Hasinah Khalid, S.Pd.",
    "Noor Hidayat, S.Pd",
    "Norhasanah, SE",
    "Ramlah, S.Pd.",
    "Robi Ardiah Murti Murhanuddin, S.Pd.",
    "Rudianto",
    "Siti Asaniyati, S.Pd.",
    "Siti Nurwana, S.Pd.",
    "Suharta Nurul Mulhikmah, S.Pd.I",
    "Tresna Yulianti, S.Sos.",
    "Yuli Sri Hartati, S.Pd.",
    "Hamba Allah",
]


class Transaction(db.Model):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    date = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.Text, nullable=False)
    amount = db.Column(db.Float, nullable=False)
    type = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.current_timestamp())

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "type": self.type,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M:%S") if self.created_at else None,
        }

    def __repr__(self):
        return f"<Transaction {self.id} {self.date} {self.type} {self.amount}>"
