import enum
from datetime import datetime

from extensions import db
from modules.inventory.models import new_id


class TxType(enum.Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class StockTransaction(db.Model):
    __tablename__ = "ombor_transactions"

    id = db.Column(db.String(32), primary_key=True, default=new_id)

    # Base
    product_id = db.Column(db.String(32), nullable=False, index=True)
    qty = db.Column(db.Integer, nullable=False)        # always a positive magnitude
    tx_type = db.Column(db.Enum(TxType), nullable=False)
    tx_date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Snapshot taken at mutation time, not kept in sync with later renames
    product_name = db.Column(db.String(255), nullable=False)
    user = db.Column(db.String(100), nullable=False, default="System")

    # Monotonic insertion order, breaks ties between equal timestamps
    seq = db.Column(db.Integer, nullable=False, default=0, index=True)

    def __repr__(self) -> str:
        return f"<StockTransaction {self.tx_type.value} {self.product_name} x{self.qty}>"
