from library_ledger.extensions import db
from library_ledger.utils.clock import utcnow


class Borrow(db.Model):
    __tablename__ = "borrows"
    __table_args__ = (
        db.CheckConstraint("quantity >= 1", name="ck_borrows_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)

    # Plain reference, not an enforced foreign key: deleting a book leaves its
    # borrow records in place and the summary skips them.
    book_id = db.Column(db.Integer, nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
