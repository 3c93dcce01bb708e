from library_ledger.extensions import db
from library_ledger.utils.clock import utcnow

# SQLite and PostgreSQL BIGINT upper bound
MAX_ID = 2**63 - 1

GENRES = ("FICTION", "NON_FICTION", "SCIENCE", "HISTORY", "BIOGRAPHY", "FANTASY")


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("copies >= 0", name="ck_books_copies_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False, index=True)
    genre = db.Column(db.Enum(*GENRES, name="book_genre", native_enum=False), nullable=False, index=True)
    isbn = db.Column(db.String(32), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    copies = db.Column(db.Integer, nullable=False, default=0)
    # derived: copies > 0, see services.inventory_ledger
    available = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
