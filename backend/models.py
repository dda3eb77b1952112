from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, Index, text
from utils.clock import utcnow
import uuid
from database import Base


def generate_uuid():
    return str(uuid.uuid4())


ACTIVE_LOAN_PREDICATE = text("status = 'Active'")


class Book(Base):
    """
    A catalog entry.

    Availability values: Available, Borrowed, Reserved, Maintenance.
    Rows referenced by a loan cannot be deleted (RESTRICT on loans.book_id).
    """
    __tablename__ = 'books'

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String(200), nullable=False)
    author = Column(String(100), nullable=False)
    isbn = Column(String(13), nullable=False)  # Stored without hyphens/spaces
    page_count = Column(Integer, nullable=False)
    category = Column(String(50), nullable=False)
    availability = Column(String(20), nullable=False, default='Available')
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("title != ''"),
        CheckConstraint("page_count BETWEEN 1 AND 10000", name='ck_books_page_count'),
        CheckConstraint(
            "availability IN ('Available', 'Borrowed', 'Reserved', 'Maintenance')",
            name='ck_books_availability'
        ),
        UniqueConstraint('isbn', name='uq_books_isbn'),
        Index('idx_books_category', 'category'),
        Index('idx_books_availability', 'availability'),
        Index('idx_books_title', 'title'),
    )

    __mapper_args__ = {"version_id_col": version}


class Borrower(Base):
    """
    A library member. Emails are stored lower-cased, so the unique
    constraint is effectively case-insensitive.
    """
    __tablename__ = 'borrowers'

    id = Column(String, primary_key=True, default=generate_uuid)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False, default='')
    email = Column(String(255), nullable=False)
    phone = Column(String(15), nullable=True)  # Digits only
    registration_date = Column(DateTime, nullable=False, default=utcnow)
    member_status = Column(String(20), nullable=False, default='Active')
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("first_name != ''"),
        CheckConstraint(
            "member_status IN ('Active', 'Inactive', 'Suspended')",
            name='ck_borrowers_member_status'
        ),
        UniqueConstraint('email', name='uq_borrowers_email'),
        Index('idx_borrowers_name', 'last_name', 'first_name'),
        Index('idx_borrowers_status', 'member_status'),
    )

    __mapper_args__ = {"version_id_col": version}


class Loan(Base):
    """
    A borrowing transaction.

    Status values: Active, Returned, Overdue. The partial unique index
    uq_loans_active_book allows at most one Active loan per book.
    """
    __tablename__ = 'loans'

    id = Column(String, primary_key=True, default=generate_uuid)
    book_id = Column(String, ForeignKey('books.id', ondelete='RESTRICT'), nullable=False)
    borrower_id = Column(String, ForeignKey('borrowers.id', ondelete='RESTRICT'), nullable=False)
    borrow_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime, nullable=False)
    return_date = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default='Active')
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Returned', 'Overdue')", name='ck_loans_status'),
        CheckConstraint("due_date > borrow_date", name='ck_loans_due_after_borrow'),
        Index(
            'uq_loans_active_book', 'book_id',
            unique=True,
            sqlite_where=ACTIVE_LOAN_PREDICATE,
            postgresql_where=ACTIVE_LOAN_PREDICATE,
        ),
        Index('idx_loans_borrower_status', 'borrower_id', 'status'),
        Index('idx_loans_status_due', 'status', 'due_date'),
        Index('idx_loans_borrow_date', 'borrow_date'),
        Index('idx_loans_book', 'book_id'),
    )

    __mapper_args__ = {"version_id_col": version}
