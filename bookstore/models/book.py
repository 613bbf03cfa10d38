from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Numeric, Integer, Date, CheckConstraint, Text, String, JSON, Constraint
import datetime
from bookstore.models.base import Base, TimestampMixin, new_id

# Column limits: 32-bit INTEGER stock, NUMERIC(12, 2) price
MAX_STOCK = 2**31 - 1
MAX_PRICE = 9_999_999_999.99

#Book
class Book(TimestampMixin, Base):
    __tablename__: str = "books"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # Author ids by reference only; checked by the service layer on write
    author_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    isbn: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    genre: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    __table_args__: tuple[Constraint, ...] = (
            CheckConstraint("price >= 0", name="books_price_nonneg"),
            CheckConstraint("stock >= 0", name="books_stock_nonneg"),
    )
