from sqlalchemy import Text, String, Date, JSON
from sqlalchemy.orm import Mapped, mapped_column
import datetime
from bookstore.models.base import Base, TimestampMixin, new_id

#Author
class Author(TimestampMixin, Base):
    __tablename__: str = "authors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    # Case-folded full_name, set by the repository; unique regardless of case
    full_name_key: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)
    birth_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    nationality: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    social_links: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
