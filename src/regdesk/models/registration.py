"""SQLModel Registration model"""

from sqlalchemy import Column, Integer, Text
from sqlmodel import Field, SQLModel


class Registration(SQLModel, table=True):
    """Registration model for name/phone form submissions"""

    __tablename__ = "registration"
    __table_args__ = {"sqlite_with_rowid": False}

    id: str = Field(sa_column=Column(Text, primary_key=True))
    name: str = Field(sa_column=Column(Text, nullable=False))
    phone: str = Field(sa_column=Column(Text, nullable=False))
    # UNIX timestamp, UTC, second precision
    created_on: int = Field(sa_column=Column(Integer, nullable=False))
