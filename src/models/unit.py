"""Unit catalog model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class Unit(Base, TimestampMixin):
    """A measurement unit, matched by name, plural or abbreviation."""

    __tablename__ = "units"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)  # "matsked"
    plural = Column(String(100), nullable=False, default="")  # "matskedar"
    abbreviation = Column(String(20), nullable=False, default="")  # "msk"
