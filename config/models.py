"""
SQLAlchemy ORM Models
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)  # stored lower-cased
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def to_public_dict(self):
        return {'id': self.id, 'name': self.name, 'email': self.email}
