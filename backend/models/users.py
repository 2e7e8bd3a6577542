# backend/models/user.py
from sqlalchemy import Column, Integer, String, DateTime
from database import Base

# Back-office account allowed to manage the store
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="admin")
    last_login = Column(DateTime(timezone=True), nullable=True)
