from sqlalchemy import Column, String, DateTime, func
from database import Base

class User(Base):
    __tablename__ = "users"

    # Identity issued by the external auth provider
    id = Column(String(64), primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
