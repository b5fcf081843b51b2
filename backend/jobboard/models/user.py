from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    photo = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    jobs = relationship("Job", back_populates="owner")
