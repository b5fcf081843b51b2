from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    owner_id = Column(Text, ForeignKey("users.id"), nullable=False)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    last_date = Column(Text, nullable=False)
    drive_type = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    owner = relationship("User", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
