from sqlalchemy import Column, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    college_name = Column(Text, nullable=False)
    tenth_percentage = Column(Float, nullable=False)
    degree_percentage = Column(Float, nullable=False)
    selected_language = Column(Text, nullable=False)
    communication = Column(Integer, nullable=False)
    resume_filename = Column(Text, nullable=False)
    resume_path = Column(Text, nullable=False)
    resume_hash = Column(Text, nullable=False)
    resume_size_bytes = Column(Integer, nullable=False)
    resume_mime_type = Column(Text)
    submitted_at = Column(Text, nullable=False)

    job = relationship("Job", back_populates="applications")
