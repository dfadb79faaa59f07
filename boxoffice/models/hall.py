from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from boxoffice.db.session import Base

class Hall(Base):
    __tablename__ = "halls"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    # Relationships
    seats = relationship("Seat", back_populates="hall")
    seances = relationship("Seance", back_populates="hall")

class Seat(Base):
    __tablename__ = "seats"

    id = Column(Integer, primary_key=True)
    hall_id = Column(Integer, ForeignKey("halls.id"), nullable=False, index=True)
    grid_x = Column(Integer, nullable=False)
    grid_y = Column(Integer, nullable=False)

    hall = relationship("Hall", back_populates="seats")
