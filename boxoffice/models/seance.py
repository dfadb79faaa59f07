from sqlalchemy import Column, DateTime, DECIMAL, Integer, ForeignKey
from sqlalchemy.orm import relationship
from boxoffice.db.session import Base

class Seance(Base):
    __tablename__ = "seances"

    id = Column(Integer, primary_key=True)
    spectacle_id = Column(Integer, ForeignKey("spectacles.id"), nullable=False, index=True)
    hall_id = Column(Integer, ForeignKey("halls.id"), nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    base_price = Column(DECIMAL(10, 2), nullable=False)

    spectacle = relationship("Spectacle", back_populates="seances")
    hall = relationship("Hall", back_populates="seances")
    reservations = relationship("Reservation", back_populates="seance")
