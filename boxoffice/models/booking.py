from sqlalchemy import Column, String, DateTime, func, DECIMAL, Integer, ForeignKey
from sqlalchemy.orm import relationship
from boxoffice.db.session import Base

class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.person_id"), nullable=False, index=True)
    seance_id = Column(Integer, ForeignKey("seances.id"), nullable=False, index=True)
    reservation_date = Column(DateTime, server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="reservations")
    seance = relationship("Seance", back_populates="reservations")
    tickets = relationship("Ticket", back_populates="reservation")

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id"), nullable=False, index=True)
    # No (seat, seance) uniqueness here: seance lives on the reservation
    seat_id = Column(Integer, ForeignKey("seats.id"), nullable=False)
    final_price = Column(DECIMAL(10, 2), nullable=False)
    ticket_token = Column(String(64), nullable=False)

    reservation = relationship("Reservation", back_populates="tickets")
    seat = relationship("Seat")
