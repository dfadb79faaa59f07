from sqlalchemy import Column, String, DateTime, func, Text, DECIMAL, Integer, ForeignKey
from sqlalchemy.orm import relationship
from boxoffice.db.session import Base

class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    spectacles = relationship("Spectacle", back_populates="genre")

class Spectacle(Base):
    __tablename__ = "spectacles"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    poster_url = Column(Text, nullable=True)
    genre_id = Column(Integer, ForeignKey("genres.id"), nullable=True)
    premiere_date = Column(DateTime, nullable=True)

    # Relationships
    genre = relationship("Genre", back_populates="spectacles")
    seances = relationship("Seance", back_populates="spectacle")
    cast = relationship("SpectacleActor", back_populates="spectacle")
    reviews = relationship("Review", back_populates="spectacle")

class Actor(Base):
    __tablename__ = "actors"

    person_id = Column(Integer, ForeignKey("persons.id"), primary_key=True)
    bio = Column(Text, nullable=True)
    base_salary = Column(DECIMAL(10, 2), nullable=True)

    person = relationship("Person", back_populates="actor")
    roles = relationship("SpectacleActor", back_populates="actor")

class SpectacleActor(Base):
    __tablename__ = "spectacle_actors"

    spectacle_id = Column(Integer, ForeignKey("spectacles.id"), primary_key=True)
    actor_id = Column(Integer, ForeignKey("actors.person_id"), primary_key=True)
    role_name = Column(String(255), nullable=True)

    spectacle = relationship("Spectacle", back_populates="cast")
    actor = relationship("Actor", back_populates="roles")

class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.person_id"), nullable=False)
    spectacle_id = Column(Integer, ForeignKey("spectacles.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="reviews")
    spectacle = relationship("Spectacle", back_populates="reviews")
