from boxoffice.models.person import Person, User, Department, Employee
from boxoffice.models.spectacle import Genre, Spectacle, Actor, SpectacleActor, Review
from boxoffice.models.hall import Hall, Seat
from boxoffice.models.seance import Seance
from boxoffice.models.booking import Reservation, Ticket
