from boxoffice.schemas.common import ErrorResponse, ActionResult
from boxoffice.schemas.user import CurrentUser
from boxoffice.schemas.spectacle import (
    Genre, Spectacle, SpectacleWithGenre, CastMember, ActorOption,
    SpectacleNewForm, SpectacleEditForm, CastAssign, CastRemove, IndexPage, SpectaclePage,
)
from boxoffice.schemas.seance import (
    SeanceCreate, SeanceUpdate, Seance, SeanceListItem, SeanceWithHall,
    SeanceEdit, SeanceNewForm, SeanceEditForm, HallOption, SpectacleOption,
    PriceUpdate,
)
from boxoffice.schemas.actor import (
    ActorCreate, ActorUpdate, ActorListItem, ActorDetail, CastedActor,
)
from boxoffice.schemas.booking import (
    BookingCreate, BookingResult, BookingPage, BookingSeance, Seat,
    ReviewCreate, Review,
)
from boxoffice.schemas.stats import StatsResponse
from boxoffice.schemas.dashboard import DashboardResponse
from boxoffice.schemas.report import ReportType, ReportRequest, ReportCatalog
