# Import every model so Base.metadata is complete for create_all / Alembic.
from travelmart.models.user import User  # noqa: F401
from travelmart.models.service import Service  # noqa: F401
from travelmart.models.tour import Tour  # noqa: F401
from travelmart.models.vehicle import Vehicle  # noqa: F401
from travelmart.models.restaurant import Restaurant  # noqa: F401
from travelmart.models.service_reservation import ServiceReservation  # noqa: F401
from travelmart.models.tour_reservation import TourReservation  # noqa: F401
from travelmart.models.vehicle_reservation import VehicleReservation  # noqa: F401
from travelmart.models.restaurant_reservation import RestaurantReservation  # noqa: F401
from travelmart.models.notification import Notification  # noqa: F401
from travelmart.models.audit_log import AuditLog  # noqa: F401
from travelmart.models.provider_request import ProviderRequest  # noqa: F401
