# Import all models to ensure they are registered with SQLAlchemy
from .spaces import Space
from .bookings import Booking
from .reviews import Review
from .messages import ChatMessage
