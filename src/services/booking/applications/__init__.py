from .booking_transitions import BookingTransitions as BookingTransitions
from .cancel_booking import CancelBookingService as CancelBookingService
from .create_booking import CreateBookingService as CreateBookingService
from .delete_booking import DeleteBookingService as DeleteBookingService
from .query_bookings import BookingQueryService as BookingQueryService
from .update_booking import UpdateBookingService as UpdateBookingService
