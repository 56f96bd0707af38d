import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from parking_service.app.crud.space_crud import get_space_model
from parking_service.app.models.bookings import Booking
from parking_service.app.schemas.booking_schemas import BookingOut, OrderStatusResult, OrderStatusUpdate, ReserveRequest
from parking_service.app.services.payment_client import PaymentClient
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.enums import BookingStatus, ErrorKind

logger = logging.getLogger(__name__)


def ensure_payment_customer(auth_db: Session, payments: PaymentClient, current_user: UserToken) -> str:
    user = auth_db.query(Users).filter(Users.id == UUID(current_user.user_id)).first()
    if not user:
        return error_response(message="User not found", kind=ErrorKind.UNAUTHORIZED)

    if not user.stripe_customer_id:
        user.stripe_customer_id = payments.create_customer(user.email)
        auth_db.commit()
        logger.info("Created payment customer for user %s", user.id)

    return user.stripe_customer_id


def reserve_space(
        db: Session,
        auth_db: Session,
        payments: PaymentClient,
        current_user: UserToken,
        req: ReserveRequest) -> BookingOut:
    space = get_space_model(db, req.id)

    if not space.is_available or space.available_spaces <= 0:
        return error_response(message="Space is already reserved", kind=ErrorKind.CONFLICT)

    # before the space is touched, so a processor failure leaves it as it was
    ensure_payment_customer(auth_db, payments, current_user)

    # No lock or version check here: two concurrent reservations of the
    # last free bay can both succeed.
    space.booked_spaces = (space.booked_spaces or 0) + 1
    if space.booked_spaces >= space.total_spaces:
        space.is_available = False

    booking = Booking(
        space_id=space.id,
        user_id=UUID(current_user.user_id),
        customer_name=req.customer.name,
        customer_email=req.customer.email,
        customer_phone=req.customer.phone,
        vehicle=req.metadata.vehicle,
        vehicle_type=req.metadata.vehicle_type or "N/A",
        booking_period=req.metadata.booking_period,
        amount=req.amount,
        currency=req.currency,
        description=req.description,
        stripe_product_id=req.stripe_product_id,
        price_id=req.price_id,
        status=BookingStatus.RESERVED.value,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)

    logger.info("Booking %s reserved space %s (%d/%d booked)",
                booking.id, space.id, space.booked_spaces, space.total_spaces)
    return BookingOut.model_validate(booking)


def release_booking(db: Session, current_user: UserToken, booking_id: UUID) -> BookingOut:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()

    if not booking:
        return error_response(message="Booking not found", kind=ErrorKind.NOT_FOUND)

    if str(booking.user_id) != current_user.user_id:
        return error_response(message="Booking belongs to another user", kind=ErrorKind.FORBIDDEN)

    if booking.status == BookingStatus.RELEASED.value:
        return error_response(message="Booking already released", kind=ErrorKind.CONFLICT)

    space = booking.space
    # only a space that was closed for being full reopens; a host switch-off stays
    was_full = (space.booked_spaces or 0) >= space.total_spaces
    space.booked_spaces = max((space.booked_spaces or 0) - 1, 0)
    if was_full and space.available_spaces > 0:
        space.is_available = True

    booking.status = BookingStatus.RELEASED.value
    db.commit()
    db.refresh(booking)

    logger.info("Booking %s released space %s", booking.id, space.id)
    return BookingOut.model_validate(booking)


def list_user_bookings(db: Session, current_user: UserToken) -> List[BookingOut]:
    rows = (
        db.query(Booking)
        .filter(Booking.user_id == UUID(current_user.user_id))
        .order_by(Booking.created_at.desc())
        .all()
    )
    return [BookingOut.model_validate(row) for row in rows]


def update_order_status(req: OrderStatusUpdate) -> OrderStatusResult:
    # Order state lives with the payment provider; only the transition is recorded
    logger.info("Order status update: order=%s payment_intent=%s status=%s",
                req.orderId, req.paymentIntentId, req.status)
    return OrderStatusResult(
        success=True,
        message="Order status updated successfully",
        orderId=req.orderId,
        status=req.status,
    )
