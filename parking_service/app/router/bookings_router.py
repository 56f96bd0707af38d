from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_auth_db, get_parking_db as get_db
from shared.core.schemas import UserToken
from ..core.dependencies import get_payment_client
from ..crud import booking_crud as crud
from ..schemas.booking_schemas import BookingOut, OrderStatusResult, OrderStatusUpdate, ReserveRequest
from ..services.payment_client import PaymentClient

router = APIRouter(tags=["bookings"])


@router.post("/api/post/book/reserve", response_model=BookingOut, status_code=201)
def reserve_space(
        req: ReserveRequest,
        db: Session = Depends(get_db),
        auth_db: Session = Depends(get_auth_db),
        payments: PaymentClient = Depends(get_payment_client),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.reserve_space(db, auth_db, payments, current_user, req)


@router.get("/api/bookings", response_model=List[BookingOut])
def list_my_bookings(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.list_user_bookings(db, current_user)


@router.post("/api/bookings/{booking_id}/release", response_model=BookingOut)
def release_booking(
        booking_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.release_booking(db, current_user, booking_id)


@router.post("/api/update-order-status", response_model=OrderStatusResult)
def update_order_status(req: OrderStatusUpdate):
    return crud.update_order_status(req)
