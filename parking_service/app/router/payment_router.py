from fastapi import APIRouter, Depends

from ..core.dependencies import get_payment_client
from ..schemas.payment_schemas import PaymentIntentRequest, PaymentIntentResponse
from ..services.payment_client import PaymentClient

router = APIRouter(tags=["payments"])


@router.post("/api/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
        req: PaymentIntentRequest,
        payments: PaymentClient = Depends(get_payment_client)):
    client_secret = payments.create_payment_intent(
        order_id=req.orderId,
        amount=req.amount,
        currency=req.currency,
        customer_email=req.customerEmail,
    )
    return PaymentIntentResponse(client_secret=client_secret)
