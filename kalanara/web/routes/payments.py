"""
Webhook Midtrans (notification de changement de statut).
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/notification")
async def payment_notification(request: Request):
    """
    Recoit la notification Midtrans.

    Repond 200 meme pour les notifications ignorees, sauf erreur de
    configuration serveur (500).
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Notification Midtrans non JSON")
        payload = None

    container = request.app.state.container
    outcome = await container.order_service().handle_payment_notification(payload)
    return JSONResponse(
        status_code=outcome.http_status,
        content={
            "status": "ok" if outcome.acknowledged else "error",
            "message": outcome.message,
        },
    )
