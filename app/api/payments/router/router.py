from fastapi import APIRouter

from app.api.payments.router.router_payments import router as router_payments

# Router principal que agrupa os routers de pagamentos
router = APIRouter(
    tags=["API - Payments"]
)

router.include_router(router_payments)
