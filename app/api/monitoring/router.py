"""
Router de monitoramento (métricas Prometheus).
"""
from fastapi import APIRouter
from fastapi.responses import Response

from app.utils.prometheus_metrics import get_metrics, CONTENT_TYPE_LATEST

router_public = APIRouter(
    prefix="/api/monitoring",
    tags=["Monitoring - Monitoramento"]
)


@router_public.get("/metrics")
def metrics():
    """
    Endpoint de métricas Prometheus (público).
    Acesse em: /api/monitoring/metrics
    """
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)
