from datetime import datetime, timezone


def now_trimmed() -> datetime:
    """Retorna datetime atual em UTC (sem tzinfo), sem microsegundos"""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
