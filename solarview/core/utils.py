from datetime import datetime, timedelta, timezone

# Brasilia is UTC-3 (DST abolished in 2019)
BRASILIA_TZ = timezone(timedelta(hours=-3))

MONTHS_PT_BR = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Naive datetimes are assumed to be UTC so they can be compared with stored ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def from_brasilia(dt: datetime) -> datetime:
    """Naive datetimes typed in the panel are Brasília wall-clock time. Returns UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=BRASILIA_TZ)
    return dt.astimezone(timezone.utc)


def format_brasilia_time(dt: datetime) -> str:
    """
    Converts a datetime to Brasília time and formats it the way the timeline shows it.
    Format: 05 de março, 2025 às 14:30
    """
    local = ensure_aware(dt).astimezone(BRASILIA_TZ)
    return f"{local.day:02d} de {MONTHS_PT_BR[local.month - 1]}, {local.year} às {local:%H:%M}"


def format_brasilia_date(dt: datetime) -> str:
    """Format: DD/MM/YYYY"""
    return ensure_aware(dt).astimezone(BRASILIA_TZ).strftime("%d/%m/%Y")


def format_brasilia_datetime(dt: datetime) -> str:
    """Format: DD/MM/YYYY às HH:mm"""
    return ensure_aware(dt).astimezone(BRASILIA_TZ).strftime("%d/%m/%Y às %H:%M")
