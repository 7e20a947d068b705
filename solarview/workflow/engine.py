"""
Workflow Engine.
The single authority for moving an installation between statuses and recording the consequence
on its timeline. Stateless: every operation returns new records and leaves its inputs untouched;
persisting the result is the caller's job.
"""
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from solarview.catalog.schemas import StatusConfig
from solarview.core.config import settings
from solarview.core.exceptions import InvalidInputError, NotFoundError
from solarview.core.logger import logger
from solarview.core.utils import BRASILIA_TZ, ensure_aware, format_brasilia_time, from_brasilia, utc_now
from solarview.installations.schemas import (
    AttachedDocument,
    Attachment,
    Event,
    EventType,
    Installation,
)
from solarview.workflow.tracks import Track, get_track_handler

SCHEDULED_STATUS = "Agendado"
APPROVED_PROJECT_STATUS = "Aprovado"

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def parse_time_of_day(value: Optional[str]) -> Tuple[int, int]:
    """HH:mm -> (hours, minutes). Missing time means midnight."""
    if not value:
        return 0, 0
    if not TIME_PATTERN.match(value):
        raise InvalidInputError("Invalid time format. Use HH:mm")
    hours, minutes = value.split(":")
    return int(hours), int(minutes)


def sort_events(events: Iterable[Event]) -> List[Event]:
    """Newest first. Stable, so events sharing a timestamp keep their relative order."""
    return sorted(events, key=lambda e: e.date, reverse=True)


def append_events(events: Sequence[Event], new_events: Sequence[Event]) -> List[Event]:
    """
    Appends and restores the total order.
    New events are placed ahead of existing ones before the stable sort, so on a timestamp
    tie the later-appended event is shown first.
    """
    return sort_events([*reversed(new_events), *events])


class WorkflowEngine:
    """
    Status workflow for installations.
    Tracks: status, projectStatus, homologationStatus, reportSubmitted.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        auto_schedule_days: int = 7
    ):
        self.clock = clock
        self.auto_schedule_days = auto_schedule_days

    def now(self) -> datetime:
        return ensure_aware(self.clock())

    def make_event(
        self,
        event_type: str,
        description: str,
        suffix: str = "",
        when: Optional[datetime] = None,
        attachments: Sequence[Attachment] = ()
    ) -> Event:
        """Builds a timeline event; the id is a timestamp token independent of the event date."""
        now = self.now()
        return Event(
            id=now.isoformat() + suffix,
            date=when or now,
            type=event_type,
            description=description,
            attachments=list(attachments),
        )

    def _apply(self, installation: Installation, new_events: Sequence[Event] = (), **changes) -> Installation:
        if new_events:
            changes["events"] = append_events(installation.events, new_events)
        return installation.model_copy(update=changes, deep=True)

    def transition(
        self,
        installation: Installation,
        track: Track,
        new_value: str,
        catalog: Optional[StatusConfig] = None
    ) -> Installation:
        """
        Moves one status track to a new value.

        Returns the installation unchanged when the value is already current. Otherwise sets the
        field, auto-schedules the visit when the installation enters "Agendado" without a date,
        and records a "Nota" event describing the change.
        Values missing from the catalog are accepted and only logged.
        """
        handler = get_track_handler(track)
        value = handler.parse(new_value)
        old_value = handler.current(installation)

        if value == old_value:
            logger.info(f"Transition ignored (no change): id={installation.id}, track={handler.track.value}")
            return installation

        if catalog is not None and handler.category is not None and value not in handler.columns(catalog):
            logger.warning(
                f'Status "{value}" is not in the {handler.category.value} catalog: id={installation.id}'
            )

        changes = {handler.field: value}
        new_events: List[Event] = []

        if handler.track is Track.STATUS and value == SCHEDULED_STATUS and not installation.scheduled_date:
            scheduled_date = self.now() + timedelta(days=self.auto_schedule_days)
            changes["scheduled_date"] = scheduled_date
            new_events.append(self.make_event(
                EventType.SCHEDULING.value,
                f"Instalação agendada para {format_brasilia_time(scheduled_date)}.",
                suffix="_schedule"
            ))

        new_events.append(self.make_event(
            EventType.NOTE.value,
            f'{handler.label} alterado de "{handler.format(old_value)}" para "{handler.format(value)}".'
        ))

        logger.info(
            f"Transition: id={installation.id}, track={handler.track.value}, "
            f"{handler.format(old_value)} -> {handler.format(value)}"
        )
        return self._apply(installation, new_events, **changes)

    def schedule_installation(
        self,
        installation: Installation,
        day: date,
        time_of_day: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Installation:
        """
        Books the installation visit. Always forces status "Agendado", even when already scheduled.
        Date and time are interpreted in Brasília time.
        """
        if installation.project_status != APPROVED_PROJECT_STATUS:
            raise InvalidInputError("Project must be approved before scheduling the installation")

        hours, minutes = parse_time_of_day(time_of_day)
        scheduled_date = datetime.combine(day, time(hours, minutes), tzinfo=BRASILIA_TZ).astimezone(timezone.utc)

        description = f"Instalação agendada para {format_brasilia_time(scheduled_date)}."
        if notes:
            description += f"\n\nObservações: {notes}"

        logger.info(f"Installation scheduled: id={installation.id}, date={scheduled_date.isoformat()}")
        return self._apply(
            installation,
            [self.make_event(EventType.SCHEDULING.value, description)],
            scheduled_date=scheduled_date,
            status=SCHEDULED_STATUS,
        )

    def record_manual_event(
        self,
        installation: Installation,
        event_type: str,
        description: str,
        when: datetime,
        attachments: Sequence[Attachment] = ()
    ) -> Installation:
        """
        Appends an event typed in by an administrator. Future dates are rejected.
        A date without offset is Brasília time, like the schedule form.
        """
        if not event_type or not event_type.strip():
            raise InvalidInputError("Event type is required")
        if not description or not description.strip():
            raise InvalidInputError("Event description is required")

        when = from_brasilia(when)
        if when > self.now():
            raise InvalidInputError("Event date cannot be in the future")

        event = self.make_event(event_type, description, when=when, attachments=attachments)
        return self._apply(installation, [event])

    def update_protocol_number(self, installation: Installation, new_protocol: Optional[str]) -> Installation:
        """Sets the utility protocol number. Opening a protocol also stamps protocolDate."""
        old_protocol = installation.protocol_number or ""
        new_protocol = (new_protocol or "").strip()

        if new_protocol == old_protocol:
            return installation

        if new_protocol:
            changes = {
                "protocol_number": new_protocol,
                "protocol_date": installation.protocol_date or self.now(),
            }
        else:
            changes = {"protocol_number": None, "protocol_date": None}

        event = self.make_event(
            EventType.PROTOCOL.value,
            f'Número de protocolo alterado de "{old_protocol or "N/A"}" para "{new_protocol or "N/A"}".'
        )
        logger.info(f"Protocol updated: id={installation.id}, {old_protocol or 'N/A'} -> {new_protocol or 'N/A'}")
        return self._apply(installation, [event], **changes)

    def transfer_equipment(
        self,
        source: Installation,
        destination: Installation,
        inverter_id: str
    ) -> Tuple[Installation, Installation]:
        """Moves an inverter between installations, noting the transfer on both timelines."""
        if source.id == destination.id:
            raise InvalidInputError("Source and destination installations must differ")

        inverter = next((inv for inv in source.inverters if inv.id == inverter_id), None)
        if inverter is None:
            raise NotFoundError(f"Inverter {inverter_id} not found on installation {source.installation_id}")

        label = f"Inversor {inverter.brand} {inverter.model} (S/N: {inverter.serial_number})"
        updated_source = self._apply(
            source,
            [self.make_event(
                EventType.NOTE.value,
                f"{label} transferido para a instalação de {destination.client_name}.",
                suffix="_transfer_out"
            )],
            inverters=[inv for inv in source.inverters if inv.id != inverter_id],
        )
        updated_destination = self._apply(
            destination,
            [self.make_event(
                EventType.NOTE.value,
                f"{label} recebido da instalação de {source.client_name}.",
                suffix="_transfer_in"
            )],
            inverters=[*destination.inverters, inverter],
        )

        logger.info(f"Inverter {inverter_id} transferred: {source.id} -> {destination.id}")
        return updated_source, updated_destination

    def toggle_archive(self, installation: Installation) -> Installation:
        """Archiving is silent: no timeline event."""
        return self._apply(installation, archived=not installation.archived)

    def attach_document(
        self,
        installation: Installation,
        name: str,
        data_url: str,
        mime_type: str
    ) -> Installation:
        document = AttachedDocument(name=name, data_url=data_url, type=mime_type, date=self.now())
        return self._apply(installation, documents=[*installation.documents, document])


# Singleton engine instance
workflow_engine = WorkflowEngine(auto_schedule_days=settings.AUTO_SCHEDULE_DAYS)


def get_workflow_engine() -> WorkflowEngine:
    return workflow_engine
