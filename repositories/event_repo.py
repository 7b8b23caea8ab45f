"""
repositories/event_repo.py
--------------------------
Data access layer for events and the services offered at them.
"""

from models.event import Event, Service
from models.filters import EventFilters, ServiceFilters
from query.builder import QueryBuilder
from repositories.base import Repository


class EventRepository(Repository[Event]):
    """Repository for CRUD operations on the events table, ordered by start date."""

    entity_name = "event"
    table = "events"
    filters_type = EventFilters
    sort_key = "e.startdate"
    columns = ("id", "name", "startdate", "enddate", "lastupdatedate", "lastupdatebyid")

    def _select_template(self) -> str:
        return f"""
            SELECT
                e.id,
                e.name,
                e.startdate,
                e.enddate,
                e.lastupdatedate,
                e.lastupdatebyid,
                {self.audit.display("lastupdateby")}
            FROM events e
            {self.audit.join("e", "lastupdatebyid")}
            /**where**/
        """

    def _apply_filters(self, builder: QueryBuilder, f: EventFilters) -> None:
        (
            builder
            .equals("e.id", f.id)
            .equals("e.name", f.name)
            .between("e.startdate", f.start_date_start, f.start_date_end)
            .equals("e.lastupdatebyid", f.last_update_by_id)
        )

    def _to_params(self, event: Event) -> dict:
        return {
            "id": event.id,
            "name": event.name,
            "startdate": event.start_date,
            "enddate": event.end_date,
            "lastupdatedate": event.last_update_date,
            "lastupdatebyid": event.last_update_by_id,
        }

    def _row_to_entity(self, row: dict) -> Event:
        return Event(
            id=row["id"],
            name=row["name"],
            start_date=row["startdate"],
            end_date=row["enddate"],
            last_update_date=row["lastupdatedate"],
            last_update_by_id=row["lastupdatebyid"],
            last_update_by=self.audit.resolve(row.get("lastupdateby")),
        )


class ServiceRepository(Repository[Service]):
    """Repository for CRUD operations on the services table, ordered by name."""

    entity_name = "service"
    table = "services"
    filters_type = ServiceFilters
    sort_key = "s.name"
    columns = ("id", "name", "description", "lastupdatedate", "lastupdatebyid")

    def _select_template(self) -> str:
        return f"""
            SELECT
                s.id,
                s.name,
                s.description,
                s.lastupdatedate,
                s.lastupdatebyid,
                {self.audit.display("lastupdateby")}
            FROM services s
            {self.audit.join("s", "lastupdatebyid")}
            /**where**/
        """

    def _apply_filters(self, builder: QueryBuilder, f: ServiceFilters) -> None:
        (
            builder
            .equals("s.id", f.id)
            .equals("s.name", f.name)
            .equals("s.lastupdatebyid", f.last_update_by_id)
        )

    def _to_params(self, service: Service) -> dict:
        return {
            "id": service.id,
            "name": service.name,
            "description": service.description,
            "lastupdatedate": service.last_update_date,
            "lastupdatebyid": service.last_update_by_id,
        }

    def _row_to_entity(self, row: dict) -> Service:
        return Service(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            last_update_date=row["lastupdatedate"],
            last_update_by_id=row["lastupdatebyid"],
            last_update_by=self.audit.resolve(row.get("lastupdateby")),
        )
