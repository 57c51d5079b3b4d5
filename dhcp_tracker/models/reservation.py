from pydantic import BaseModel, field_validator
from typing import Optional, List
import ipaddress

# Порядок колонок в CSV — менять нельзя, старые файлы дописываются
CSV_COLUMNS: List[str] = [
    "Date",
    "Time",
    "Name",
    "Description",
    "IPAddress",
    "ScopeId",
    "Online",
    "LastOnlineDate",
    "LastOnlineTime",
    "AddressState",
]


class Scope(BaseModel):
    scope_id: str
    name: Optional[str] = None
    state: str = "Inactive"  # Active / Inactive


class ReservationRecord(BaseModel):
    address: str
    scope_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    address_state: Optional[str] = None  # None — lookup не удался
    online: Optional[bool] = None  # None — ещё не определён резолвером
    date: Optional[str] = None
    time: Optional[str] = None
    last_online_date: Optional[str] = None
    last_online_time: Optional[str] = None

    @field_validator("address")
    @classmethod
    def normalize_address(cls, v: str) -> str:
        return str(ipaddress.ip_address(v.strip()))

    def mark_evaluated(self, online: Optional[bool], date: str, time: str) -> None:
        self.online = online
        self.date = date
        self.time = time

    def to_row(self) -> List[str]:
        online = "" if self.online is None else str(self.online)
        values = [
            self.date,
            self.time,
            self.name,
            self.description,
            self.address,
            self.scope_id,
            online,
            self.last_online_date,
            self.last_online_time,
            self.address_state,
        ]
        return ["" if v is None else v for v in values]
