from datetime import date, datetime
from decimal import Decimal

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    condecimal,
    constr,
    model_validator,
)

from experiencias_api.api.schemas.requests import RequestEventResponse
from experiencias_api.application.dtos.reservation_group_dto import (
    MemberDTO,
    ReservationChangesDTO,
    ReservationDTO,
)
from experiencias_api.domain.entities.reservation_group import (
    Member,
    Reservation,
    ReservationGroup,
)

Money = condecimal(max_digits=12, decimal_places=2, ge=0)


class MemberIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    document: str | None = None
    gender: str | None = None
    phone: str | None = None
    birth_date: date | None = None

    def to_dto(self) -> MemberDTO:
        return MemberDTO(**self.model_dump())


class ReservationIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    experience_id: str
    start_date: AwareDatetime
    end_date: AwareDatetime
    members_count: int = Field(default=1, ge=1)

    def to_dto(self) -> ReservationDTO:
        return ReservationDTO(**self.model_dump())


class CreateReservationGroupRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reservations: list[ReservationIn] = Field(min_length=1)
    members: list[MemberIn] = Field(default_factory=list)
    notes: str | None = None


class RegisterMembersRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    members: list[MemberIn] = Field(min_length=1)


class PaymentProofRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_url: str = Field(min_length=1, max_length=500)
    description: str | None = None


class CancelGroupRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: str | None = None


class UpdateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    experience_id: str | None = None
    start_date: AwareDatetime | None = None
    end_date: AwareDatetime | None = None
    price: Money | None = None

    @model_validator(mode="after")
    def _not_empty(self) -> "UpdateReservationRequest":
        if not self.model_fields_set:
            raise ValueError("at least one field must be given")
        return self

    def to_dto(self) -> ReservationChangesDTO:
        return ReservationChangesDTO(**self.model_dump())


class MemberResponse(BaseModel):
    id: str
    name: str
    document: str | None
    gender: str | None
    phone: str | None
    birth_date: date | None
    active: bool

    @classmethod
    def from_entity(cls, member: Member) -> "MemberResponse":
        return cls(
            id=member.id,
            name=member.name,
            document=member.document,
            gender=member.gender,
            phone=member.phone,
            birth_date=member.birth_date,
            active=member.active,
        )


class ReservationResponse(BaseModel):
    id: str
    reservation_group_id: str
    experience_id: str
    start_date: datetime
    end_date: datetime
    price: Decimal
    members_count: int
    active: bool

    @classmethod
    def from_entity(cls, reservation: Reservation) -> "ReservationResponse":
        return cls(
            id=reservation.id,
            reservation_group_id=reservation.reservation_group_id,
            experience_id=reservation.experience_id,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            price=reservation.price,
            members_count=reservation.members_count,
            active=reservation.active,
        )


class ReservationGroupResponse(BaseModel):
    id: str
    user_id: str
    notes: str | None
    active: bool
    receipt_id: str | None
    status: str | None
    total_price: Decimal
    start_date: datetime | None
    end_date: datetime | None
    reservations: list[ReservationResponse]
    members: list[MemberResponse]
    history: list[RequestEventResponse]

    @classmethod
    def from_entity(cls, group: ReservationGroup) -> "ReservationGroupResponse":
        span = group.date_range
        return cls(
            id=group.id,
            user_id=group.user_id,
            notes=group.notes,
            active=group.active,
            receipt_id=group.receipt_id,
            status=group.status,
            total_price=group.total_price,
            start_date=span.start if span else None,
            end_date=span.end if span else None,
            reservations=[ReservationResponse.from_entity(r) for r in group.reservations],
            members=[MemberResponse.from_entity(m) for m in group.members],
            history=[RequestEventResponse.from_entity(e) for e in group.history],
        )
