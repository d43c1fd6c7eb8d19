from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List

from fastapi import Depends, FastAPI, Path, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hypercorn.asyncio import serve
from hypercorn.config import Config

from ...api import ApiState, api_state
from ...api.models import (
    CalendarDayPayload,
    CredentialsRequest,
    EventPayload,
    MonthPayload,
    NewEventRequest,
    ProfilePayload,
    ProfileUpdateRequest,
    SelectDayRequest,
    SignUpResponse,
    UserPayload,
)
from ...data import SupabaseNotInitializedError, SupabaseSessionMissingError
from ...domain import (
    AuthenticationError,
    MalformedTimestamp,
    MonthView,
    NewEvent,
    PersistenceError,
    SubmissionInProgress,
    ValidationError,
)
from ..calendar import CalendarService

logger = logging.getLogger(__name__)

app = FastAPI(title="Grassroots Calendar API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_state() -> ApiState:
    return api_state


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(SubmissionInProgress)
async def _submission_in_progress(_: Request, exc: SubmissionInProgress) -> JSONResponse:
    return _error(409, str(exc))


@app.exception_handler(ValidationError)
async def _validation_error(_: Request, exc: ValidationError) -> JSONResponse:
    return _error(422, str(exc))


@app.exception_handler(AuthenticationError)
async def _authentication_error(_: Request, exc: AuthenticationError) -> JSONResponse:
    return _error(401, str(exc))


@app.exception_handler(SupabaseSessionMissingError)
async def _session_missing(_: Request, exc: SupabaseSessionMissingError) -> JSONResponse:
    return _error(401, str(exc))


@app.exception_handler(PersistenceError)
async def _persistence_error(_: Request, exc: PersistenceError) -> JSONResponse:
    return _error(502, str(exc))


@app.exception_handler(MalformedTimestamp)
async def _malformed_timestamp(_: Request, exc: MalformedTimestamp) -> JSONResponse:
    logger.error("Stored event data is corrupt: %s", exc)
    return _error(500, str(exc))


@app.exception_handler(SupabaseNotInitializedError)
async def _not_configured(_: Request, exc: SupabaseNotInitializedError) -> JSONResponse:
    logger.error("Supabase is not configured: %s", exc)
    return _error(503, str(exc))


def _month_payload(state: ApiState, view: MonthView) -> MonthPayload:
    return MonthPayload.from_domain(view, limit=state.context.settings.ui.max_visible_events)


# ------------------------------------------------------------------ auth


@app.post("/auth/sign-in", response_model=UserPayload)
def sign_in(request: CredentialsRequest, state: ApiState = Depends(get_state)) -> UserPayload:
    return UserPayload(**state.auth.sign_in(request.email, request.password))


@app.post("/auth/sign-up", response_model=SignUpResponse)
def sign_up(request: CredentialsRequest, state: ApiState = Depends(get_state)) -> SignUpResponse:
    user = state.auth.sign_up(request.email, request.password)
    if user is None:
        return SignUpResponse(user=None, confirmation_required=True)
    return SignUpResponse(user=UserPayload(**user), confirmation_required=False)


@app.post("/auth/sign-out", status_code=204)
def sign_out(state: ApiState = Depends(get_state)) -> Response:
    state.auth.sign_out()
    return Response(status_code=204)


@app.get("/auth/user", response_model=UserPayload)
def current_user(state: ApiState = Depends(get_state)) -> UserPayload:
    return UserPayload(**state.auth.current_user())


# ------------------------------------------------------------------ events


@app.get("/events", response_model=List[CalendarDayPayload])
def list_events(state: ApiState = Depends(get_state)) -> List[CalendarDayPayload]:
    state.context.gateway.session()
    return [CalendarDayPayload.from_domain(calendar_day) for calendar_day in state.calendar.days]


@app.post("/events/reload", response_model=List[CalendarDayPayload])
def reload_events(state: ApiState = Depends(get_state)) -> List[CalendarDayPayload]:
    return [CalendarDayPayload.from_domain(calendar_day) for calendar_day in state.calendar.reload()]


@app.post("/events", response_model=EventPayload, status_code=201)
def add_event(request: NewEventRequest, state: ApiState = Depends(get_state)) -> EventPayload:
    if request.datetime:
        new_event = NewEvent(name=request.name, time=request.time or request.duration.label, datetime=request.datetime)
    elif request.day is not None:
        new_event = CalendarService.compose_event(request.day, request.name, request.duration)
    else:
        raise ValidationError("Either day or datetime is required.")
    saved = state.calendar.add_event(new_event)
    return EventPayload.from_domain(saved)


@app.delete("/events/{event_id}", status_code=204)
def delete_event(event_id: str, state: ApiState = Depends(get_state)) -> Response:
    state.calendar.delete_event(event_id)
    return Response(status_code=204)


# ------------------------------------------------------------------ calendar


@app.get("/calendar", response_model=MonthPayload)
def current_month(state: ApiState = Depends(get_state)) -> MonthPayload:
    return _month_payload(state, state.calendar.month_view())


@app.get("/calendar/{year}/{month}", response_model=MonthPayload)
def month_by_number(
    year: int = Path(ge=2, le=9998),
    month: int = Path(ge=1, le=12),
    state: ApiState = Depends(get_state),
) -> MonthPayload:
    return _month_payload(state, state.calendar.month_view(date(year, month, 1)))


@app.post("/calendar/next", response_model=MonthPayload)
def next_month(state: ApiState = Depends(get_state)) -> MonthPayload:
    state.calendar.show_next_month()
    return _month_payload(state, state.calendar.month_view())


@app.post("/calendar/previous", response_model=MonthPayload)
def previous_month(state: ApiState = Depends(get_state)) -> MonthPayload:
    state.calendar.show_previous_month()
    return _month_payload(state, state.calendar.month_view())


@app.post("/calendar/today", response_model=MonthPayload)
def today(state: ApiState = Depends(get_state)) -> MonthPayload:
    state.calendar.show_today()
    return _month_payload(state, state.calendar.month_view())


@app.post("/calendar/select", response_model=MonthPayload)
def select_day(request: SelectDayRequest, state: ApiState = Depends(get_state)) -> MonthPayload:
    state.calendar.select_day(request.day)
    return _month_payload(state, state.calendar.month_view())


# ------------------------------------------------------------------ profile


@app.get("/profile", response_model=ProfilePayload)
def get_profile(state: ApiState = Depends(get_state)) -> ProfilePayload:
    return ProfilePayload.from_domain(state.profiles.load())


@app.put("/profile", response_model=ProfilePayload)
def update_profile(request: ProfileUpdateRequest, state: ApiState = Depends(get_state)) -> ProfilePayload:
    profile = state.profiles.update(first_name=request.first_name, username=request.username, color=request.color)
    return ProfilePayload.from_domain(profile)


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Grassroots Calendar API on %s:%s", host, port)
    asyncio.run(serve(app, config))
