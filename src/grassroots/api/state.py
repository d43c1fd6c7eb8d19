from __future__ import annotations

from dataclasses import dataclass, field

from ..services import AuthService, CalendarService, ProfileService, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    calendar: CalendarService = field(init=False)
    auth: AuthService = field(init=False)
    profiles: ProfileService = field(init=False)

    def __post_init__(self) -> None:
        self.calendar = CalendarService(self.context)
        self.auth = AuthService(self.context, self.calendar)
        self.profiles = ProfileService(self.context)


api_state = ApiState()
