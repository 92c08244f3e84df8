"""User payloads."""

from tremu.schemas.common import CamelModel


class UserSummary(CamelModel):
    id: int
    email: str
    name: str
