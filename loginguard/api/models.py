"""Request and response models for the login API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from loginguard.login.state import LoginState


class LoginStateResponse(BaseModel):
    """Login state snapshot, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_name: str
    password: str
    remember_me: bool
    is_loading: bool
    error_message: str | None = None
    is_locked_out: bool
    lockout_seconds_remaining: int
    navigate_to_home: bool
    is_login_button_enabled: bool
    phase: str

    @classmethod
    def from_state(cls, state: LoginState) -> "LoginStateResponse":
        return cls.model_validate(state.to_dict())


class TextFieldUpdate(BaseModel):
    value: str


class FlagUpdate(BaseModel):
    value: bool
