from pydantic import BaseModel, ConfigDict

from studydeck.core.enums import Theme


class PreferencesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    theme: Theme


class PreferencesUpdate(BaseModel):
    theme: Theme
