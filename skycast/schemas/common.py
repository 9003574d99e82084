from pydantic import BaseModel, ConfigDict, Field

from skycast.definitions.data_sources import DEFAULT_DESCRIPTION, DEFAULT_ICON


class FrozenModel(BaseModel):
    """
    Base for documents handed to clients.

    Instances are immutable, serialize with camelCase aliases and accept
    either the alias or the attribute name on input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class WeatherSummary(FrozenModel):
    """
    Short textual summary shared by current conditions and forecast days.

    Attributes:
        description: Localized condition text (e.g. 'hujan ringan')
        icon: Provider icon code (e.g. '10d')
    """

    description: str = Field(DEFAULT_DESCRIPTION, description="Condition text")
    icon: str = Field(DEFAULT_ICON, description="Provider icon code")
