"""Microsoft Graph change notification payloads."""

from pydantic import BaseModel, ConfigDict, Field

_MESSAGES_SEGMENT = "messages"


class ResourceData(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    odata_type: str | None = Field(default=None, alias="@odata.type")


class ChangeEvent(BaseModel):
    """One entry of a change notification batch."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    change_type: str | None = Field(default=None, alias="changeType")
    resource: str | None = None
    resource_data: ResourceData | None = Field(default=None, alias="resourceData")

    @property
    def resource_message_id(self) -> str | None:
        """Message id from ``resourceData.id`` or a ``.../messages/{id}`` path."""
        if self.resource_data and self.resource_data.id:
            return self.resource_data.id
        if self.resource:
            parts = [p for p in self.resource.split("/") if p]
            if len(parts) >= 2 and parts[-2].lower() == _MESSAGES_SEGMENT:
                return parts[-1]
        return None


class ChangeNotificationBatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: list[ChangeEvent] = Field(default_factory=list)
