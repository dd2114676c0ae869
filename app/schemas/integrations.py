from pydantic import BaseModel, ConfigDict, Field

class SlackTestMessageIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    channel_id: str = Field(alias="channelId", min_length=1)
    text: str = Field(min_length=1, max_length=3000)

class SlackTestMessageOut(BaseModel):
    sent: bool = True
