"""Messaging API routes."""

from pydantic import BaseModel, ConfigDict, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...models import Activity, ChannelAccount


class ChannelAccountModel(BaseModel):
    """A conversation participant."""

    id: str
    name: str | None = None


class ConversationModel(BaseModel):
    """Conversation reference."""

    id: str


class ActivityRequest(BaseModel):
    """Inbound activity in Bot Framework JSON shape."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    id: str | None = None
    text: str | None = None
    channel_id: str | None = Field(None, alias="channelId")
    from_: ChannelAccountModel = Field(alias="from")
    recipient: ChannelAccountModel
    conversation: ConversationModel
    members_added: list[ChannelAccountModel] = Field(
        default_factory=list, alias="membersAdded"
    )

    def to_activity(self) -> Activity:
        return Activity(
            type=self.type,
            id=self.id,
            text=self.text,
            channel_id=self.channel_id,
            conversation_id=self.conversation.id,
            from_account=ChannelAccount(id=self.from_.id, name=self.from_.name),
            recipient=ChannelAccount(id=self.recipient.id, name=self.recipient.name),
            members_added=[
                ChannelAccount(id=m.id, name=m.name) for m in self.members_added
            ],
        )


class ActivitiesResponse(BaseModel):
    """Replies produced by a turn."""

    activities: list[dict]


def create_messaging_router(app: IApplication) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=ActivitiesResponse)
    async def post_activity(request: ActivityRequest) -> dict:
        """Deliver an activity to the bot and return its replies."""
        try:
            replies = await app.process_activity(request.to_activity())
            return {"activities": [reply.to_activity() for reply in replies]}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
