"""EchoSlam — what's in, what's out."""

from pydantic import BaseModel
from unifai.toolkit import Action, ActionContext, ActionParams, ActionResult


class EchoSlamArgs(BaseModel):
    content: str


class EchoSlam(Action):
    NAME = "echo"
    DESCRIPTION = "Echo the message"
    PAYLOAD = {
        "content": {
            "type": "string",
            "description": "The content to echo.",
            "required": True,
        }
    }
    ARGS = EchoSlamArgs

    async def call(self, ctx: ActionContext, params: ActionParams[EchoSlamArgs]) -> ActionResult[str]:
        output = f'You are agent <${ctx.agent_id}>, you said "{params.payload.content}".'
        return ActionResult(payload=output)
