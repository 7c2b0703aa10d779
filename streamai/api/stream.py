"""Stream authorization: signed edge URL for internal content, passthrough otherwise."""
from fastapi import APIRouter

from streamai.api.deps import Authorizer, ClientIP, CurrentIdentity
from streamai.models.stream import StreamAuthorizeResponse

router = APIRouter()


@router.get("/authorize/{content_id}", response_model=StreamAuthorizeResponse)
async def authorize_stream(content_id: str, identity: CurrentIdentity, client_ip: ClientIP, authorizer: Authorizer):
    """Return a playback URL the player can fetch directly from the edge tier."""
    grant = await authorizer.authorize(content_id, identity, client_ip)
    return StreamAuthorizeResponse(url=grant.url, transport=grant.transport, expires=grant.expires)
