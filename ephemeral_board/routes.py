from fastapi import APIRouter, Depends

from .schemas import ErrorResponse, MessageCreate, MessageResponse
from .services import MessageService

router = APIRouter()
message_service = MessageService()


def get_service() -> MessageService:
    return message_service


@router.get(path="/messages", tags=["API Messages"], response_model=list[MessageResponse])
async def list_messages(service: MessageService = Depends(get_service)):
    return [MessageResponse.from_message(message) for message in service.list_messages()]


@router.post(
    path="/message",
    tags=["API Messages"],
    status_code=201,
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def post_message(
    data: MessageCreate,
    service: MessageService = Depends(get_service)
):
    message = service.post_message(data.username, data.text)
    return MessageResponse.from_message(message)


@router.get("/health")
async def health_check(service: MessageService = Depends(get_service)):
    return service.get_health()
