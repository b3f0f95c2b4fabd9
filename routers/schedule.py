from fastapi import APIRouter, Depends

from models.schemas import ActionResult, PublishScheduleBody, PublishedSchedule
from routers.dependencies import get_schedule_store
from service.published_schedule import PublishedScheduleStore

# Create a router instance
router = APIRouter()


@router.get("/schedule", response_model=PublishedSchedule)
async def get_published_schedule(email: str = "", store: PublishedScheduleStore = Depends(get_schedule_store)):
    """
    Return the tenant's published schedule.

    An unknown tenant or a never-published schedule yields empty content.
    """
    return store.get(email) or PublishedSchedule()


@router.put("/schedule", response_model=ActionResult)
async def publish_schedule(body: PublishScheduleBody, email: str = "",
                           store: PublishedScheduleStore = Depends(get_schedule_store)):
    """Replace the published Markdown document."""
    return store.publish(email, body.content)


@router.delete("/schedule", response_model=ActionResult)
async def delete_published_schedule(email: str = "", store: PublishedScheduleStore = Depends(get_schedule_store)):
    """Empty the published document."""
    return store.delete_all(email)


@router.delete("/schedule/sections", response_model=ActionResult)
async def delete_schedule_section(title: str, email: str = "",
                                  store: PublishedScheduleStore = Depends(get_schedule_store)):
    """
    Remove every "## " section whose text starts with the given title.

    Matching is by prefix: "Math" also removes "Mathematics 101".
    """
    return store.delete_section(email, title)
