from fastapi import APIRouter, Depends, HTTPException
from typing import List

from models.schemas import ActionResult, Subject, SubjectData
from routers.dependencies import get_subject_store
from service.subjects import SubjectStore

# Create a router instance
router = APIRouter()


@router.get("/subjects", response_model=List[Subject])
async def list_subjects(email: str = "", store: SubjectStore = Depends(get_subject_store)):
    return store.list(email)


@router.post("/subjects", response_model=ActionResult)
async def create_subject(data: SubjectData, email: str = "", store: SubjectStore = Depends(get_subject_store)):
    return store.create(email, data)


@router.put("/subjects/{subject_id}", response_model=ActionResult)
async def update_subject(subject_id: str, subject: Subject, email: str = "",
                         store: SubjectStore = Depends(get_subject_store)):
    if subject.id != subject_id:
        raise HTTPException(status_code=400, detail="Subject id in path and body differ.")
    return store.update(email, subject)


@router.delete("/subjects/{subject_id}", response_model=ActionResult)
async def delete_subject(subject_id: str, email: str = "", store: SubjectStore = Depends(get_subject_store)):
    return store.delete(email, subject_id)
