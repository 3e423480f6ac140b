"""Document ingestion routes."""

import asyncio
import logging
import time
from pathlib import Path

import aiosqlite
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse

from ...clients.auth import AuthUser
from ...db.repositories import DocumentRepository
from ...models.document import ALLOWED_EXTENSIONS, Document
from ...models.topics import TOPICS, all_skills
from ..deps import get_db_path, get_settings, get_templates, json_error, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingest", tags=["ingest"])


async def _render(
    request: Request,
    user: AuthUser,
    error: str | None = None,
    success: str | None = None,
    status_code: int = 200,
):
    document_repo = DocumentRepository(get_db_path(request))
    documents = await document_repo.list_for_user(user.id)
    return get_templates(request).TemplateResponse(
        request,
        "ingest.html",
        {
            "topics": TOPICS,
            "skills": all_skills(),
            "documents": documents,
            "allowed_extensions": ",".join(ALLOWED_EXTENSIONS),
            "error": error,
            "success": success,
        },
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
async def ingest_page(request: Request, user: AuthUser = Depends(require_user)):
    """Upload form plus the user's documents."""
    return await _render(request, user)


@router.post("")
async def upload_document(
    request: Request,
    file: UploadFile | None = File(None),
    topics: list[str] = Form([]),
    skills: list[str] = Form([]),
    user: AuthUser = Depends(require_user),
):
    """Store an uploaded document and record its topics and skills."""
    if file is None or not file.filename:
        return await _render(request, user, "Please select a document to upload.", status_code=400)
    if not topics and not skills:
        return await _render(request, user, "Select at least one topic or skill area.", status_code=400)

    ext = Path(file.filename).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        return await _render(request, user, "Please upload a PDF or Word document.", status_code=400)

    relative_path = f"{user.id}/{int(time.time() * 1000)}{ext}"
    target = get_settings(request).documents_dir / relative_path
    try:
        data = await file.read()
        await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(target.write_bytes, data)
    except OSError:
        logger.exception("Storage upload error for user %s", user.id)
        return await _render(request, user, "Failed to upload the document. Try again.", status_code=500)

    document = Document(
        user_id=user.id,
        file_path=relative_path,
        file_url=f"/ingest/documents/{relative_path}",
        topics=topics,
        skills=skills,
    )
    document_repo = DocumentRepository(get_db_path(request))
    try:
        await document_repo.create(document)
    except aiosqlite.Error:
        logger.exception("Error inserting document record for user %s", user.id)
        return await _render(request, user, "Failed to save document metadata. Try again.", status_code=500)

    logger.info("User %s uploaded %s", user.id, relative_path)
    return await _render(request, user, success="Document uploaded successfully!")


@router.get("/documents/{owner_id}/{name}")
async def download_document(
    request: Request,
    owner_id: str,
    name: str,
    user: AuthUser = Depends(require_user),
):
    """Serve one of the user's own documents."""
    documents_dir = get_settings(request).documents_dir
    path = documents_dir / owner_id / name
    if owner_id != user.id or path.parent != documents_dir / user.id or not path.is_file():
        return json_error(404, "Document not found")
    return FileResponse(path, filename=name)
