# designsight/api/endpoints/upload.py
from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from designsight.api.dependencies import find_image_or_404, get_image_or_404, get_project_or_404, get_storage
from designsight.core.errors import BlobNotFoundError
from designsight.core.logging import logger
from designsight.db.session import generate_id, get_db, utcnow
from designsight.schemas.base import ApiResponse
from designsight.schemas.project import ImageUrl, UploadResult
from designsight.services.imaging import ImageValidationError, process_upload, validate_upload
from designsight.services.storage import StorageService

router = APIRouter()

IMAGE_CACHE_CONTROL = "private, max-age=300"


@router.post("/{project_id}", response_model=ApiResponse[UploadResult], status_code=status.HTTP_201_CREATED)
async def upload_image(
    project_id: str,
    image: UploadFile = File(None),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Upload a design image to a project.

    The image is resized to fit inside the configured bounds and stored as JPEG;
    the returned width and height are those of the stored asset.
    """
    if image is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image file provided")

    project = get_project_or_404(db, project_id)

    content = await image.read()
    try:
        validate_upload(content, image.content_type)
        processed = await run_in_threadpool(process_upload, content)
    except ImageValidationError as e:
        logger.bind(project_id=project_id).warning(f"Rejected upload {image.filename}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    image_id = generate_id()
    storage_key = f"projects/{project.id}/{image_id}.jpg"
    await run_in_threadpool(
        storage.upload_bytes,
        storage_key,
        processed.content,
        content_type=processed.mime_type,
        metadata={"original-name": image.filename or ""},
    )

    image_data = {
        "id": image_id,
        "storage_key": storage_key,
        "original_name": image.filename or f"{image_id}.jpg",
        "url": storage.generate_signed_url(storage_key),
        "size": processed.size,
        "mime_type": processed.mime_type,
        "width": processed.width,
        "height": processed.height,
        "uploaded_at": utcnow().isoformat(),
    }

    # Whole-list replace; the project row is persisted with the new image
    project.images = project.with_image(image_data)
    db.commit()
    db.refresh(project)

    logger.bind(project_id=project.id, image_id=image_id).info(
        f"Stored image {image_data['original_name']} ({processed.width}x{processed.height}, {processed.size} bytes)"
    )
    return ApiResponse(data={"image": image_data, "project": project})


@router.get("/image/{image_id}", response_model=ApiResponse[ImageUrl])
def get_image_url(
    image_id: str,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Issue a fresh signed URL for an image
    """
    _, image = find_image_or_404(db, image_id)
    image_url = storage.generate_signed_url(image["storage_key"])
    return ApiResponse(data={"image_url": image_url, "image": {**image, "url": image_url}})


@router.get("/image/{image_id}/file")
def get_image_file(
    image_id: str,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Stream the stored image bytes through the API
    """
    _, image = find_image_or_404(db, image_id)
    try:
        content = storage.read_bytes(image["storage_key"])
    except BlobNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")

    return Response(
        content=content,
        media_type=image.get("mime_type") or "application/octet-stream",
        headers={"Cache-Control": IMAGE_CACHE_CONTROL},
    )


@router.delete("/{project_id}/image/{image_id}", response_model=ApiResponse[None])
def delete_image(
    project_id: str,
    image_id: str,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Remove an image from a project and from storage. Feedback on the image is kept.
    """
    project = get_project_or_404(db, project_id)
    image = get_image_or_404(project, image_id)

    deleted = storage.delete_file(image["storage_key"])
    if not deleted:
        logger.bind(project_id=project_id).warning(f"Storage file not found when deleting image: {image['storage_key']}")

    project.images = project.without_images([image_id])
    db.commit()
    return ApiResponse(message="Image deleted successfully")
