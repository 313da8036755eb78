# scripts/seed_data.py
import argparse
import asyncio
import os
import sys
from pathlib import Path

import requests

# Add parent directory to path so we can import designsight modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from designsight.core.logging import logger
from designsight.db import base  # noqa: F401
from designsight.db.session import Base, SessionLocal, engine, generate_id, utcnow
from designsight.models.feedback import Feedback
from designsight.models.project import Project
from designsight.services.analysis import analyze_design
from designsight.services.imaging import process_upload, validate_upload
from designsight.services.storage import get_storage_service
from designsight.services.vision import get_vision_analyzer

DEMO_PROJECT_NAME = "Demo Project"
DEMO_PROJECT_DESCRIPTION = "Sample project for trying out DesignSight"


def download_image(url: str) -> bytes:
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    content_type = response.headers.get("Content-Type", "").split(";")[0].strip()
    validate_upload(response.content, content_type or "image/jpeg")
    return response.content


def add_image(db, project: Project, content: bytes, original_name: str) -> dict:
    """Process, store and attach an image to the project"""
    storage = get_storage_service()
    processed = process_upload(content)
    image_id = generate_id()
    storage_key = f"projects/{project.id}/{image_id}.jpg"
    storage.upload_bytes(storage_key, processed.content, content_type=processed.mime_type,
                         metadata={"original-name": original_name})

    image = {
        "id": image_id,
        "storage_key": storage_key,
        "original_name": original_name,
        "url": storage.generate_signed_url(storage_key),
        "size": processed.size,
        "mime_type": processed.mime_type,
        "width": processed.width,
        "height": processed.height,
        "uploaded_at": utcnow().isoformat(),
    }
    project.images = project.with_image(image)
    db.commit()
    logger.info(f"Uploaded seed image {original_name} ({processed.width}x{processed.height})")
    return image


def run_analysis(db, project: Project, image: dict) -> int:
    storage = get_storage_service()
    content = storage.read_bytes(image["storage_key"])
    analysis = asyncio.run(analyze_design(content, get_vision_analyzer(),
                                          width=image["width"], height=image["height"]))
    for draft in analysis.feedback:
        db.add(Feedback(project_id=project.id, image_id=image["id"], **draft.model_dump(mode="json")))
        db.commit()
    logger.info(analysis.summary)
    return len(analysis.feedback)


def seed_database(image_url: str = None, run_ai: bool = False):
    """Seed the database with a demo project and, optionally, an analyzed image"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        project = db.query(Project).filter(Project.name == DEMO_PROJECT_NAME).first()
        if project:
            logger.info(f"Demo project already exists: {project.id}")
            return

        project = Project(name=DEMO_PROJECT_NAME, description=DEMO_PROJECT_DESCRIPTION, images=[])
        db.add(project)
        db.commit()
        db.refresh(project)
        logger.info(f"Created demo project {project.id}")

        if not image_url:
            return

        image = add_image(db, project, download_image(image_url), os.path.basename(image_url) or "seed.jpg")
        if run_ai:
            count = run_analysis(db, project, image)
            logger.info(f"Stored {count} AI feedback items")
    finally:
        db.close()


def main():
    """Main entry point for the script"""
    parser = argparse.ArgumentParser(description='Seed database for DesignSight API')
    parser.add_argument('--service-url', type=str, help='URL of the API service for testing')
    parser.add_argument('--image-url', type=str, default=os.getenv("SEED_IMAGE_URL"),
                        help='Image to upload into the demo project (default: $SEED_IMAGE_URL)')
    parser.add_argument('--run-ai', action='store_true',
                        default=os.getenv("SEED_RUN_AI", "").lower() == "true",
                        help='Run AI analysis on the seeded image (default: $SEED_RUN_AI)')

    args = parser.parse_args()

    logger.info("Seeding database...")
    seed_database(image_url=args.image_url, run_ai=args.run_ai)
    logger.info("Database seeded successfully.")

    # Test API if service URL provided
    if args.service_url:
        base_url = args.service_url.rstrip('/')

        try:
            response = requests.get(f"{base_url}/health", timeout=10)
            if response.status_code == 200:
                logger.info(f"API health check successful: {response.json()}")
            else:
                logger.error(f"API health check failed: {response.status_code}, {response.text}")
        except requests.RequestException as e:
            logger.error(f"Error accessing API: {str(e)}")


if __name__ == "__main__":
    main()
